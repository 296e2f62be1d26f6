from pathlib import Path

import pytest

from binedit.core.editor import FileEditor

SAMPLE = bytes([0x10, 0x20, 0x30, 0x40, 0x50])


@pytest.fixture
def scratch_dir(tmp_path: Path) -> Path:
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    path = tmp_path / "sample.bin"
    path.write_bytes(SAMPLE)
    return path


@pytest.fixture
def editor(scratch_dir: Path, sample_file: Path):
    editor = FileEditor(temp_dir=scratch_dir)
    assert editor.open(sample_file)
    yield editor
    if editor.is_open:
        editor.close()
