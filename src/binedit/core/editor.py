"""
File editor module for byte-level editing of files of any size.

Every edit session works on a private scratch copy of the source file.
The copy is only written back when the caller saves, and it is removed
when the session is closed.
"""

import logging
import os
import shutil
import tempfile
from typing import BinaryIO, List, Optional, Union

from .errors import BoundsError, EditorError, EditorIOError, PathError, StateError
from .sequence import ByteSequence, BytesLike

logger = logging.getLogger(__name__)

PathLike = Union[str, 'os.PathLike[str]']


def _report(operation: str, error: Exception) -> None:
    """Log a failed operation, with a traceback for filesystem errors."""

    if isinstance(error, EditorError):
        logger.warning("%s failed: %s", operation, error)
        return

    logger.error("%s failed: %s", operation, error, exc_info=True)


class FileEditor:
    """Edits a file through a scratch copy without loading it into memory."""

    READ_CHUNK_SIZE = 4 * 1024
    FIND_BUFFER_SIZE = 1024 * 1024
    COPY_CHUNK_SIZE = 1024 * 1024

    SCRATCH_PREFIX = '~'
    SCRATCH_SUFFIX = '.tmp'

    def __init__(self, temp_dir: Optional[PathLike] = None,
                 read_chunk_size: Optional[int] = None,
                 find_buffer_size: Optional[int] = None,
                 copy_chunk_size: Optional[int] = None) -> None:
        self.temp_dir = os.fspath(temp_dir) if temp_dir is not None else None
        self.read_chunk_size = read_chunk_size or self.READ_CHUNK_SIZE
        self.find_buffer_size = find_buffer_size or self.FIND_BUFFER_SIZE
        self.copy_chunk_size = copy_chunk_size or self.COPY_CHUNK_SIZE

        self._source_path: Optional[str] = None
        self._scratch_path: Optional[str] = None

    def __enter__(self) -> 'FileEditor':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.is_open:
            self.close()

    @property
    def is_open(self) -> bool:
        return self._scratch_path is not None

    @property
    def source_path(self) -> Optional[str]:
        return self._source_path

    @property
    def scratch_path(self) -> Optional[str]:
        return self._scratch_path

    def _require_open(self) -> str:
        """Get the scratch path, failing when no session is open."""

        if self._scratch_path is None:
            raise StateError("No file is open")

        return self._scratch_path

    @staticmethod
    def _resolve(path: PathLike) -> str:
        """Turn a user supplied path into an absolute path string."""

        try:
            path_str = os.fspath(path)
        except TypeError as e:
            raise PathError(f"Not a path: {path!r}") from e

        if not isinstance(path_str, str) or not path_str:
            raise PathError(f"Invalid path: {path!r}")

        if '\x00' in path_str:
            raise PathError("Path contains a NUL byte")

        return os.path.abspath(path_str)

    @staticmethod
    def _copy_file(source: str, target: str) -> None:
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            raise EditorIOError(f"Cannot copy {source} to {target}: {e}") from e

    @staticmethod
    def _as_bytes(data: BytesLike) -> bytes:
        """Snapshot caller data as bytes before anything touches the file."""

        try:
            return bytes(memoryview(data))
        except TypeError as e:
            raise EditorError(f"Not a bytes-like object: {type(data).__name__}") from e

    def _copy_range(self, source: BinaryIO, target: BinaryIO, count: int) -> None:
        """Copy `count` bytes between the current positions of two files."""

        while count > 0:
            chunk = source.read(min(self.copy_chunk_size, count))
            if not chunk:
                raise EditorIOError(f"Unexpected end of file with {count} bytes left")

            target.write(chunk)
            count -= len(chunk)

    def _write_zeros(self, target: BinaryIO, count: int) -> None:
        zeros = bytes(min(self.copy_chunk_size, count))

        while count > 0:
            written = min(len(zeros), count)
            target.write(zeros[:written])
            count -= written

    def _create_scratch(self, source: str) -> str:
        """Create a uniquely named scratch copy of `source`."""

        try:
            fd, scratch = tempfile.mkstemp(
                prefix=self.SCRATCH_PREFIX,
                suffix=self.SCRATCH_SUFFIX,
                dir=self.temp_dir
            )
        except OSError as e:
            raise EditorIOError(f"Cannot create scratch file: {e}") from e

        os.close(fd)

        try:
            self._copy_file(source, scratch)
        except EditorIOError:
            os.remove(scratch)
            raise

        return scratch

    def open(self, path: PathLike) -> bool:
        """
        Open a file for editing.

        Args:
            path: Path to the source file

        Returns:
            bool: True if the file was opened, False otherwise
        """

        try:
            if self.is_open:
                raise StateError(f"{self._source_path} is already open")

            source = self._resolve(path)
            if not os.path.isfile(source):
                raise PathError(f"Not a regular file: {source}")

            scratch = self._create_scratch(source)

        except (EditorError, OSError) as e:
            _report(f"Opening {path}", e)
            return False

        self._source_path = source
        self._scratch_path = scratch
        logger.debug("Opened %s with scratch copy %s", source, scratch)

        return True

    def close(self) -> bool:
        """
        Close the session and discard the scratch copy without saving.

        Returns:
            bool: True if a session was closed, False if none was open
        """

        try:
            scratch = self._require_open()
        except StateError as e:
            _report("Closing", e)
            return False

        try:
            os.remove(scratch)
        except FileNotFoundError:
            pass
        except OSError as e:
            _report(f"Removing scratch copy {scratch}", e)

        logger.debug("Closed %s", self._source_path)
        self._source_path = None
        self._scratch_path = None

        return True

    def save(self) -> bool:
        """Write the scratch copy back over the source file."""

        try:
            self._copy_file(self._require_open(), self._source_path)
        except (EditorError, OSError) as e:
            _report("Saving", e)
            return False

        logger.debug("Saved %s", self._source_path)
        return True

    def save_as_new_file(self, path: PathLike) -> bool:
        """
        Copy the scratch copy to a new location.

        The source file and the session stay untouched; an existing file at
        `path` is overwritten.

        Args:
            path: Destination path

        Returns:
            bool: True if the copy was written, False otherwise
        """

        try:
            scratch = self._require_open()
            self._copy_file(scratch, self._resolve(path))
        except (EditorError, OSError) as e:
            _report(f"Saving as {path}", e)
            return False

        return True

    def get_file_size(self) -> int:
        """Get the size of the scratch copy, or -1 when nothing is open."""

        if not self.is_open:
            return -1

        try:
            return os.path.getsize(self._scratch_path)
        except OSError as e:
            _report("Reading file size", e)
            return -1

    def read(self, offset: int, count: int) -> Optional[bytes]:
        """
        Read up to `count` bytes starting at `offset`.

        The result is shorter than `count` when the range runs past the end
        of the file.

        Args:
            offset: Position of the first byte
            count: Number of bytes wanted

        Returns:
            bytes: The bytes read, or None if the range is invalid
        """

        try:
            scratch = self._require_open()
            size = os.path.getsize(scratch)

            if offset < 0 or count < 0 or offset >= size:
                raise BoundsError(
                    f"Cannot read {count} bytes at {offset} from {size} bytes"
                )

            count = min(count, size - offset)
            result = bytearray()

            with open(scratch, 'rb') as f:
                f.seek(offset)
                while len(result) < count:
                    chunk = f.read(min(self.read_chunk_size, count - len(result)))
                    if not chunk:
                        break

                    result += chunk

        except (EditorError, OSError) as e:
            _report("Reading", e)
            return None

        return bytes(result)

    def insert(self, offset: int, data: BytesLike) -> bool:
        """
        Overwrite bytes at `offset` with `data`.

        Nothing is shifted. The file only grows when `data` extends past
        the current end of file; a gap before `offset` reads back as zeros.

        Args:
            offset: Position of the first overwritten byte
            data: Replacement bytes

        Returns:
            bool: True if the bytes were written, False otherwise
        """

        try:
            scratch = self._require_open()
            if offset < 0:
                raise BoundsError(f"Negative offset {offset}")

            data = self._as_bytes(data)

            with open(scratch, 'r+b') as f:
                f.seek(offset)
                f.write(data)

        except (EditorError, OSError) as e:
            _report("Insert", e)
            return False

        return True

    def insert_zeros(self, count: int, offset: int) -> bool:
        """Overwrite `count` bytes at `offset` with zeros."""

        try:
            scratch = self._require_open()
            if offset < 0 or count < 0:
                raise BoundsError(f"Cannot zero {count} bytes at {offset}")

            with open(scratch, 'r+b') as f:
                f.seek(offset)
                self._write_zeros(f, count)

        except (EditorError, OSError) as e:
            _report("Insert zeros", e)
            return False

        return True

    def add(self, offset: int, data: BytesLike) -> bool:
        """
        Splice `data` into the file at `offset`.

        Everything from `offset` onwards moves towards the end of the file
        by len(data) bytes. When `offset` lies past the end of the file the
        gap is filled with zeros first.

        Args:
            offset: Position the first added byte will occupy
            data: Bytes to add

        Returns:
            bool: True if the bytes were added, False otherwise
        """

        try:
            scratch = self._require_open()
            if offset < 0:
                raise BoundsError(f"Negative offset {offset}")

            data = self._as_bytes(data)

            with open(scratch, 'r+b') as f, \
                    tempfile.TemporaryFile(dir=self.temp_dir) as staging:
                size = f.seek(0, os.SEEK_END)
                tail = max(0, size - offset)

                f.seek(offset)
                self._copy_range(f, staging, tail)
                staging.seek(0)

                cut = min(offset, size)
                f.truncate(cut)
                f.seek(cut)
                self._write_zeros(f, offset - cut)
                f.write(data)
                self._copy_range(staging, f, tail)

        except (EditorError, OSError) as e:
            _report("Add", e)
            return False

        return True

    def delete(self, offset: int, count: int) -> bool:
        """
        Remove `count` bytes starting at `offset`.

        Bytes after the removed block move towards the start of the file.
        A range running past the end of the file is clamped to it, so an
        offset at or past the end removes nothing.

        Args:
            offset: Position of the first removed byte
            count: Number of bytes to remove

        Returns:
            bool: True if the bytes were removed, False otherwise
        """

        try:
            scratch = self._require_open()
            if offset < 0 or count < 0:
                raise BoundsError(f"Cannot delete {count} bytes at {offset}")

            with open(scratch, 'r+b') as f:
                size = f.seek(0, os.SEEK_END)
                if offset >= size:
                    return True

                count = min(count, size - offset)
                tail = size - offset - count

                with tempfile.TemporaryFile(dir=self.temp_dir) as staging:
                    f.seek(offset + count)
                    self._copy_range(f, staging, tail)
                    staging.seek(0)

                    f.truncate(offset)
                    f.seek(offset)
                    self._copy_range(staging, f, tail)

        except (EditorError, OSError) as e:
            _report("Delete", e)
            return False

        return True

    def find(self, offset: int, pattern: BytesLike) -> int:
        """
        Find the first occurrence of `pattern` at or after `offset`.

        The file is scanned in bounded windows. Consecutive windows overlap
        by len(pattern) - 1 bytes so a match split across two windows is
        still found.

        Args:
            offset: Position to start searching from
            pattern: Exact bytes to look for

        Returns:
            int: Absolute position of the match or -1 if not found
        """

        try:
            scratch = self._require_open()
            pattern = self._as_bytes(pattern)
            if offset < 0 or not pattern:
                return -1

            size = os.path.getsize(scratch)
            window_size = max(2 * len(pattern), self.find_buffer_size)
            step = window_size - (len(pattern) - 1)

            with open(scratch, 'rb') as f:
                while offset < size:
                    f.seek(offset)
                    window = f.read(window_size)

                    position = ByteSequence.find_exact(pattern, window)
                    if position is not None:
                        return offset + position

                    if offset + len(window) >= size:
                        break

                    offset += step

        except (EditorError, OSError) as e:
            _report("Find", e)

        return -1

    def rfind(self, limit: int, pattern: BytesLike) -> int:
        """
        Find the last occurrence of `pattern` starting before `limit`.

        Windows are read backwards from `limit`, overlapping like those of
        find(), so only the part of the file before the match is scanned.

        Args:
            limit: Matches must start strictly before this position
            pattern: Exact bytes to look for

        Returns:
            int: Absolute position of the match or -1 if not found
        """

        try:
            scratch = self._require_open()
            pattern = self._as_bytes(pattern)
            if limit <= 0 or not pattern:
                return -1

            size = os.path.getsize(scratch)
            window_size = max(2 * len(pattern), self.find_buffer_size)
            end = min(limit + len(pattern) - 1, size)

            with open(scratch, 'rb') as f:
                while end >= len(pattern):
                    start = max(0, end - window_size)
                    f.seek(start)
                    window = f.read(end - start)

                    position = ByteSequence.find_last_exact(pattern, window)
                    if position is not None:
                        return start + position

                    if start == 0:
                        break

                    end = start + len(pattern) - 1

        except (EditorError, OSError) as e:
            _report("Reverse find", e)

        return -1

    def find_all(self, offset: int, pattern: BytesLike) -> List[int]:
        """Find every position at or after `offset` where `pattern` starts."""

        positions = []
        position = self.find(offset, pattern)

        while position >= 0:
            positions.append(position)
            position = self.find(position + 1, pattern)

        return positions
