"""
Rendering module for hexdumps and decoded values using Pygments.
"""

from typing import Dict, List, Optional, Union

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers.hexdump import HexdumpLexer

from ..utils.hex_utils import format_offset, hexdump_lines


class HexdumpRenderer:
    """Formats byte windows as text, highlighted for terminals on request."""

    def __init__(self, bytes_per_line: int = 16, color: bool = False) -> None:
        self.bytes_per_line = bytes_per_line
        self.color = color
        self.lexer = HexdumpLexer()
        self.formatter = TerminalFormatter()

    def set_bytes_per_line(self, width: int) -> None:
        """Pick a row width, in whole groups of 8, that fits a terminal width."""

        # 4 columns per byte, 16 for the offset, gaps and ascii bars
        max_bytes = (width - 16) // 4

        self.bytes_per_line = max(8, (max_bytes // 8) * 8)

    def _highlight(self, text: str) -> str:
        if not self.color:
            return text

        return highlight(text, self.lexer, self.formatter)

    def render(self, data: Optional[bytes], base_offset: int = 0) -> str:
        """
        Render a block of bytes as a hexdump.

        Args:
            data: Bytes to show, None when the read failed
            base_offset: File offset of the first byte

        Returns:
            The dump text, ending with a newline
        """

        if data is None:
            return ''

        lines = hexdump_lines(data, base_offset, self.bytes_per_line)

        return self._highlight('\n'.join(lines) + '\n')

    def render_representation(self, values: Dict[str, Union[int, float]],
                              offset: Optional[int] = None) -> str:
        """Render decoded values as an aligned two column table."""

        lines: List[str] = []
        if offset is not None:
            lines.append(f"Offset {format_offset(offset)}")

        label_width = max((len(label) for label in values), default=0)
        for label, value in values.items():
            lines.append(f"{label:>{label_width}}  {value}")

        return '\n'.join(lines) + '\n'
