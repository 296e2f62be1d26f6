"""
Utility functions for hex text conversions.
"""

from typing import List, Optional

HEX_DIGITS = '0123456789ABCDEFabcdef'


def parse_hex_string(hex_str: str) -> Optional[bytes]:
    """
    Parse a hex string into bytes.

    Args:
        hex_str (str): String of hex values (e.g. "FF 00 A5" or "0xff00a5")

    Returns:
        bytes: Parsed bytes or None if invalid
    """

    clean_str = ''.join(hex_str.split())
    if clean_str[:2].lower() == '0x':
        clean_str = clean_str[2:]

    if len(clean_str) % 2 or not all(c in HEX_DIGITS for c in clean_str):
        return None

    return bytes.fromhex(clean_str)


def parse_number(text: str) -> Optional[int]:
    """Parse a decimal or 0x-prefixed hex offset, None if invalid."""

    try:
        return int(text, 0)
    except ValueError:
        return None


def format_offset(offset: int, width: int = 8) -> str:
    """
    Format a byte offset as a hex string.

    Args:
        offset (int): Byte offset to format
        width (int): Number of hex digits to use

    Returns:
        str: Formatted hex string
    """

    return f"{offset:0{width}x}"


def format_bytes(data: bytes) -> str:
    return ' '.join(f"{b:02x}" for b in data)


def hexdump_lines(data: bytes, base_offset: int = 0, bytes_per_line: int = 16) -> List[str]:
    """
    Format bytes as `hexdump -C` style lines.

    Each line holds the offset, the bytes in hex split into two halves and
    the printable ASCII column.

    Args:
        data (bytes): Bytes to format
        base_offset (int): File offset of the first byte
        bytes_per_line (int): Number of bytes on each line

    Returns:
        List[str]: One string per line, ending with the closing offset
    """

    lines = []
    half = bytes_per_line // 2

    for start in range(0, len(data), bytes_per_line):
        row = data[start:start + bytes_per_line]

        left = format_bytes(row[:half])
        right = format_bytes(row[half:])
        hex_width = bytes_per_line * 3
        hex_part = f"{left}  {right}" if right else left

        ascii_str = ''.join(chr(b) if 32 <= b <= 126 else '.' for b in row)

        lines.append(
            f"{format_offset(base_offset + start)}  {hex_part:<{hex_width}}  |{ascii_str}|"
        )

    lines.append(format_offset(base_offset + len(data)))

    return lines
