"""
Utility package for hex text handling and searching.
"""

from .hex_utils import (
    parse_hex_string,
    parse_number,
    format_offset,
    format_bytes,
    hexdump_lines
)
from .search import SearchEngine, SearchResult

__all__ = [
    'parse_hex_string',
    'parse_number',
    'format_offset',
    'format_bytes',
    'hexdump_lines',
    'SearchEngine',
    'SearchResult'
]
