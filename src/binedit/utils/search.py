"""
Search functionality for the file editor.
"""

import logging
from typing import List, Optional, Tuple

from ..core.editor import FileEditor
from .hex_utils import parse_hex_string

logger = logging.getLogger(__name__)

SEARCH_TYPES = ('hex', 'text')


class SearchResult:
    """Represents a search result with position and match information."""

    def __init__(self, position: int, length: int, match: bytes):
        self.position = position
        self.length = length
        self.match = match

    def __repr__(self) -> str:
        return f"SearchResult(position={self.position}, length={self.length})"


class SearchEngine:
    """Handles hex and text searches in the file open in an editor."""

    def __init__(self, editor: FileEditor, encoding: str = 'utf-8') -> None:
        self.editor = editor
        self.encoding = encoding
        self.last_search: Optional[Tuple[str, str]] = None
        self.last_result: Optional[SearchResult] = None

    def _to_bytes(self, pattern: str, search_type: str) -> Optional[bytes]:
        """Convert a user pattern to the bytes to look for."""

        if search_type not in SEARCH_TYPES:
            raise ValueError(f"Unknown search type: {search_type}")

        if search_type == 'hex':
            return parse_hex_string(pattern)

        return pattern.encode(self.encoding)

    def _find_bytes(self, needle: Optional[bytes], start_pos: int) -> Optional[SearchResult]:
        if not needle:
            return None

        pos = self.editor.find(start_pos, needle)
        if pos < 0:
            return None

        return SearchResult(pos, len(needle), needle)

    def find_hex(self, pattern: str, start_pos: int = 0) -> Optional[SearchResult]:
        """Search for a hex pattern such as "DE AD BE EF"."""

        needle = parse_hex_string(pattern)
        if needle is None:
            logger.warning("Invalid hex pattern: %r", pattern)

        return self._find_bytes(needle, start_pos)

    def find_text(self, text: str, start_pos: int = 0,
                  encoding: Optional[str] = None) -> Optional[SearchResult]:
        """Search for the encoded bytes of a text string (engine encoding by default)."""

        return self._find_bytes(text.encode(encoding or self.encoding), start_pos)

    def find_next(self, pattern: str, search_type: str = 'hex',
                  start_pos: Optional[int] = None) -> Optional[SearchResult]:
        """
        Find the next occurrence of a pattern.

        Args:
            pattern (str): The pattern to search for
            search_type (str): One of 'hex' or 'text'
            start_pos (int): Position to start searching from (defaults to
                             one byte past the previous match)

        Returns:
            Optional[SearchResult]: The search result if found
        """

        if not pattern:
            return None

        needle = self._to_bytes(pattern, search_type)

        if start_pos is None:
            start_pos = 0
            if self.last_result and self.last_search == (pattern, search_type):
                start_pos = self.last_result.position + 1

        self.last_search = (pattern, search_type)
        self.last_result = self._find_bytes(needle, start_pos)

        return self.last_result

    def find_previous(self) -> Optional[SearchResult]:
        """Find the last match of the previous search before its result."""

        if not self.last_search or not self.last_result:
            return None

        pattern, search_type = self.last_search
        needle = self._to_bytes(pattern, search_type)

        if not needle:
            return None

        pos = self.editor.rfind(self.last_result.position, needle)
        if pos < 0:
            return None

        self.last_result = SearchResult(pos, len(needle), needle)

        return self.last_result

    def replace_next(self, pattern: str, replacement: str,
                     search_type: str = 'hex', start_pos: int = 0) -> Optional[SearchResult]:
        """
        Replace the next occurrence of a pattern.

        Replacements of the same length overwrite in place; anything else
        splices, so the rest of the file moves.

        Args:
            pattern (str): Pattern to search for
            replacement (str): Replacement in the same notation as the pattern
            search_type (str): Type of search ('hex' or 'text')
            start_pos (int): Position to start searching from

        Returns:
            Optional[SearchResult]: The replaced match, or None if nothing
                                    was replaced
        """

        replacement_bytes = self._to_bytes(replacement, search_type)
        if replacement_bytes is None:
            return None

        result = self._find_bytes(self._to_bytes(pattern, search_type), start_pos)
        if not result:
            return None

        if len(replacement_bytes) == result.length:
            done = self.editor.insert(result.position, replacement_bytes)
        else:
            done = (self.editor.delete(result.position, result.length)
                    and self.editor.add(result.position, replacement_bytes))

        if not done:
            logger.error("Replacing match at %d failed", result.position)
            return None

        return SearchResult(result.position, len(replacement_bytes), replacement_bytes)

    def replace_all(self, pattern: str, replacement: str, search_type: str = 'hex') -> int:
        """
        Replace all occurrences of a pattern.

        Args:
            pattern (str): Pattern to search for
            replacement (str): Replacement in the same notation as the pattern
            search_type (str): Type of search ('hex' or 'text')

        Returns:
            int: Number of replacements made
        """

        count = 0
        pos = 0

        while True:
            result = self.replace_next(pattern, replacement, search_type, pos)
            if not result:
                break

            count += 1
            pos = result.position + result.length

        return count

    def find_all(self, pattern: str, search_type: str = 'hex',
                 start_pos: int = 0) -> List[SearchResult]:
        """
        Find all occurrences of a pattern.

        Args:
            pattern (str): The pattern to search for
            search_type (str): One of 'hex' or 'text'
            start_pos (int): Position to start searching from

        Returns:
            List[SearchResult]: All search results found
        """

        if not pattern:
            return []

        needle = self._to_bytes(pattern, search_type)
        if not needle:
            return []

        self.last_search = (pattern, search_type)

        return [SearchResult(pos, len(needle), needle)
                for pos in self.editor.find_all(start_pos, needle)]
