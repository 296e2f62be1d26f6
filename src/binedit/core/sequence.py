"""
Byte sequence module for decoding raw bytes as numbers.
"""

import struct
from typing import Dict, Optional, Union

from .errors import BoundsError

BytesLike = Union[bytes, bytearray, memoryview]


class ByteSequence:
    """Immutable little-endian view over a block of bytes."""

    REPRESENTATIONS = (
        ('Signed 8 bit', 'as_signed8'),
        ('Unsigned 8 bit', 'as_unsigned8'),
        ('Signed 16 bit', 'as_signed16'),
        ('Unsigned 16 bit', 'as_unsigned16'),
        ('Signed 32 bit', 'as_signed32'),
        ('Unsigned 32 bit', 'as_unsigned32'),
        ('Signed 64 bit', 'as_signed64'),
        ('Unsigned 64 bit', 'as_unsigned64'),
        ('Float 32 bit', 'as_float32'),
        ('Double 64 bit', 'as_float64'),
    )

    __slots__ = ('_data',)

    def __init__(self, data: BytesLike = b'') -> None:
        self._data = bytes(data)

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return self._data

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteSequence):
            return NotImplemented

        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"ByteSequence({self._data!r})"

    def length(self) -> int:
        """Get the number of bytes in the sequence."""

        return len(self._data)

    def byte_at(self, index: int) -> int:
        """Get the raw byte value (0..255) at the given index."""

        if not 0 <= index < len(self._data):
            raise BoundsError(f"Index {index} outside [0, {len(self._data)})")

        return self._data[index]

    def _window(self, start: int, width: int) -> bytes:
        """
        Get `width` bytes starting at `start`, clamped to what remains.

        Bytes missing past the end of the sequence are returned as zeros,
        so the clamped read behaves as if the high-order bytes were zero.

        Args:
            start: Index of the least significant byte
            width: Nominal width in bytes

        Returns:
            bytes: Exactly `width` bytes in little-endian order
        """

        if not 0 <= start < len(self._data):
            raise BoundsError(f"Start {start} outside [0, {len(self._data)})")

        end = min(start + width, len(self._data))
        window = self._data[start:end]

        return window + bytes(width - len(window))

    def as_unsigned8(self, start: int) -> int:
        return self.byte_at(start)

    def as_signed8(self, start: int) -> int:
        return struct.unpack('<b', self._window(start, 1))[0]

    def as_unsigned16(self, start: int) -> int:
        return struct.unpack('<H', self._window(start, 2))[0]

    def as_signed16(self, start: int) -> int:
        return struct.unpack('<h', self._window(start, 2))[0]

    def as_unsigned32(self, start: int) -> int:
        return struct.unpack('<I', self._window(start, 4))[0]

    def as_signed32(self, start: int) -> int:
        return struct.unpack('<i', self._window(start, 4))[0]

    def as_unsigned64(self, start: int) -> int:
        return struct.unpack('<Q', self._window(start, 8))[0]

    def as_signed64(self, start: int) -> int:
        return struct.unpack('<q', self._window(start, 8))[0]

    def as_float32(self, start: int) -> float:
        """Reinterpret 4 little-endian bytes as an IEEE-754 single."""

        return struct.unpack('<f', self._window(start, 4))[0]

    def as_float64(self, start: int) -> float:
        """Reinterpret 8 little-endian bytes as an IEEE-754 double."""

        return struct.unpack('<d', self._window(start, 8))[0]

    def as_big_integer(self, byte_count: int) -> int:
        """
        Interpret the leading bytes as one non-negative integer.

        The first `byte_count` bytes are reversed into big-endian order,
        so the byte at index 0 is the least significant.

        Args:
            byte_count: Number of leading bytes to use

        Returns:
            int: The decoded non-negative integer
        """

        if not 0 <= byte_count <= len(self._data):
            raise BoundsError(
                f"Byte count {byte_count} outside [0, {len(self._data)}]"
            )

        return int.from_bytes(self._data[:byte_count], 'little', signed=False)

    def represent(self, start: int = 0) -> Dict[str, Union[int, float]]:
        """
        Decode the bytes at `start` in every supported representation.

        Args:
            start: Index to decode from

        Returns:
            Dict[str, Union[int, float]]: Label to value, in display order
        """

        return {label: getattr(self, method)(start)
                for label, method in self.REPRESENTATIONS}

    @staticmethod
    def find_exact(pattern: BytesLike, haystack: BytesLike) -> Optional[int]:
        """
        Find the first position where `pattern` occurs in `haystack`.

        Args:
            pattern: Bytes to look for
            haystack: Bytes to search in

        Returns:
            int: Index of the first exact match or None if not found
        """

        if len(pattern) > len(haystack):
            return None

        position = bytes(haystack).find(bytes(pattern))
        if position < 0:
            return None

        return position

    @staticmethod
    def find_last_exact(pattern: BytesLike, haystack: BytesLike) -> Optional[int]:
        """Find the last position where `pattern` occurs in `haystack`."""

        if len(pattern) > len(haystack):
            return None

        position = bytes(haystack).rfind(bytes(pattern))
        if position < 0:
            return None

        return position
