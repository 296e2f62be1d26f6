"""
Exception types raised inside the editing engine.

The public FileEditor operations catch these and report failure through
their return values; ByteSequence raises them directly to its callers.
"""


class EditorError(Exception):
    """Base class for all editing engine errors."""


class PathError(EditorError):
    """A path is empty, malformed or does not name a regular file."""


class EditorIOError(EditorError):
    """The underlying filesystem failed to read, write, copy or truncate."""


class StateError(EditorError):
    """An operation does not fit the current session state."""


class BoundsError(EditorError, IndexError):
    """An offset, count or index falls outside the permitted range."""
