"""
Core package for byte-level file editing.

This package implements the editing engine. It includes the FileEditor
class for working on a scratch copy of a file, the ByteSequence class for
decoding raw bytes as numbers, and the error types both of them use.
"""

from .editor import FileEditor
from .errors import BoundsError, EditorError, EditorIOError, PathError, StateError
from .sequence import ByteSequence

__all__ = [
    'FileEditor',
    'ByteSequence',
    'EditorError',
    'PathError',
    'EditorIOError',
    'StateError',
    'BoundsError'
]
