"""
Binary file editing engine with numeric byte decoding.
"""

from .core import (
    BoundsError,
    ByteSequence,
    EditorError,
    EditorIOError,
    FileEditor,
    PathError,
    StateError
)

__version__ = "0.1.0"

__all__ = [
    'FileEditor',
    'ByteSequence',
    'EditorError',
    'PathError',
    'EditorIOError',
    'StateError',
    'BoundsError'
]
