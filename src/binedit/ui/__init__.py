"""
UI package for presenting editor output in a terminal.

This package implements the text rendering used by the command line front
end, including the HexdumpRenderer for highlighted hexdumps and decoded
value tables.
"""

from .render import HexdumpRenderer

__all__ = ['HexdumpRenderer']
