"""
DAT reading and writing drivers for romdat.

Handles the line-by-line parse loop, item preparation and the ordered
emission loop shared by every format codec.
"""

from .header import DatHeader
from .codec import DatCodec, ParseContext
from .reader import DatReader
from .writer import DatWriter, group_items, resolve_names

__all__ = [
    'DatHeader',
    'DatCodec',
    'ParseContext',
    'DatReader',
    'DatWriter',
    'group_items',
    'resolve_names',
]
