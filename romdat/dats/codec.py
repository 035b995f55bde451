"""
Capability interface implemented by every format codec.

A codec turns one line into at most one item and renders the pieces of
an output file (header, game brackets, item rows). The sequential
drivers in ``reader`` and ``writer`` own the loops; codecs only keep the
small amount of state their grammar needs between lines.
"""

from dataclasses import dataclass
from typing import Optional, Protocol, TextIO

from romdat.items.dat_item import DatItem
from .header import DatHeader


@dataclass(frozen=True)
class ParseContext:
    """Per-file settings handed to every parse_line call."""
    filename: str = ""
    system_id: int = 0
    source_id: int = 0
    clean: bool = False
    remove_unicode: bool = False


class DatCodec(Protocol):
    """Parse and write hooks of one DAT format."""

    header: DatHeader

    # Formats that list placeholder entries should not get them at all
    skip_placeholders: bool

    def parse_line(self, line: str, context: ParseContext) -> Optional[DatItem]:
        ...

    def write_header(self, sink: TextIO) -> None:
        ...

    def write_start_game(self, sink: TextIO, item: DatItem) -> None:
        ...

    def write_end_game(self, sink: TextIO) -> None:
        ...

    def write_item(self, sink: TextIO, item: DatItem) -> None:
        ...
