"""
AttractMode romlist codec.

One semicolon separated row per machine, 17 columns, under a fixed
``#Title;Name;...`` header line. The format lists machines only, so
each row is read as a single placeholder ROM named "-".
"""

import logging
from typing import Optional, TextIO

from romdat.dats.codec import ParseContext
from romdat.dats.header import DatHeader
from romdat.items.dat_item import DatItem, Rom
from romdat.items.hashing import CRC_ZERO, MD5_ZERO, SHA1_ZERO, SIZE_ZERO

logger = logging.getLogger(__name__)

HEADERS = [
    "#Title",
    "Name",
    "Emulator",
    "CloneOf",
    "Year",
    "Manufacturer",
    "Category",
    "Players",
    "Rotation",
    "Control",
    "Status",
    "DisplayCount",
    "DisplayType",
    "AltRomname",
    "AltTitle",
    "Extra",
    "Buttons",
]

COLUMN_COUNT = len(HEADERS)


class AttractModeCodec:
    """Codec for AttractMode romlists."""

    skip_placeholders = False

    def __init__(self, header: Optional[DatHeader] = None, log: Optional[logging.Logger] = None):
        self.header = header or DatHeader()
        self.log = log or logger
        self._row_pending = False

    def parse_line(self, line: str, context: ParseContext) -> Optional[DatItem]:
        if not line.strip() or line.startswith('#'):
            return None

        gameinfo = line.split(';')
        if len(gameinfo) < COLUMN_COUNT:
            self.log.warning(
                f"Expected {COLUMN_COUNT} columns, found {len(gameinfo)}: '{line}'"
            )
            return None

        return Rom(
            name="-",
            size=SIZE_ZERO,
            crc=CRC_ZERO,
            md5=MD5_ZERO,
            sha1=SHA1_ZERO,
            machine_name=gameinfo[0],
            machine_description=gameinfo[1],
            clone_of=gameinfo[3] or None,
            year=gameinfo[4] or None,
            manufacturer=gameinfo[5] or None,
            comment=gameinfo[15] or None,
        )

    def write_header(self, sink: TextIO) -> None:
        sink.write(';'.join(HEADERS) + '\n')

    def write_start_game(self, sink: TextIO, item: DatItem) -> None:
        # The row goes out with the first item the writer keeps
        self._row_pending = True

    def write_end_game(self, sink: TextIO) -> None:
        pass

    def write_item(self, sink: TextIO, item: DatItem) -> None:
        if not self._row_pending:
            return
        self._row_pending = False

        machine = item.machine_name.lstrip('/\\')
        fields = [
            machine,
            item.machine_description or "",
            self.header.file_name,
            item.clone_of or "",
            item.year or "",
            item.manufacturer or "",
            "",  # Category
            "",  # Players
            "",  # Rotation
            "",  # Control
            "",  # Status
            "",  # DisplayCount
            "",  # DisplayType
            "",  # AltRomname
            "",  # AltTitle
            item.comment or "",
            "",  # Buttons
        ]
        sink.write(';'.join(fields) + '\n')
