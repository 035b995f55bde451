"""
Everdrive SMDB codec.

Tab separated, five columns per line::

    sha256  machine/name  sha1  md5  crc32
"""

import logging
from typing import Optional, TextIO

from romdat.dats.codec import ParseContext
from romdat.dats.header import DatHeader
from romdat.items.dat_item import DatItem, Rom

logger = logging.getLogger(__name__)

COLUMN_COUNT = 5


class EverdriveSmdbCodec:
    """Codec for Everdrive SMDB checksum databases."""

    skip_placeholders = False

    def __init__(self, header: Optional[DatHeader] = None, log: Optional[logging.Logger] = None):
        self.header = header or DatHeader()
        self.log = log or logger

    def parse_line(self, line: str, context: ParseContext) -> Optional[DatItem]:
        if not line.strip():
            return None

        columns = line.split('\t')
        if len(columns) < COLUMN_COUNT:
            self.log.warning(f"Invalid line detected: '{line}'")
            return None

        machine, _, name = columns[1].partition('/')
        if not name:
            self.log.warning(f"No machine folder in path: '{columns[1]}'")
            return None

        return Rom(
            name=name,
            size=-1,  # Not provided, but must not read as an empty file
            sha256=columns[0],
            sha1=columns[2],
            md5=columns[3],
            crc=columns[4].strip(),
            machine_name=machine,
            machine_description=machine,
        )

    def write_header(self, sink: TextIO) -> None:
        pass

    def write_start_game(self, sink: TextIO, item: DatItem) -> None:
        pass

    def write_end_game(self, sink: TextIO) -> None:
        pass

    def write_item(self, sink: TextIO, item: DatItem) -> None:
        if not isinstance(item, Rom):
            return

        machine = item.machine_name.lstrip('/\\')
        fields = [
            item.sha256 or "",
            f"{machine}/{item.name}",
            item.sha1 or "",
            item.md5 or "",
            item.crc or "",
        ]
        sink.write('\t'.join(fields) + '\n')
