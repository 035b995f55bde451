"""
Hashfile codec (SFV, .md5, .sha1, .sha256, .sha384, .sha512).

A hashfile declares exactly one algorithm. SFV lines read
``name crc``; every other algorithm uses ``hash *name`` where the
``*`` marks binary mode.
"""

import logging
import os
from typing import Optional, TextIO, Tuple

from romdat.dats.codec import ParseContext
from romdat.dats.header import DatHeader
from romdat.items.dat_item import DatItem, Disk, Rom
from romdat.items.hashing import clean_hash_data, hash_spec_for
from romdat.items.item_types import Hash

logger = logging.getLogger(__name__)


class HashfileCodec:
    """Codec for single-algorithm checksum files."""

    skip_placeholders = False

    def __init__(
        self,
        header: Optional[DatHeader] = None,
        hash_type: Hash = Hash.CRC,
        game_name: bool = False,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize codec.

        Args:
            header: DAT header (only used for its file name)
            hash_type: The one algorithm this file carries
            game_name: Prefix written names with their machine name
            log: Logger for skipped lines
        """
        self.header = header or DatHeader()
        self.hash_type = hash_type
        self.spec = hash_spec_for(hash_type)
        self.game_name = game_name
        self.log = log or logger

    @property
    def name_first(self) -> bool:
        return self.hash_type == Hash.CRC

    def parse_line(self, line: str, context: ParseContext) -> Optional[DatItem]:
        line = line.strip()
        if not line or line.startswith(';'):
            return None

        split = self._split(line)
        if split is None:
            self.log.warning(f"Possibly malformed line: '{line}'")
            return None

        name, hash_value = split
        rom = Rom(
            name=name,
            size=-1,
            machine_name=os.path.splitext(os.path.basename(context.filename))[0],
        )
        setattr(rom, self.spec.field, hash_value)
        return rom

    def _split(self, line: str) -> Optional[Tuple[str, str]]:
        """
        Separate name and hash, trying the declared layout first.

        Returns:
            (name, cleaned hash) or None if neither layout yields a valid hash
        """
        head, _, tail = line.partition(' ')
        rest, _, last = line.rpartition(' ')
        if not tail:
            return None

        name_first = (rest.strip(), last)
        hash_first = (tail.strip(), head)
        layouts = [name_first, hash_first] if self.name_first else [hash_first, name_first]

        for name, hash_value in layouts:
            cleaned = clean_hash_data(hash_value, self.spec.length)
            name = name.lstrip('*')
            if cleaned and name:
                return name, cleaned

        return None

    def write_header(self, sink: TextIO) -> None:
        pass

    def write_start_game(self, sink: TextIO, item: DatItem) -> None:
        pass

    def write_end_game(self, sink: TextIO) -> None:
        pass

    def write_item(self, sink: TextIO, item: DatItem) -> None:
        if not isinstance(item, (Rom, Disk)):
            return
        # Disks carry no CRC
        if isinstance(item, Disk) and self.name_first:
            return

        name = item.name or ""
        if self.game_name:
            name = f"{item.machine_name}/{name}"
        hash_value = getattr(item, self.spec.field) or ""

        if not name and not hash_value:
            return

        if self.name_first:
            sink.write(f"{name} {hash_value}\n")
        else:
            sink.write(f"{hash_value} *{name}\n")
