"""
MAME listroms codec.

Each machine block looks like::

    ROMs required for driver "005".
    Name                                   Size Checksum
    1346b.cpu-u25                          2048 CRC(8e68533e) SHA1(a257c556d31691068ed5c991f1fb2b51da4826db)
    6331.sound-u8                            32 BAD CRC(1d298cb0) SHA1(bb0bb62365402543e3154b9a77be9c75010e6abc) BAD_DUMP
    16v8h-blue.u24                          279 NO GOOD DUMP KNOWN

The name column is separated from the rest by a run of four spaces
(three as a fallback), so names containing such runs are misread.
"""

import logging
import re
from typing import List, Optional, TextIO

from romdat.dats.codec import ParseContext
from romdat.dats.header import DatHeader
from romdat.items.dat_item import DatItem, Disk, Rom
from romdat.items.hashing import clean_listrom_hash_data
from romdat.items.item_types import ItemStatus

logger = logging.getLogger(__name__)

HEADER_LINE = "Name                                   Size Checksum"
NAME_WIDTH = 43
NAME_GAP = " " * 10

_GAME_START_RE = re.compile(r'^ROMs required for (?:\S+ )?"(.*?)"\.')


def _parse_size(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        return 0


class ListromCodec:
    """Codec for ``mame -listroms`` output."""

    skip_placeholders = False

    def __init__(self, header: Optional[DatHeader] = None, log: Optional[logging.Logger] = None):
        self.header = header or DatHeader()
        self.log = log or logger
        self.current_machine = ""

    def parse_line(self, line: str, context: ParseContext) -> Optional[DatItem]:
        line = line.strip()

        if not line or line == HEADER_LINE:
            return None

        if line.startswith("ROMs required for"):
            match = _GAME_START_RE.match(line)
            if match:
                self.current_machine = match.group(1)
            else:
                self.log.warning(f"Unreadable machine line: '{line}'")
            return None

        # Devices and the like
        if line.startswith("No ROMs required for"):
            return None

        return self._parse_row(line)

    def _split_name(self, line: str) -> List[str]:
        split = [part for part in line.split("    ") if part]
        if len(split) == 1:
            split = [part for part in line.split("   ") if part]
        if len(split) == 1:
            self.log.warning(f"Possibly malformed line: '{line}'")
        return split

    def _parse_row(self, line: str) -> Optional[DatItem]:
        romname = self._split_name(line)[0]
        rest = line[len(romname):]
        tokens = rest.split()
        machine = self.current_machine

        # Disk: sha1
        if len(tokens) == 1:
            return Disk(
                name=romname,
                sha1=clean_listrom_hash_data(tokens[0]),
                machine_name=machine,
            )

        # Bad dump disk: BAD sha1 BAD_DUMP
        if len(tokens) == 3 and rest.endswith("BAD_DUMP"):
            return Disk(
                name=romname,
                sha1=clean_listrom_hash_data(tokens[1]),
                status=ItemStatus.BAD_DUMP,
                machine_name=machine,
            )

        # Rom: size crc sha1
        if len(tokens) == 3:
            return Rom(
                name=romname,
                size=_parse_size(tokens[0]),
                crc=clean_listrom_hash_data(tokens[1]),
                sha1=clean_listrom_hash_data(tokens[2]),
                machine_name=machine,
            )

        # No dump disk: NO GOOD DUMP KNOWN
        if len(tokens) == 4 and rest.endswith("NO GOOD DUMP KNOWN"):
            return Disk(
                name=romname,
                status=ItemStatus.NODUMP,
                machine_name=machine,
            )

        # Bad dump rom: size BAD crc sha1 BAD_DUMP
        if len(tokens) == 5 and rest.endswith("BAD_DUMP"):
            return Rom(
                name=romname,
                size=_parse_size(tokens[0]),
                crc=clean_listrom_hash_data(tokens[2]),
                sha1=clean_listrom_hash_data(tokens[3]),
                status=ItemStatus.BAD_DUMP,
                machine_name=machine,
            )

        # No dump rom: size NO GOOD DUMP KNOWN; the size of a file nobody has is not kept
        if len(tokens) == 5 and rest.endswith("NO GOOD DUMP KNOWN"):
            return Rom(
                name=romname,
                size=-1,
                status=ItemStatus.NODUMP,
                machine_name=machine,
            )

        self.log.warning(f"Invalid line detected: '{romname} {rest}'")
        return None

    def write_header(self, sink: TextIO) -> None:
        pass

    def write_start_game(self, sink: TextIO, item: DatItem) -> None:
        machine = item.machine_name.lstrip('/\\')
        sink.write(f"ROMs required for driver \"{machine}\".\n{HEADER_LINE}\n")

    def write_end_game(self, sink: TextIO) -> None:
        sink.write("\n")

    def write_item(self, sink: TextIO, item: DatItem) -> None:
        if isinstance(item, Disk):
            sink.write(self._disk_row(item))
        elif isinstance(item, Rom):
            sink.write(self._rom_row(item))
        # Archives, BIOS sets, releases and samples have no listroms row

    @staticmethod
    def _pad(name: str, width: int) -> str:
        if len(name) < width:
            return name.ljust(width)
        return name + NAME_GAP

    def _disk_row(self, disk: Disk) -> str:
        row = self._pad(disk.name, NAME_WIDTH)
        if disk.status == ItemStatus.BAD_DUMP:
            row += " BAD"
        if disk.status == ItemStatus.NODUMP:
            row += " NO GOOD DUMP KNOWN"
        else:
            row += f" SHA1({disk.sha1 or ''})"
        if disk.status == ItemStatus.BAD_DUMP:
            row += " BAD_DUMP"
        return row + "\n"

    def _rom_row(self, rom: Rom) -> str:
        nodump = rom.status == ItemStatus.NODUMP
        size = "" if nodump and rom.size < 0 else str(rom.size)

        row = self._pad(rom.name, NAME_WIDTH - len(size)) + size
        if rom.status == ItemStatus.BAD_DUMP:
            row += " BAD"
        if nodump:
            row += " NO GOOD DUMP KNOWN"
        else:
            row += f" CRC({rom.crc or ''}) SHA1({rom.sha1 or ''})"
        if rom.status == ItemStatus.BAD_DUMP:
            row += " BAD_DUMP"
        return row + "\n"
