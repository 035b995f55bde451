"""
RomCenter codec.

An INI-like file with ``[CREDITS]``, ``[DAT]`` and ``[EMULATOR]``
key=value sections followed by a ``[GAMES]`` section of rows::

    ¬parent¬parent description¬game¬game description¬rom¬crc¬size¬romof¬merge¬

Text fields are HTML-entity encoded.
"""

import html
import logging
from typing import Dict, Optional, TextIO

from romdat.dats.codec import ParseContext
from romdat.dats.header import DatHeader
from romdat.items.dat_item import DatItem, Disk, Rom
from romdat.items.item_types import ForceMerging

logger = logging.getLogger(__name__)

SEPARATOR = "¬"
DAT_VERSION = "2.50"

# section -> {key: header attribute}
HEADER_KEYS: Dict[str, Dict[str, str]] = {
    "credits": {
        "author": "author",
        "version": "version",
        "email": "email",
        "homepage": "homepage",
        "url": "url",
        "date": "date",
        "comment": "comment",
    },
    "emulator": {
        "refname": "name",
        "version": "description",
    },
}


def _parse_size(token: str) -> int:
    try:
        return int(token)
    except ValueError:
        return 0


def _decode(text: str) -> Optional[str]:
    return html.unescape(text) if text else None


def _encode(text: Optional[str]) -> str:
    return html.escape(text) if text else ""


class RomCenterCodec:
    """Codec for RomCenter DATs."""

    skip_placeholders = False

    def __init__(self, header: Optional[DatHeader] = None, log: Optional[logging.Logger] = None):
        self.header = header or DatHeader()
        self.log = log or logger
        self.section = ""

    def parse_line(self, line: str, context: ParseContext) -> Optional[DatItem]:
        stripped = line.strip()
        if not stripped or stripped.startswith(';') or stripped.startswith('//'):
            return None

        if stripped.startswith('[') and stripped.endswith(']'):
            self.section = stripped[1:-1].strip().lower()
            return None

        if self.section == "games":
            return self._parse_game_row(stripped)

        if self.section in ("credits", "dat", "emulator"):
            self._parse_header_value(stripped)

        # Unknown sections are ignored
        return None

    def _parse_header_value(self, line: str) -> None:
        key, sep, value = line.partition('=')
        if not sep:
            self.log.warning(f"Invalid [{self.section.upper()}] line: '{line}'")
            return

        key = key.strip().lower()
        value = value.strip()

        if self.section == "dat":
            # "version" and "plugin" describe the RomCenter format itself
            if self.header.force_merging == ForceMerging.NONE and value == "1":
                if key == "split":
                    self.header.force_merging = ForceMerging.SPLIT
                elif key == "merge":
                    self.header.force_merging = ForceMerging.MERGED
            return

        attribute = HEADER_KEYS[self.section].get(key)
        if attribute:
            self.header.set_if_blank(attribute, value)

    def _parse_game_row(self, line: str) -> Optional[DatItem]:
        if not line.startswith(SEPARATOR):
            return None

        # Some old DATs carry this marker
        if f"{SEPARATOR}N{SEPARATOR}O" in line:
            line = line.replace(f"{SEPARATOR}N{SEPARATOR}O", "") + SEPARATOR * 2

        rominfo = line.split(SEPARATOR)
        if len(rominfo) < 10:
            self.log.warning(f"Invalid game row: '{line}'")
            return None

        return Rom(
            name=_decode(rominfo[5]),
            size=_parse_size(rominfo[7]),
            crc=rominfo[6],
            machine_name=_decode(rominfo[3]),
            machine_description=_decode(rominfo[4]),
            clone_of=_decode(rominfo[1]),
            rom_of=_decode(rominfo[8]),
            merge_tag=_decode(rominfo[9]),
        )

    def write_header(self, sink: TextIO) -> None:
        merging = self.header.force_merging
        lines = [
            "[CREDITS]",
            f"author={self.header.author or ''}",
            f"version={self.header.version or ''}",
            f"comment={self.header.comment or ''}",
            "[DAT]",
            f"version={DAT_VERSION}",
            f"split={'1' if merging == ForceMerging.SPLIT else '0'}",
            f"merge={'1' if merging in (ForceMerging.FULL, ForceMerging.MERGED) else '0'}",
            "[EMULATOR]",
            f"refname={self.header.name or ''}",
            f"version={self.header.description or ''}",
            "[GAMES]",
        ]
        sink.write('\n'.join(lines) + '\n')

    def write_start_game(self, sink: TextIO, item: DatItem) -> None:
        pass

    def write_end_game(self, sink: TextIO) -> None:
        pass

    def write_item(self, sink: TextIO, item: DatItem) -> None:
        if not isinstance(item, (Rom, Disk)):
            return

        crc = item.crc if isinstance(item, Rom) else None
        size = str(item.size) if isinstance(item, Rom) else ""
        description = item.machine_description
        if not description or not description.strip():
            description = item.machine_name

        fields = [
            "",
            _encode(item.clone_of),
            _encode(item.clone_of),
            _encode(item.machine_name),
            _encode(description),
            _encode(item.name),
            crc or "",
            size,
            _encode(item.rom_of),
            _encode(item.merge_tag),
            "",
        ]
        sink.write(SEPARATOR.join(fields) + '\n')
