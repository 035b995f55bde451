"""
Missfile codec.

Write-only list of item (or machine) names, typically of what a
collection is missing. Prefix and postfix strings may reference item
fields through ``%game%``, ``%name%``, ``%crc%``, ``%md5%``, ``%sha1%``,
``%sha256%``, ``%sha384%``, ``%sha512%`` and ``%size%``.
"""

import logging
import posixpath
from dataclasses import dataclass
from typing import Optional, TextIO

from romdat.dats.codec import ParseContext
from romdat.dats.header import DatHeader
from romdat.items.dat_item import DatItem, Disk, Rom

logger = logging.getLogger(__name__)

_PLACEHOLDER_FIELDS = ("crc", "md5", "sha1", "sha256", "sha384", "sha512")


@dataclass
class MissfileOptions:
    """Output knobs of a missfile."""
    prefix: str = ""
    postfix: str = ""
    quotes: bool = False
    use_game: bool = False
    add_extension: str = ""
    replace_extension: str = ""
    remove_extension: bool = False
    romba: bool = False
    game_name: bool = False


class MissfileCodec:
    """Codec writing plain name lists."""

    skip_placeholders = True

    def __init__(
        self,
        header: Optional[DatHeader] = None,
        options: Optional[MissfileOptions] = None,
        log: Optional[logging.Logger] = None
    ):
        self.header = header or DatHeader()
        self.options = options or MissfileOptions()
        self.log = log or logger
        self._warned = False

    def parse_line(self, line: str, context: ParseContext) -> Optional[DatItem]:
        # There is no consistent way to read a missfile back
        if not self._warned:
            self.log.warning(f"{context.filename}: missfiles cannot be parsed, ignoring contents")
            self._warned = True
        return None

    def write_header(self, sink: TextIO) -> None:
        pass

    def write_start_game(self, sink: TextIO, item: DatItem) -> None:
        if self.options.use_game and not self.options.romba:
            self._write_line(sink, item, self._item_path(item, item.machine_name))

    def write_end_game(self, sink: TextIO) -> None:
        pass

    def write_item(self, sink: TextIO, item: DatItem) -> None:
        if self.options.romba:
            sha1 = getattr(item, "sha1", None) if isinstance(item, (Rom, Disk)) else None
            # Only items with a SHA-1 have a depot path
            if sha1:
                depot = "/".join([sha1[0:2], sha1[2:4], sha1[4:6], sha1[6:8], f"{sha1}.gz"])
                self._write_line(sink, item, depot)
            return

        if not self.options.use_game:
            self._write_line(sink, item, self._item_path(item, item.name))

    def _item_path(self, item: DatItem, name: str) -> str:
        opts = self.options

        if opts.replace_extension or opts.remove_extension:
            replacement = "" if opts.remove_extension else opts.replace_extension
            directory, filename = posixpath.split(name)
            name = posixpath.join(directory.lstrip('/'), posixpath.splitext(filename)[0] + replacement)
        if opts.add_extension:
            name += opts.add_extension
        if not opts.use_game and opts.game_name:
            name = posixpath.join(item.machine_name, name)

        return name

    def _write_line(self, sink: TextIO, item: DatItem, name: str) -> None:
        quote = '"' if self.options.quotes else ""
        pre = self._expand(self.options.prefix + quote, item)
        post = self._expand(quote + self.options.postfix, item)
        sink.write(f"{pre}{name}{post}\n")

    @staticmethod
    def _expand(template: str, item: DatItem) -> str:
        values = {
            "%game%": item.machine_name or "",
            "%name%": item.name or "",
            "%size%": str(item.size) if isinstance(item, Rom) else "",
        }
        for hash_field in _PLACEHOLDER_FIELDS:
            values[f"%{hash_field}%"] = getattr(item, hash_field, None) or ""

        for placeholder, value in values.items():
            template = template.replace(placeholder, value)
        return template
