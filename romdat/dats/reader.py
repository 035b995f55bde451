"""
Sequential DAT reader.

Feeds decoded lines, in order, through a format codec and prepares the
resulting items (name cleanup, hash normalization, statistics).
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from romdat.items.dat_item import DatItem, Disk, Rom
from romdat.items.hashing import (
    CRC_ZERO,
    HASH_SPECS,
    MD5_ZERO,
    SHA1_ZERO,
    SIZE_ZERO,
    clean_hash_data,
)
from romdat.items.names import clean_game_name, remove_unicode_characters
from romdat.stats.dat_stats import DatStats
from .codec import DatCodec, ParseContext

logger = logging.getLogger(__name__)


class DatReader:
    """
    Drives one codec over the lines of one file.

    Line order matters (codecs keep the current machine between lines),
    so a reader must only be fed from a single thread.
    """

    def __init__(
        self,
        codec: DatCodec,
        context: Optional[ParseContext] = None,
        stats: Optional[DatStats] = None,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize reader.

        Args:
            codec: Format codec to parse with
            context: System/source ids and sanitize flags
            stats: Optional aggregator updated with every accepted item
            log: Logger to report skipped lines to (default: module logger)
        """
        self.codec = codec
        self.context = context or ParseContext()
        self.stats = stats
        self.log = log or logger
        self.items: List[DatItem] = []

    def parse_lines(self, lines: Iterable[str]) -> Iterator[DatItem]:
        """
        Parse lines and yield every accepted item.

        Args:
            lines: Decoded text lines, with or without line endings

        Yields:
            Prepared DatItem objects
        """
        for line in lines:
            item = self.codec.parse_line(line.rstrip('\r\n'), self.context)
            if item is None:
                continue

            item = self.prepare_item(item)
            if item is None:
                continue

            if self.stats is not None:
                self.stats.add_item(item)
            yield item

    def parse_file(self, path: Path, encoding: str = 'utf-8') -> bool:
        """
        Parse a whole file into ``self.items``.

        Args:
            path: DAT file to read
            encoding: Text encoding of the file

        Returns:
            True if the file was read to the end, False if it could not be read
        """
        path = Path(path)
        if not self.context.filename:
            self.context = replace(self.context, filename=str(path))

        self.log.info(f"Parsing DAT: {path.name}")
        before = len(self.items)

        try:
            with open(path, 'r', encoding=encoding, errors='ignore') as f:
                self.items.extend(self.parse_lines(f))
        except OSError as e:
            self.log.error(f"Failed to read DAT '{path}': {e}")
            return False

        self.log.info(f"  - Found {len(self.items) - before} items")
        return True

    def prepare_item(self, item: DatItem) -> Optional[DatItem]:
        """
        Sanitize a freshly parsed item.

        Args:
            item: Item produced by the codec

        Returns:
            The same item, cleaned, or None if it has to be dropped
        """
        filename = self.context.filename or "<input>"

        if not item.name:
            self.log.warning(f"{filename}: Rom with no name found! Skipping...")
            return None

        if self.context.clean:
            item.machine_name = clean_game_name(item.machine_name)

        if self.context.remove_unicode:
            item.name = remove_unicode_characters(item.name)
            item.machine_name = remove_unicode_characters(item.machine_name)
            item.machine_description = remove_unicode_characters(item.machine_description)

        if isinstance(item, Rom):
            self._clean_hashes(item)
            self._complete_empty_rom(item)
        elif isinstance(item, Disk):
            self._clean_hashes(item)

        if not item.machine_name:
            self.log.warning(f"{filename}: '{item.name}' has no machine name! Skipping...")
            return None

        item.system_id = self.context.system_id
        item.source_id = self.context.source_id
        return item

    def _clean_hashes(self, item: DatItem) -> None:
        for spec in HASH_SPECS.values():
            if not hasattr(item, spec.field):
                continue
            cleaned = clean_hash_data(getattr(item, spec.field), spec.length)
            setattr(item, spec.field, cleaned or None)

    def _complete_empty_rom(self, rom: Rom) -> None:
        """Fill in the known values of a zero-byte file when a hash gives it away."""
        if not rom.is_blank():
            return

        if any(getattr(rom, spec.field) == spec.zero for spec in HASH_SPECS.values()):
            self.log.debug(f"{self.context.filename}: zero-byte entry '{rom.name}'")
            rom.size = SIZE_ZERO
            rom.crc = CRC_ZERO
            rom.md5 = MD5_ZERO
            rom.sha1 = SHA1_ZERO
