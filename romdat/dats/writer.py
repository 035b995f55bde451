"""
Sequential DAT writer.

Walks a machine-grouped item mapping in natural key order and lets a
format codec render each piece. Output is flushed after every record so
a partial file survives a later failure.
"""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Set, TextIO, Tuple

from romdat.items.dat_item import DatItem, Disk, Rom
from romdat.items.natural_sort import sort_natural
from .codec import DatCodec

logger = logging.getLogger(__name__)


def group_items(items: Iterable[DatItem]) -> Dict[str, List[DatItem]]:
    """
    Bucket items by machine name, keeping input order inside each bucket.

    Args:
        items: Items in any order

    Returns:
        Dictionary mapping machine name to its items
    """
    grouped: Dict[str, List[DatItem]] = {}
    for item in items:
        grouped.setdefault(item.machine_name or "", []).append(item)
    return grouped


# Fields that must agree for two same-named entries to count as one file
_IDENTITY_FIELDS = {
    Rom: ('size', 'crc', 'md5', 'sha1', 'sha256', 'sha384', 'sha512'),
    Disk: ('md5', 'sha1', 'sha256', 'sha384', 'sha512'),
}

# Hash used to tell renamed entries apart, first present wins
_SUFFIX_FIELDS = {
    Rom: ('crc', 'md5', 'sha1'),
    Disk: ('md5', 'sha1'),
}


def _rename_suffix(item: DatItem) -> str:
    for attr in _SUFFIX_FIELDS[type(item)]:
        value = getattr(item, attr)
        if value and value.strip():
            return value
    return "1"


def resolve_names(items: Iterable[DatItem], log: Optional[logging.Logger] = None) -> List[DatItem]:
    """
    Make ROM and disk names unique within one machine's items.

    Exact duplicates (same type, name, size and hashes) are dropped. An
    entry whose name is already taken is written under
    ``<name>_<crc|md5|sha1|1>``, with ``_1``, ``_2``... appended if that is
    taken too. Renamed entries are copies; the input items are left
    untouched. Other item types pass through as they are.

    Args:
        items: Items of a single machine, in output order
        log: Logger for duplicate reports (default: module logger)

    Returns:
        Items to write, in input order
    """
    log = log or logger
    resolved: List[DatItem] = []
    seen: Set[Tuple] = set()
    taken: Set[str] = set()

    for item in items:
        if item.name is None or type(item) not in _IDENTITY_FIELDS:
            resolved.append(item)
            continue

        fields = _IDENTITY_FIELDS[type(item)]
        identity = (type(item), item.name) + tuple(getattr(item, attr) for attr in fields)
        if identity in seen:
            log.debug(f"Exact duplicate found for '{item.name}'")
            continue
        seen.add(identity)

        if item.name in taken:
            log.debug(f"Name duplicate found for '{item.name}'")
            base = f"{item.name}_{_rename_suffix(item)}"
            name = base
            counter = 1
            while name in taken:
                name = f"{base}_{counter}"
                counter += 1
            item = replace(item, name=name)

        taken.add(item.name)
        resolved.append(item)

    return resolved


class DatWriter:
    """Renders a grouped item set through one codec."""

    def __init__(
        self,
        codec: DatCodec,
        ignore_blanks: bool = False,
        log: Optional[logging.Logger] = None
    ):
        """
        Initialize writer.

        Args:
            codec: Format codec to render with
            ignore_blanks: Suppress ROMs of size 0 or -1
            log: Logger to report skipped items to (default: module logger)
        """
        self.codec = codec
        self.ignore_blanks = ignore_blanks
        self.log = log or logger

    def write_to_file(self, items: Mapping[str, List[DatItem]], output_path: Path) -> bool:
        """
        Write a DAT file.

        Args:
            items: Items grouped by machine name
            output_path: Destination file

        Returns:
            True if the DAT was written, False otherwise
        """
        output_path = Path(output_path)
        self.log.info(f"Opening file for writing: {output_path}")

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            with open(output_path, 'w', encoding='utf-8', newline='') as f:
                return self.write(items, f)
        except OSError as e:
            self.log.error(
                f"File '{output_path}' could not be created for writing! "
                f"Please check to see if the file is writable: {e}"
            )
            return False

    def write(self, items: Mapping[str, List[DatItem]], sink: TextIO) -> bool:
        """
        Write a DAT to an already open text sink.

        Each machine's items go through ``resolve_names`` first, so no
        machine is written with two files of the same name.

        Args:
            items: Items grouped by machine name
            sink: Writable text stream

        Returns:
            True if everything was written, False on an I/O error
        """
        try:
            self.codec.write_header(sink)
            sink.flush()

            last_game: Optional[str] = None
            for key in sort_natural(items.keys()):
                for item in resolve_names(items[key], self.log):
                    if self._write_one(sink, item, last_game):
                        last_game = item.machine_name

            self.log.debug("File written!")
            return True

        except (OSError, ValueError) as e:
            self.log.error(f"Failed to write DAT: {e}")
            return False

    def _write_one(self, sink: TextIO, item: DatItem, last_game: Optional[str]) -> bool:
        """Emit one item and any game brackets before it; False if it was skipped."""
        if item.name is None or item.machine_name is None:
            self.log.warning("Null rom found!")
            return False

        placeholder = isinstance(item, Rom) and item.is_placeholder()
        if placeholder:
            self.log.debug(f"Empty folder found: {item.machine_name}")
            if self.codec.skip_placeholders:
                return False

        new_game = last_game is None or last_game.lower() != item.machine_name.lower()
        if new_game:
            if last_game is not None:
                self.codec.write_end_game(sink)
            self.codec.write_start_game(sink, item)

        if placeholder:
            item.normalize_placeholder()

        if not (self.ignore_blanks and isinstance(item, Rom) and item.is_blank()):
            self.codec.write_item(sink, item)

        sink.flush()
        return True
