"""
Running statistics over a DAT's items.

add_item and remove_item are exact inverses and are serialized by a
per-instance lock, so worker threads parsing different files can share
one aggregator. add_stats and reset take no lock; callers must make
sure no add/remove is running at the same time.
"""

import logging
import threading
from dataclasses import dataclass, field, fields
from typing import Optional

from romdat.items.dat_item import DatItem
from romdat.items.item_types import ItemStatus, ItemType

logger = logging.getLogger(__name__)


@dataclass
class DatStats:
    """Counters describing a set of DAT items."""
    # Overall item count
    count: int = 0

    # Per item type
    archive_count: int = 0
    bios_set_count: int = 0
    disk_count: int = 0
    release_count: int = 0
    rom_count: int = 0
    sample_count: int = 0

    # Only filled in by whoever knows how many machines there are
    game_count: int = 0

    total_size: int = 0

    # Items carrying each hash (nodumps excluded)
    crc_count: int = 0
    md5_count: int = 0
    sha1_count: int = 0
    sha256_count: int = 0
    sha384_count: int = 0
    sha512_count: int = 0

    # Per status
    baddump_count: int = 0
    good_count: int = 0
    nodump_count: int = 0
    verified_count: int = 0

    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    _TYPE_COUNTERS = {
        ItemType.ARCHIVE: 'archive_count',
        ItemType.BIOS_SET: 'bios_set_count',
        ItemType.DISK: 'disk_count',
        ItemType.RELEASE: 'release_count',
        ItemType.ROM: 'rom_count',
        ItemType.SAMPLE: 'sample_count',
    }

    _HASH_COUNTERS = {
        'crc': 'crc_count',
        'md5': 'md5_count',
        'sha1': 'sha1_count',
        'sha256': 'sha256_count',
        'sha384': 'sha384_count',
        'sha512': 'sha512_count',
    }

    _STATUS_COUNTERS = {
        ItemStatus.BAD_DUMP: 'baddump_count',
        ItemStatus.GOOD: 'good_count',
        ItemStatus.NODUMP: 'nodump_count',
        ItemStatus.VERIFIED: 'verified_count',
    }

    def add_item(self, item: DatItem) -> None:
        """Count an item in."""
        with self._lock:
            self._apply(item, 1)

    def remove_item(self, item: DatItem) -> None:
        """
        Count an item out.

        The item must have been added before; removing anything else
        leaves the counters wrong.
        """
        with self._lock:
            self._apply(item, -1)

    def add_stats(self, other: 'DatStats') -> None:
        """Merge another aggregator into this one by summing every counter."""
        for name in self._counter_names():
            setattr(self, name, getattr(self, name) + getattr(other, name))

    def reset(self) -> None:
        """Zero every counter."""
        for name in self._counter_names():
            setattr(self, name, 0)

    def _apply(self, item: DatItem, delta: int) -> None:
        self.count += delta

        type_counter = self._TYPE_COUNTERS.get(item.item_type)
        if type_counter:
            setattr(self, type_counter, getattr(self, type_counter) + delta)

        if item.item_type not in (ItemType.ROM, ItemType.DISK):
            return

        if item.status != ItemStatus.NODUMP:
            if item.item_type == ItemType.ROM:
                self.total_size += item.size * delta
            for hash_field, counter in self._HASH_COUNTERS.items():
                value = getattr(item, hash_field, None)
                if value and value.strip():
                    setattr(self, counter, getattr(self, counter) + delta)

        status_counter = self._STATUS_COUNTERS.get(item.status)
        if status_counter:
            setattr(self, status_counter, getattr(self, status_counter) + delta)

    @classmethod
    def _counter_names(cls):
        return [f.name for f in fields(cls) if not f.name.startswith('_')]

    def snapshot(self) -> dict:
        """Plain dictionary of the current counters."""
        return {name: getattr(self, name) for name in self._counter_names()}


def merge_stats(*stats: DatStats, log: Optional[logging.Logger] = None) -> DatStats:
    """Sum several aggregators into a new one."""
    total = DatStats()
    for part in stats:
        total.add_stats(part)
    (log or logger).debug(f"Merged {len(stats)} statistics sets ({total.count} items)")
    return total
