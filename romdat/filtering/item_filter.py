"""
Include/exclude decisions for DAT items.

ItemFilter combines the per-channel answers of its FilterItems: an item
fails when any positive channel says False or any negative channel says
True. Channels without an opinion never decide anything.
"""

import logging
from typing import Dict, List, Optional

from ..items import DatItem, Disk, Hash, ItemStatus, ItemType, Rom
from .filter_item import FilterItem, FlagFilterItem, PatternFilterItem

logger = logging.getLogger(__name__)

SIZE_UNSET = -1

# Item types that pass when no item type criteria are given
DEFAULT_ITEM_TYPES = (ItemType.ROM, ItemType.DISK)


def _either(first: Optional[bool], second: Optional[bool]) -> Optional[bool]:
    """Three-valued OR: True wins, then False, otherwise no opinion."""
    if first is True or second is True:
        return True
    if first is False or second is False:
        return False
    return None


class ItemFilter:
    """
    Attribute filters applied to every item of a DAT.

    Example:
        item_filter = ItemFilter()
        item_filter.machine_name.positive_set.append("pacman")
        item_filter.status.negative = ItemStatus.NODUMP
        kept = item_filter.filter_items(grouped)
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self.log = log or logger

        self.machine_name = PatternFilterItem()
        self.machine_description = PatternFilterItem()
        self.item_name = PatternFilterItem()
        self.item_type = PatternFilterItem()
        self.crc = PatternFilterItem()
        self.md5 = PatternFilterItem()
        self.sha1 = PatternFilterItem()
        self.sha256 = PatternFilterItem()
        self.sha384 = PatternFilterItem()
        self.sha512 = PatternFilterItem()

        self.status: FlagFilterItem[ItemStatus] = FlagFilterItem(
            positive=ItemStatus.NULL,
            negative=ItemStatus.NULL,
            neutral=ItemStatus.NULL
        )
        self.size: FilterItem[int] = FilterItem(
            positive=SIZE_UNSET,
            negative=SIZE_UNSET,
            neutral=SIZE_UNSET
        )
        self.include_of_in_game: FilterItem[bool] = FilterItem(neutral=False)

    def _hash_filters(self) -> Dict[Hash, PatternFilterItem]:
        return {
            Hash.CRC: self.crc,
            Hash.MD5: self.md5,
            Hash.SHA1: self.sha1,
            Hash.SHA256: self.sha256,
            Hash.SHA384: self.sha384,
            Hash.SHA512: self.sha512,
        }

    @staticmethod
    def _set_rejects(filter_item: FilterItem, value) -> bool:
        """Check the positive and negative sets of one attribute."""
        if filter_item.matches_positive_set(value) is False:
            return True
        if filter_item.matches_negative_set(value) is True:
            return True
        return False

    def _machine_rejects(self, item: DatItem) -> bool:
        include_parents = self.include_of_in_game.matches_neutral(False, True) is True

        positive = self.machine_name.matches_positive_set(item.machine_name)
        negative = self.machine_name.matches_negative_set(item.machine_name)
        if include_parents:
            for parent in (item.clone_of, item.rom_of):
                positive = _either(positive, self.machine_name.matches_positive_set(parent))
                negative = _either(negative, self.machine_name.matches_negative_set(parent))

        return positive is False or negative is True

    def _type_rejects(self, item: DatItem) -> bool:
        type_name = item.item_type.value
        if not self.item_type.positive_set and not self.item_type.negative_set:
            return item.item_type not in DEFAULT_ITEM_TYPES
        return self._set_rejects(self.item_type, type_name)

    def _status_rejects(self, item: DatItem) -> bool:
        status = item.status
        if self.status.matches_positive(ItemStatus.NULL, status) is False:
            return True
        if self.status.matches_negative(ItemStatus.NULL, status) is True:
            return True
        if self.status.matches_neutral(ItemStatus.NULL, status) is False:
            return True
        return self._set_rejects(self.status, status)

    def _size_rejects(self, size: int) -> bool:
        if self.size.matches_neutral(SIZE_UNSET, size) is False:
            return True
        if self.size.positive != SIZE_UNSET and size < self.size.positive:
            return True
        if self.size.negative != SIZE_UNSET and size > self.size.negative:
            return True
        return False

    def item_passes(self, item: DatItem) -> bool:
        """
        Decide whether one item is kept.

        Args:
            item: Item to check

        Returns:
            True if no filter rejects the item
        """
        if self._machine_rejects(item):
            return False
        if self._set_rejects(self.machine_description, item.machine_description):
            return False
        if self._set_rejects(self.item_name, item.name):
            return False
        if self._type_rejects(item):
            return False

        for hash_type, filter_item in self._hash_filters().items():
            if not item.has_hash_field(hash_type):
                continue
            if self._set_rejects(filter_item, item.get_hash(hash_type)):
                return False

        if isinstance(item, (Rom, Disk)) and self._status_rejects(item):
            return False

        size = getattr(item, 'size', None)
        if size is not None and self._size_rejects(size):
            return False

        return True

    def filter_items(self, grouped: Dict[str, List[DatItem]]) -> Dict[str, List[DatItem]]:
        """
        Apply the filter to items grouped by machine.

        Machines left without any item are dropped from the result.

        Args:
            grouped: Items keyed by machine name

        Returns:
            New mapping holding only the items that pass
        """
        result: Dict[str, List[DatItem]] = {}
        removed = 0

        for key, items in grouped.items():
            kept = [item for item in items if self.item_passes(item)]
            removed += len(items) - len(kept)
            if kept:
                result[key] = kept

        self.log.debug(
            f"Filter kept {len(result)} of {len(grouped)} machines, removed {removed} items"
        )
        return result
