"""
DAT item model for romdat.

Defines the item dataclasses, status/hash enumerations, hash cleanup
helpers and the natural-order key sorter shared by every format.
"""

from .item_types import ItemType, ItemStatus, Hash, ForceMerging
from .dat_item import DatItem, Rom, Disk, BiosSet, Release, Archive, Sample, ITEM_CLASSES
from .hashing import HASH_SPECS, clean_hash_data, clean_listrom_hash_data
from .natural_sort import natural_compare, sort_natural

__all__ = [
    'ItemType',
    'ItemStatus',
    'Hash',
    'ForceMerging',
    'DatItem',
    'Rom',
    'Disk',
    'BiosSet',
    'Release',
    'Archive',
    'Sample',
    'ITEM_CLASSES',
    'HASH_SPECS',
    'clean_hash_data',
    'clean_listrom_hash_data',
    'natural_compare',
    'sort_natural',
]
