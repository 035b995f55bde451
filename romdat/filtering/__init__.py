"""Positive/negative/neutral attribute filtering for DAT items."""

from .filter_item import FilterItem, FlagFilterItem, PatternFilterItem
from .item_filter import DEFAULT_ITEM_TYPES, SIZE_UNSET, ItemFilter

__all__ = [
    'FilterItem',
    'FlagFilterItem',
    'PatternFilterItem',
    'ItemFilter',
    'DEFAULT_ITEM_TYPES',
    'SIZE_UNSET',
]
