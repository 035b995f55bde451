"""
Three-channel attribute filters.

Each FilterItem holds a positive, a negative and a neutral criterion,
each as a single value and as a set. The ``matches_*`` methods return
None when the channel has no opinion (criterion unset or set empty),
otherwise True or False. Deciding what to do with the answers is up to
the caller.
"""

import logging
import re
from functools import lru_cache
from typing import Any, Generic, List, Optional, Pattern, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar('T')

# Any of these makes a filter pattern a regex; a plain space does not
_REGEX_CHARS = re.compile(r'[\\*+?|{\[()^$.#\t\n\r\f\v]')


class FilterItem(Generic[T]):
    """Filter over one attribute, compared by equality."""

    def __init__(
        self,
        positive: Optional[T] = None,
        negative: Optional[T] = None,
        neutral: Optional[T] = None
    ):
        self.positive = positive
        self.positive_set: List[T] = []
        self.negative = negative
        self.negative_set: List[T] = []
        self.neutral = neutral
        self.neutral_set: List[T] = []

    def matches_positive(self, default: T, value: T) -> Optional[bool]:
        return self._matches(self.positive, default, value)

    def matches_negative(self, default: T, value: T) -> Optional[bool]:
        return self._matches(self.negative, default, value)

    def matches_neutral(self, default: T, value: T) -> Optional[bool]:
        return self._matches(self.neutral, default, value)

    def matches_positive_set(self, value: T) -> Optional[bool]:
        return self._matches_set(self.positive_set, value)

    def matches_negative_set(self, value: T) -> Optional[bool]:
        return self._matches_set(self.negative_set, value)

    def matches_neutral_set(self, value: T) -> Optional[bool]:
        return self._matches_set(self.neutral_set, value)

    def _matches(self, single: T, default: T, value: T) -> Optional[bool]:
        if single == default:
            return None
        return self._single_matches(single, value)

    def _matches_set(self, values: List[T], value: T) -> Optional[bool]:
        if not values:
            return None
        return any(self._element_matches(straw, value) for straw in values)

    def _single_matches(self, single: T, value: T) -> bool:
        return single == value

    def _element_matches(self, straw: T, needle: T) -> bool:
        return straw == needle


class FlagFilterItem(FilterItem[T]):
    """
    Filter over a bit flag attribute.

    A single criterion matches when all of its bits are set in the value.
    """

    def _single_matches(self, single: T, value: T) -> bool:
        if value is not None and (single & value) == single:
            return True
        return single == value


@lru_cache(maxsize=1024)
def _compile_pattern(pattern: str) -> Pattern:
    """
    Compile a filter pattern.

    Patterns without regex metacharacters (spaces aside) match the whole
    value exactly; anything else is used as a regex as written.
    """
    if _REGEX_CHARS.search(pattern) is None:
        return re.compile(f"^{re.escape(pattern)}$", re.IGNORECASE)

    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        logger.warning(f"Invalid filter pattern '{pattern}' ({e}), matching it literally")
        return re.compile(f"^{re.escape(pattern)}$", re.IGNORECASE)


class PatternFilterItem(FilterItem[str]):
    """Filter over a string attribute; set elements are exact names or regexes."""

    def _element_matches(self, straw: Any, needle: Any) -> bool:
        if not straw or not str(straw).strip() or needle is None:
            return False
        return _compile_pattern(straw).search(needle) is not None
