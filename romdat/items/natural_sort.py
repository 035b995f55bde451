"""
Natural-order sorting of machine keys.

Keys are split into alternating text and digit runs; digit runs compare
by value, text runs compare case-insensitively, and keys that only
differ in case fall back to ordinal comparison.
"""

import re
from functools import cmp_to_key
from typing import Iterable, List

_DIGIT_RUN_RE = re.compile(r'([0-9]+)')


def _split_runs(key: str) -> List[str]:
    return [part for part in _DIGIT_RUN_RE.split(key.lower()) if part]


def _ordinal(left: str, right: str) -> int:
    return (left > right) - (left < right)


def _compare_part(left: str, right: str) -> int:
    if left.isdigit() and right.isdigit():
        left_value, right_value = int(left), int(right)
        if left_value == right_value:
            # "01" sorts after "1"
            return len(left) - len(right)
        return _ordinal(left_value, right_value)
    return _ordinal(left, right)


def natural_compare(left: str, right: str) -> int:
    """
    Compare two keys in natural order.

    Returns:
        Negative, zero or positive like a classic cmp function
    """
    if left.lower() == right.lower():
        return _ordinal(left, right)

    left_parts = _split_runs(left)
    right_parts = _split_runs(right)

    for left_part, right_part in zip(left_parts, right_parts):
        if left_part != right_part:
            return _compare_part(left_part, right_part)

    if len(left_parts) != len(right_parts):
        return len(left_parts) - len(right_parts)

    return _ordinal(left, right)


natural_key = cmp_to_key(natural_compare)


def sort_natural(keys: Iterable[str]) -> List[str]:
    """Return keys in natural order; equal keys keep their input order."""
    return sorted(keys, key=natural_key)
