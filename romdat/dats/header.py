"""DAT-level metadata shared by the readers and writers."""

from dataclasses import dataclass
from typing import Optional

from romdat.items.item_types import ForceMerging


@dataclass
class DatHeader:
    """
    Descriptive header of a DAT.

    Only some formats carry a header; the rest ignore it or use
    ``file_name`` alone.
    """
    file_name: str = ""
    name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None
    version: Optional[str] = None
    email: Optional[str] = None
    homepage: Optional[str] = None
    url: Optional[str] = None
    date: Optional[str] = None
    comment: Optional[str] = None
    force_merging: ForceMerging = ForceMerging.NONE

    def set_if_blank(self, attribute: str, value: Optional[str]) -> None:
        """Assign a field only when it holds no data yet (first value wins)."""
        current = getattr(self, attribute)
        if current is None or not str(current).strip():
            setattr(self, attribute, value)
