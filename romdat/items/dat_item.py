"""
DAT item data structures.

Every format reads into and writes out of these dataclasses. An item
knows which machine owns it through ``machine_name``; grouping items
by machine is left to the caller.
"""

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Optional

from .hashing import HASH_SPECS, NULL_PLACEHOLDER, SIZE_ZERO
from .item_types import Hash, ItemStatus, ItemType


@dataclass
class DatItem:
    """Fields common to every item type."""
    item_type: ClassVar[ItemType]

    name: Optional[str] = None
    machine_name: Optional[str] = None
    machine_description: Optional[str] = None
    clone_of: Optional[str] = None
    rom_of: Optional[str] = None
    status: ItemStatus = ItemStatus.NONE

    # Descriptive machine fields
    comment: Optional[str] = None
    year: Optional[str] = None
    manufacturer: Optional[str] = None

    # Provenance
    system_id: int = 0
    source_id: int = 0

    def get_hash(self, hash_type: Hash) -> Optional[str]:
        """Return the stored value for one hash algorithm, if the type has it."""
        return getattr(self, HASH_SPECS[hash_type].field, None)

    def has_hash_field(self, hash_type: Hash) -> bool:
        """Check whether this item type carries the given hash at all."""
        return hasattr(self, HASH_SPECS[hash_type].field)


@dataclass
class Rom(DatItem):
    """A single file inside a machine."""
    item_type: ClassVar[ItemType] = ItemType.ROM

    size: int = -1  # -1 = unknown, 0 = legitimately empty
    crc: Optional[str] = None
    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    sha384: Optional[str] = None
    sha512: Optional[str] = None
    merge_tag: Optional[str] = None

    def is_placeholder(self) -> bool:
        """True for the synthetic entry a directory scan emits for an empty folder."""
        return self.size == -1 and self.crc == NULL_PLACEHOLDER

    def is_blank(self) -> bool:
        """True for zero-length or unknown-length files."""
        return self.size in (0, -1)

    def normalize_placeholder(self) -> None:
        """
        Turn an empty-folder placeholder into a finalized zero-byte entry.

        Hash fields holding the literal placeholder become the algorithm's
        empty-file value, all other hash fields are cleared. Running it on
        an already normalized entry changes nothing.
        """
        if not self.is_placeholder():
            return

        if self.name == NULL_PLACEHOLDER:
            self.name = "-"
        self.size = SIZE_ZERO
        for spec in HASH_SPECS.values():
            value = getattr(self, spec.field)
            setattr(self, spec.field, spec.zero if value == NULL_PLACEHOLDER else None)


@dataclass
class Disk(DatItem):
    """A disk image (CHD); carries no size or CRC."""
    item_type: ClassVar[ItemType] = ItemType.DISK

    md5: Optional[str] = None
    sha1: Optional[str] = None
    sha256: Optional[str] = None
    sha384: Optional[str] = None
    sha512: Optional[str] = None
    merge_tag: Optional[str] = None


@dataclass
class BiosSet(DatItem):
    """A BIOS option offered by a machine."""
    item_type: ClassVar[ItemType] = ItemType.BIOS_SET

    description: Optional[str] = None
    default: Optional[bool] = None


@dataclass
class Release(DatItem):
    """A regional release of a machine."""
    item_type: ClassVar[ItemType] = ItemType.RELEASE

    region: Optional[str] = None
    language: Optional[str] = None
    date: Optional[str] = None
    default: Optional[bool] = None


@dataclass
class Archive(DatItem):
    item_type: ClassVar[ItemType] = ItemType.ARCHIVE


@dataclass
class Sample(DatItem):
    item_type: ClassVar[ItemType] = ItemType.SAMPLE


ITEM_CLASSES: Dict[ItemType, type] = {
    cls.item_type: cls
    for cls in (Rom, Disk, BiosSet, Release, Archive, Sample)
}
