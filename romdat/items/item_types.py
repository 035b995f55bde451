"""Enumerations shared by every DAT item and format."""

from enum import Enum, Flag


class ItemType(Enum):
    """Kinds of entries a DAT machine can own."""
    ROM = "rom"
    DISK = "disk"
    BIOS_SET = "biosset"
    RELEASE = "release"
    ARCHIVE = "archive"
    SAMPLE = "sample"


class ItemStatus(Flag):
    """
    Dump status of a ROM or disk.

    NULL is the "unset" value used by filters; every real item carries
    one of the other members.
    """
    NULL = 0
    NONE = 1
    GOOD = 2
    BAD_DUMP = 4
    NODUMP = 8
    VERIFIED = 16


class Hash(Flag):
    """Hash algorithms a DAT can carry."""
    NONE = 0
    CRC = 1
    MD5 = 2
    SHA1 = 4
    SHA256 = 8
    SHA384 = 16
    SHA512 = 32


class ForceMerging(Enum):
    """Merging mode declared by a DAT header."""
    NONE = "none"
    SPLIT = "split"
    MERGED = "merged"
    NONMERGED = "nonmerged"
    FULL = "full"
