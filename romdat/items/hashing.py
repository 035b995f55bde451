"""Hash constants and hash string cleanup for DAT items."""

import re
from typing import Dict, NamedTuple, Optional

from .item_types import Hash


class HashSpec(NamedTuple):
    """Attribute name, hex length and empty-file value of one algorithm."""
    field: str
    length: int
    zero: str


CRC_LENGTH = 8
MD5_LENGTH = 32
SHA1_LENGTH = 40
SHA256_LENGTH = 64
SHA384_LENGTH = 96
SHA512_LENGTH = 128

SIZE_ZERO = 0
CRC_ZERO = "00000000"
MD5_ZERO = "d41d8cd98f00b204e9800998ecf8427e"
SHA1_ZERO = "da39a3ee5e6b4b0d3255bfef95601890afd80709"
SHA256_ZERO = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
SHA384_ZERO = (
    "38b060a751ac96384cd9327eb1b1e36a21fdb71114be07434c0cc7bf63f6e1da"
    "274edebfe76f65fbd51ad2f14898b95b"
)
SHA512_ZERO = (
    "cf83e1357eefb8bdf1542850d66d8007d620e4050b5715dc83f4a921d36ce9ce"
    "47d0d13c5d85f2b0ff8318d2877eec2f63b931bd47417a81a538327af927da3e"
)

# Placeholder hash value written by directory scans for empty folders
NULL_PLACEHOLDER = "null"

HASH_SPECS: Dict[Hash, HashSpec] = {
    Hash.CRC: HashSpec("crc", CRC_LENGTH, CRC_ZERO),
    Hash.MD5: HashSpec("md5", MD5_LENGTH, MD5_ZERO),
    Hash.SHA1: HashSpec("sha1", SHA1_LENGTH, SHA1_ZERO),
    Hash.SHA256: HashSpec("sha256", SHA256_LENGTH, SHA256_ZERO),
    Hash.SHA384: HashSpec("sha384", SHA384_LENGTH, SHA384_ZERO),
    Hash.SHA512: HashSpec("sha512", SHA512_LENGTH, SHA512_ZERO),
}

_HEX_RE = re.compile(r'^[0-9a-f]+$')


def clean_hash_data(hash_value: Optional[str], length: int) -> str:
    """
    Normalize a hash string to lowercase hex of an exact length.

    Args:
        hash_value: Raw hash text (may carry a 0x prefix or be short)
        length: Expected number of hex digits

    Returns:
        Cleaned hash, or an empty string if the input is blank or invalid
    """
    if not hash_value or not hash_value.strip() or hash_value in ('-', '_'):
        return ""

    hash_value = hash_value.strip().replace("0x", "")
    if not hash_value:
        return ""

    # Short hashes lost their leading zeros somewhere along the way
    if len(hash_value) < length:
        hash_value = hash_value.rjust(length, '0')
    elif len(hash_value) > length:
        return ""

    hash_value = hash_value.lower()
    if not _HEX_RE.match(hash_value):
        return ""

    return hash_value


def clean_listrom_hash_data(hash_value: str) -> str:
    """
    Strip the CRC(...) / SHA1(...) wrapper used by MAME listroms output.

    Args:
        hash_value: Token such as "CRC(8e68533e)"

    Returns:
        Lowercase hash digits, or the token unchanged if it has no wrapper
    """
    if hash_value.startswith("CRC"):
        return hash_value[4:4 + CRC_LENGTH].lower()
    if hash_value.startswith("SHA1"):
        return hash_value[5:5 + SHA1_LENGTH].lower()
    return hash_value


def hash_spec_for(hash_type: Hash) -> HashSpec:
    """Look up the HashSpec of a single hash algorithm."""
    try:
        return HASH_SPECS[hash_type]
    except KeyError:
        raise ValueError(f"Unsupported hash algorithm: {hash_type}")
