"""
Format codecs for romdat.

Each codec implements the DatCodec hooks for one plain-text DAT
grammar; ``create_codec`` picks one for a DatFormat.
"""

import logging
from enum import Enum
from typing import Optional

from romdat.dats.codec import DatCodec
from romdat.dats.header import DatHeader
from romdat.items.item_types import Hash
from .attract_mode import AttractModeCodec
from .everdrive_smdb import EverdriveSmdbCodec
from .hashfile import HashfileCodec
from .listrom import ListromCodec
from .missfile import MissfileCodec, MissfileOptions
from .romcenter import RomCenterCodec


class DatFormat(Enum):
    """Supported output/input formats."""
    ATTRACT_MODE = "attractmode"
    EVERDRIVE_SMDB = "smdb"
    LISTROM = "listrom"
    MISSFILE = "missfile"
    ROMCENTER = "romcenter"
    SFV = "sfv"
    MD5 = "md5"
    SHA1 = "sha1"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


HASHFILE_FORMATS = {
    DatFormat.SFV: Hash.CRC,
    DatFormat.MD5: Hash.MD5,
    DatFormat.SHA1: Hash.SHA1,
    DatFormat.SHA256: Hash.SHA256,
    DatFormat.SHA384: Hash.SHA384,
    DatFormat.SHA512: Hash.SHA512,
}


def create_codec(
    dat_format: DatFormat,
    header: Optional[DatHeader] = None,
    game_name: bool = False,
    missfile_options: Optional[MissfileOptions] = None,
    log: Optional[logging.Logger] = None
) -> DatCodec:
    """
    Build the codec for a format.

    Args:
        dat_format: Format to read or write
        header: Header shared with the caller (a fresh one if omitted)
        game_name: Prefix item names with their machine (hashfiles)
        missfile_options: Output knobs for missfiles
        log: Logger handed to the codec

    Returns:
        A new codec instance; codecs keep per-file state, so use one per file
    """
    header = header or DatHeader()

    if dat_format in HASHFILE_FORMATS:
        return HashfileCodec(header, HASHFILE_FORMATS[dat_format], game_name=game_name, log=log)
    if dat_format == DatFormat.ATTRACT_MODE:
        return AttractModeCodec(header, log=log)
    if dat_format == DatFormat.EVERDRIVE_SMDB:
        return EverdriveSmdbCodec(header, log=log)
    if dat_format == DatFormat.LISTROM:
        return ListromCodec(header, log=log)
    if dat_format == DatFormat.ROMCENTER:
        return RomCenterCodec(header, log=log)
    if dat_format == DatFormat.MISSFILE:
        return MissfileCodec(header, missfile_options or MissfileOptions(game_name=game_name), log=log)

    raise ValueError(f"Unsupported DAT format: {dat_format}")


__all__ = [
    'DatFormat',
    'HASHFILE_FORMATS',
    'create_codec',
    'AttractModeCodec',
    'EverdriveSmdbCodec',
    'HashfileCodec',
    'ListromCodec',
    'MissfileCodec',
    'MissfileOptions',
    'RomCenterCodec',
]
