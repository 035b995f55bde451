"""Conversion of validated configuration sections into runtime objects."""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from romdat.dats.codec import DatCodec, ParseContext
from romdat.dats.header import DatHeader
from romdat.filtering import ItemFilter
from romdat.formats import DatFormat, create_codec
from romdat.formats.missfile import MissfileOptions
from romdat.items.item_types import ForceMerging, ItemStatus
from .loader import get_config_value

logger = logging.getLogger(__name__)

STATUS_NAMES = {
    'none': ItemStatus.NONE,
    'good': ItemStatus.GOOD,
    'baddump': ItemStatus.BAD_DUMP,
    'nodump': ItemStatus.NODUMP,
    'verified': ItemStatus.VERIFIED,
}


@dataclass
class CodecOptions:
    """Settings from the ``dat`` section."""
    dat_format: DatFormat = DatFormat.LISTROM
    ignore_blanks: bool = False
    game_name: bool = False
    clean: bool = False
    remove_unicode: bool = False
    system_id: int = 0
    source_id: int = 0
    encoding: str = 'utf-8'
    missfile: MissfileOptions = field(default_factory=MissfileOptions)

    def parse_context(self, filename: str = "") -> ParseContext:
        """Build the per-file parse settings for one input."""
        return ParseContext(
            filename=filename,
            system_id=self.system_id,
            source_id=self.source_id,
            clean=self.clean,
            remove_unicode=self.remove_unicode
        )


def build_codec_options(config: Dict[str, Any]) -> CodecOptions:
    """
    Read the ``dat`` section.

    Args:
        config: Validated configuration dictionary

    Returns:
        CodecOptions with defaults for every missing key
    """
    section = config.get('dat') or {}
    missfile = section.get('missfile') or {}
    game_name = section.get('game_name', False)

    return CodecOptions(
        dat_format=DatFormat(section.get('format', 'listrom')),
        ignore_blanks=section.get('ignore_blanks', False),
        game_name=game_name,
        clean=section.get('clean', False),
        remove_unicode=section.get('remove_unicode', False),
        system_id=section.get('system_id', 0),
        source_id=section.get('source_id', 0),
        encoding=section.get('encoding') or 'utf-8',
        missfile=MissfileOptions(
            prefix=missfile.get('prefix') or "",
            postfix=missfile.get('postfix') or "",
            quotes=missfile.get('quotes', False),
            use_game=missfile.get('use_game', False),
            add_extension=missfile.get('add_extension') or "",
            replace_extension=missfile.get('replace_extension') or "",
            remove_extension=missfile.get('remove_extension', False),
            romba=missfile.get('romba', False),
            game_name=game_name
        )
    )


def build_header(config: Dict[str, Any]) -> DatHeader:
    """Read the ``header`` section into a DatHeader."""
    section = config.get('header') or {}

    header = DatHeader(
        file_name=section.get('file_name') or "",
        name=section.get('name'),
        description=section.get('description'),
        author=section.get('author'),
        version=section.get('version'),
        email=section.get('email'),
        homepage=section.get('homepage'),
        url=section.get('url'),
        date=section.get('date'),
        comment=section.get('comment'),
        force_merging=ForceMerging(section.get('force_merging', 'none'))
    )
    return header


def build_filter(config: Dict[str, Any], log: Optional[logging.Logger] = None) -> ItemFilter:
    """
    Read the ``filter`` section into an ItemFilter.

    Every pattern attribute takes ``include`` (positive set) and
    ``exclude`` (negative set) lists. ``size`` takes ``exact``, ``min``
    and ``max``.
    """
    item_filter = ItemFilter(log=log)

    for name in ('machine_name', 'machine_description', 'item_name', 'item_type',
                 'crc', 'md5', 'sha1', 'sha256', 'sha384', 'sha512'):
        filter_item = getattr(item_filter, name)
        include = get_config_value(config, f'filter.{name}.include') or []
        exclude = get_config_value(config, f'filter.{name}.exclude') or []
        if name == 'item_type':
            include = [value.lower() for value in include]
            exclude = [value.lower() for value in exclude]
        filter_item.positive_set.extend(include)
        filter_item.negative_set.extend(exclude)

    for value in get_config_value(config, 'filter.status.include') or []:
        item_filter.status.positive_set.append(STATUS_NAMES[value.lower()])
    for value in get_config_value(config, 'filter.status.exclude') or []:
        item_filter.status.negative_set.append(STATUS_NAMES[value.lower()])

    size = get_config_value(config, 'filter.size') or {}
    if size.get('exact') is not None:
        item_filter.size.neutral = size['exact']
    if size.get('min') is not None:
        item_filter.size.positive = size['min']
    if size.get('max') is not None:
        item_filter.size.negative = size['max']

    item_filter.include_of_in_game.neutral = get_config_value(
        config, 'filter.include_of_in_game', False
    )

    return item_filter


def build_codec(
    config: Dict[str, Any],
    header: Optional[DatHeader] = None,
    log: Optional[logging.Logger] = None
) -> DatCodec:
    """Build the codec selected by the ``dat`` section."""
    options = build_codec_options(config)
    if header is None:
        header = build_header(config)

    logger.debug(f"Using {options.dat_format.value} codec")
    return create_codec(
        options.dat_format,
        header=header,
        game_name=options.game_name,
        missfile_options=options.missfile,
        log=log
    )
