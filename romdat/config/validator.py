"""Configuration validation."""

import logging
from typing import Dict, Any, List

from romdat.items.item_types import ForceMerging

logger = logging.getLogger(__name__)

VALID_FORMATS = [
    'attractmode', 'smdb', 'listrom', 'missfile', 'romcenter',
    'sfv', 'md5', 'sha1', 'sha256', 'sha384', 'sha512',
]

VALID_STATUSES = ['none', 'good', 'baddump', 'nodump', 'verified']

VALID_ITEM_TYPES = ['rom', 'disk', 'biosset', 'release', 'archive', 'sample']

PATTERN_FILTERS = [
    'machine_name', 'machine_description', 'item_name', 'item_type',
    'crc', 'md5', 'sha1', 'sha256', 'sha384', 'sha512',
]

HEADER_FIELDS = [
    'file_name', 'name', 'description', 'author', 'version', 'email',
    'homepage', 'url', 'date', 'comment',
]


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    errors.extend(_validate_dat(config.get('dat', {})))
    errors.extend(_validate_header(config.get('header', {})))
    errors.extend(_validate_filter(config.get('filter', {})))
    errors.extend(_validate_logging(config.get('logging', {})))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _check_bools(section: Dict[str, Any], prefix: str, keys: List[str]) -> List[str]:
    errors = []
    for key in keys:
        if key in section and not isinstance(section[key], bool):
            errors.append(f"{prefix}.{key} must be a boolean")
    return errors


def _check_strings(section: Dict[str, Any], prefix: str, keys: List[str]) -> List[str]:
    errors = []
    for key in keys:
        value = section.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"{prefix}.{key} must be a string")
    return errors


def _validate_dat(section: Dict[str, Any]) -> List[str]:
    """Validate dat section."""
    errors = []

    dat_format = section.get('format', 'listrom')
    if dat_format not in VALID_FORMATS:
        errors.append(f"dat.format must be one of: {', '.join(VALID_FORMATS)}")

    errors.extend(_check_bools(
        section, 'dat', ['ignore_blanks', 'game_name', 'clean', 'remove_unicode']
    ))
    errors.extend(_check_strings(section, 'dat', ['encoding']))

    for key in ('system_id', 'source_id'):
        if key in section:
            value = section[key]
            # bool is a subclass of int
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                errors.append(f"dat.{key} must be a non-negative integer")

    missfile = section.get('missfile', {})
    if missfile is None:
        missfile = {}
    if not isinstance(missfile, dict):
        errors.append("dat.missfile must be a dictionary")
    else:
        errors.extend(_check_strings(
            missfile, 'dat.missfile',
            ['prefix', 'postfix', 'add_extension', 'replace_extension']
        ))
        errors.extend(_check_bools(
            missfile, 'dat.missfile',
            ['quotes', 'use_game', 'remove_extension', 'romba']
        ))

    return errors


def _validate_header(section: Dict[str, Any]) -> List[str]:
    """Validate header section."""
    errors = _check_strings(section, 'header', HEADER_FIELDS)

    if 'force_merging' in section:
        valid = [mode.value for mode in ForceMerging]
        if section['force_merging'] not in valid:
            errors.append(f"header.force_merging must be one of: {', '.join(valid)}")

    return errors


def _validate_pattern_list(value: Any, path: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        return [f"{path} must be a list of strings"]
    return []


def _validate_filter(section: Dict[str, Any]) -> List[str]:
    """Validate filter section."""
    errors = []

    for name in PATTERN_FILTERS + ['status']:
        entry = section.get(name)
        if entry is None:
            continue
        if not isinstance(entry, dict):
            errors.append(f"filter.{name} must be a dictionary with include/exclude lists")
            continue
        for key in ('include', 'exclude'):
            errors.extend(_validate_pattern_list(entry.get(key), f"filter.{name}.{key}"))

    item_types = section.get('item_type') or {}
    if isinstance(item_types, dict):
        for key in ('include', 'exclude'):
            for value in item_types.get(key) or []:
                if isinstance(value, str) and value.lower() not in VALID_ITEM_TYPES:
                    errors.append(
                        f"filter.item_type.{key} entries must be one of: {', '.join(VALID_ITEM_TYPES)}"
                    )

    statuses = section.get('status') or {}
    if isinstance(statuses, dict):
        for key in ('include', 'exclude'):
            for value in statuses.get(key) or []:
                if isinstance(value, str) and value.lower() not in VALID_STATUSES:
                    errors.append(
                        f"filter.status.{key} entries must be one of: {', '.join(VALID_STATUSES)}"
                    )

    size = section.get('size')
    if size is not None:
        if not isinstance(size, dict):
            errors.append("filter.size must be a dictionary")
        else:
            for key in ('exact', 'min', 'max'):
                value = size.get(key)
                if value is None:
                    continue
                if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                    errors.append(f"filter.size.{key} must be a non-negative integer")
            low, high = size.get('min'), size.get('max')
            if isinstance(low, int) and isinstance(high, int) and low > high:
                errors.append("filter.size.min must not exceed filter.size.max")

    errors.extend(_check_bools(section, 'filter', ['include_of_in_game']))

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []

    level = section.get('level', 'INFO')
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
    if level not in valid_levels:
        errors.append(f"logging.level must be one of: {', '.join(valid_levels)}")

    console = section.get('console', True)
    if not isinstance(console, bool):
        errors.append("logging.console must be a boolean")

    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors
