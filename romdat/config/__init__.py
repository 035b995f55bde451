"""Configuration loading, validation and conversion for romdat."""

from .loader import ConfigError, get_config_value, load_config
from .options import (
    CodecOptions,
    build_codec,
    build_codec_options,
    build_filter,
    build_header,
)
from .validator import ValidationError, validate_config

__all__ = [
    'ConfigError',
    'ValidationError',
    'load_config',
    'get_config_value',
    'validate_config',
    'CodecOptions',
    'build_codec_options',
    'build_header',
    'build_filter',
    'build_codec',
]
