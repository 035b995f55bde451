"""
Shared fixtures for config module tests.
"""
import pytest


@pytest.fixture
def valid_config():
    """Complete valid configuration."""
    return {
        'dat': {
            'format': 'listrom',
            'ignore_blanks': True,
            'game_name': False,
            'clean': True,
            'remove_unicode': False,
            'system_id': 1,
            'source_id': 2,
            'encoding': 'latin-1',
            'missfile': {
                'prefix': '%game%/',
                'postfix': '',
                'quotes': False,
                'use_game': False,
                'add_extension': '.zip',
                'romba': False,
            },
        },
        'header': {
            'file_name': 'mame',
            'name': 'MAME',
            'description': 'MAME 0.250',
            'author': 'romdat',
            'force_merging': 'split',
        },
        'filter': {
            'machine_name': {'include': ['pac.*'], 'exclude': ['puckman']},
            'item_type': {'include': ['Rom', 'disk']},
            'crc': {'exclude': ['00000000']},
            'status': {'exclude': ['nodump']},
            'size': {'min': 1, 'max': 65536},
            'include_of_in_game': True,
        },
        'logging': {
            'level': 'DEBUG',
            'console': True,
            'file': None,
        },
    }
