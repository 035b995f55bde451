"""
Shared pytest fixtures and utilities for the romdat test suite.
"""

import logging
from pathlib import Path
from typing import Dict, Any, Callable, Optional

import pytest
import yaml

from romdat.dats import ParseContext


@pytest.fixture
def project_root() -> Path:
    """
    Repository root path for locating fixtures and sample data.
    """
    return Path(__file__).resolve().parent.parent


@pytest.fixture
def data_dir(project_root: Path) -> Path:
    """
    Path to shared static test fixtures (sample DATs in every format).
    """
    return project_root / "tests" / "data"


@pytest.fixture
def context() -> ParseContext:
    """
    Parse context for an input file called "mame.dat".
    """
    return ParseContext(filename="mame.dat")


@pytest.fixture
def make_config(tmp_path: Path) -> Callable[[Optional[Dict[str, Any]]], Path]:
    """
    Create a minimal romdat.yaml in a temp directory.

    Usage:
        path = make_config({"dat": {"format": "sfv"}})
    """

    def _builder(overrides: Optional[Dict[str, Any]] = None) -> Path:
        base = {
            "dat": {"format": "listrom"},
            "header": {"name": "Test DAT"},
            "logging": {"level": "INFO", "console": False},
        }
        if overrides:
            base = merge_dicts(base, overrides)

        cfg_path = tmp_path / "romdat.yaml"
        cfg_path.write_text(yaml.safe_dump(base))
        return cfg_path

    return _builder


def merge_dicts(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Shallow+deep merge helper for fixture config dictionaries.
    """
    result: Dict[str, Any] = dict(base)
    for key, value in override.items():
        if (
            key in result
            and isinstance(result[key], dict)
            and isinstance(value, dict)
        ):
            result[key] = merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


@pytest.fixture
def restore_root_logger():
    """Drop the handlers setup_logging installs and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield root
    for handler in list(root.handlers):
        # Leave pytest's own capture handlers alone
        if not type(handler).__module__.startswith('_pytest'):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
