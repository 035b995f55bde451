"""
Logging setup and log capture.

Codecs never raise on bad input; they log and move on. ``setup_logging``
wires those messages to the console and an optional file, and
``CollectingLogHandler`` keeps them in memory so a caller can list what
went wrong during a parse or write.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from romdat.config.loader import ConfigError


@dataclass
class LogEntry:
    """One captured log record."""
    level: int
    logger_name: str
    message: str
    timestamp: datetime

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.level)


class CollectingLogHandler(logging.Handler):
    """Log handler that keeps every record it sees as a LogEntry.

    Example:
        >>> handler = CollectingLogHandler(level=logging.WARNING)
        >>> logging.getLogger('romdat').addHandler(handler)
        >>> reader.parse_file('mame.lst')
        >>> [entry.message for entry in handler.entries]
    """

    def __init__(self, level: int = logging.NOTSET):
        super().__init__(level)
        self._entries: List[LogEntry] = []
        self._entries_lock = threading.Lock()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            entry = LogEntry(
                level=record.levelno,
                logger_name=record.name,
                message=self.format(record),
                timestamp=datetime.fromtimestamp(record.created)
            )
            with self._entries_lock:
                self._entries.append(entry)
        except Exception:
            self.handleError(record)

    @property
    def entries(self) -> List[LogEntry]:
        """Copy of the captured entries, oldest first."""
        with self._entries_lock:
            return list(self._entries)

    def entries_at_least(self, level: int) -> List[LogEntry]:
        return [entry for entry in self.entries if entry.level >= level]

    def clear(self) -> None:
        with self._entries_lock:
            self._entries.clear()


def setup_logging(config: Dict[str, Any], extra_handlers: Optional[List[logging.Handler]] = None) -> None:
    """
    Setup logging configuration from config.

    Args:
        config: Configuration dictionary
        extra_handlers: Additional handlers (e.g. a CollectingLogHandler)
            attached to the root logger next to the configured ones

    Raises:
        ConfigError: If the log file cannot be created
    """
    logging_config = config.get('logging', {})

    level_str = logging_config.get('level', 'INFO').upper()
    level = getattr(logging, level_str, logging.INFO)

    handlers = []

    if logging_config.get('console', True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        formatter = logging.Formatter('%(levelname)s: %(message)s')
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    log_file = logging_config.get('file')
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setLevel(level)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except OSError as e:
            raise ConfigError(f"Could not create log file '{log_file}': {e}")

    for handler in extra_handlers or []:
        # Extra handlers without a formatter of their own get the bare message
        if handler.formatter is None:
            handler.setFormatter(logging.Formatter('%(message)s'))
        handlers.append(handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )
