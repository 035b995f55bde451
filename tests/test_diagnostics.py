"""Unit tests for logging setup and CollectingLogHandler."""

import logging

import pytest

from romdat.config.loader import ConfigError
from romdat.dats import DatReader
from romdat.diagnostics import CollectingLogHandler, LogEntry, setup_logging
from romdat.formats.listrom import ListromCodec


class TestCollectingLogHandler:
    """Test cases for CollectingLogHandler."""

    @pytest.fixture
    def logger(self):
        """Create a test logger."""
        test_logger = logging.getLogger('test_collecting_log_handler')
        test_logger.handlers.clear()
        test_logger.setLevel(logging.DEBUG)
        return test_logger

    @pytest.mark.unit
    def test_records_entries(self, logger):
        handler = CollectingLogHandler()
        logger.addHandler(handler)

        logger.warning("first")
        logger.error("second")

        entries = handler.entries
        assert [entry.message for entry in entries] == ["first", "second"]
        assert isinstance(entries[0], LogEntry)
        assert entries[0].level_name == "WARNING"
        assert entries[1].logger_name == 'test_collecting_log_handler'

    @pytest.mark.unit
    def test_level_threshold_and_filtering(self, logger):
        handler = CollectingLogHandler(level=logging.WARNING)
        logger.addHandler(handler)

        logger.debug("ignored")
        logger.warning("kept")
        logger.error("also kept")

        assert len(handler.entries) == 2
        assert [e.message for e in handler.entries_at_least(logging.ERROR)] == ["also kept"]

    @pytest.mark.unit
    def test_clear(self, logger):
        handler = CollectingLogHandler()
        logger.addHandler(handler)
        logger.info("something")

        handler.clear()

        assert handler.entries == []

    @pytest.mark.unit
    def test_collects_parse_warnings(self):
        handler = CollectingLogHandler(level=logging.WARNING)
        log = logging.getLogger('test_collecting_parse')
        log.addHandler(handler)
        reader = DatReader(ListromCodec(log=log), log=log)

        list(reader.parse_lines([
            'ROMs required for driver "game".',
            "a.bin                                    1 2 3 4 5 6",
        ]))

        assert len(handler.entries) == 1
        assert "Invalid line detected" in handler.entries[0].message


class TestSetupLogging:
    """Test cases for setup_logging."""

    @pytest.mark.unit
    def test_console_handler_and_level(self, restore_root_logger):
        setup_logging({'logging': {'level': 'DEBUG', 'console': True}})

        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert any(type(h) is logging.StreamHandler for h in root.handlers)

    @pytest.mark.unit
    def test_file_handler_creates_directories(self, tmp_path, restore_root_logger):
        log_file = tmp_path / "logs" / "romdat.log"

        setup_logging({'logging': {'console': False, 'file': str(log_file)}})
        logging.getLogger('romdat.test').info("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert log_file.exists()
        assert "written to file" in log_file.read_text()

    @pytest.mark.unit
    def test_extra_handlers_are_attached(self, restore_root_logger):
        collector = CollectingLogHandler()

        setup_logging({'logging': {'console': False}}, extra_handlers=[collector])
        logging.getLogger('romdat.test').warning("collected")

        assert [entry.message for entry in collector.entries] == ["collected"]

    @pytest.mark.unit
    def test_extra_handler_keeps_its_own_formatter(self, restore_root_logger):
        collector = CollectingLogHandler()
        collector.setFormatter(logging.Formatter('%(levelname)s %(message)s'))

        setup_logging({'logging': {'console': False}}, extra_handlers=[collector])
        logging.getLogger('romdat.test').warning("formatted")

        assert [entry.message for entry in collector.entries] == ["WARNING formatted"]

    @pytest.mark.unit
    def test_unwritable_log_file_raises(self, tmp_path, restore_root_logger):
        blocker = tmp_path / "file"
        blocker.write_text("")

        with pytest.raises(ConfigError, match="Could not create log file"):
            setup_logging({'logging': {'file': str(blocker / "romdat.log")}})
