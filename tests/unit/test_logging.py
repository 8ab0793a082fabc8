"""Tests for readbulk._logging module."""

import logging

import pytest

from readbulk._exceptions import InvalidArgumentError
from readbulk._logging import (
    disable_logging,
    get_logger,
    set_verbosity,
    setup_basic_logging,
)


class TestGetLogger:
    """get_logger() namespace handling."""

    def test_already_namespaced_unchanged(self):
        logger = get_logger("readbulk.merge._columns")
        assert logger.name == "readbulk.merge._columns"

    def test_bare_name_gets_prefixed(self):
        logger = get_logger("mymodule")
        assert logger.name == "readbulk.mymodule"

    def test_dunder_main_becomes_root(self):
        logger = get_logger("__main__")
        assert logger.name == "readbulk"


class TestSetupBasicLogging:
    """setup_basic_logging() configuration."""

    def test_sets_requested_level(self):
        setup_basic_logging(level=logging.WARNING)
        logger = logging.getLogger("readbulk")
        assert logger.level == logging.WARNING

    def test_does_not_duplicate_handlers_on_repeated_calls(self):
        logger = logging.getLogger("readbulk")
        logger.handlers = []

        setup_basic_logging()
        setup_basic_logging()
        setup_basic_logging()

        assert len(logger.handlers) == 1

    def test_repeated_call_updates_handler_level(self):
        logger = logging.getLogger("readbulk")
        logger.handlers = []

        setup_basic_logging(level=logging.INFO)
        setup_basic_logging(level=logging.DEBUG)

        assert logger.handlers[0].level == logging.DEBUG

    def test_disables_propagation(self):
        setup_basic_logging()
        logger = logging.getLogger("readbulk")
        assert logger.propagate is False

class TestDisableLogging:
    """disable_logging()."""

    def test_disable_logging_silences_completely(self):
        disable_logging()
        logger = logging.getLogger("readbulk")
        assert logger.level > logging.CRITICAL

    def test_disabled_logger_drops_progress(self, caplog):
        disable_logging()

        get_logger("readbulk.loader").info("Reading s01.csv")

        assert caplog.records == []


class TestSetVerbosity:
    """set_verbosity() level mapping."""

    @pytest.mark.parametrize(
        "level, expected",
        [(True, logging.INFO), ("info", logging.INFO), ("debug", logging.DEBUG)],
    )
    def test_maps_to_logging_level(self, level, expected):
        set_verbosity(level)

        assert logging.getLogger("readbulk").level == expected

    def test_debug_after_info_reaches_handler(self):
        logger = logging.getLogger("readbulk")
        logger.handlers = []

        set_verbosity(True)
        set_verbosity("debug")

        assert logger.handlers[0].level == logging.DEBUG

    def test_false_disables(self):
        set_verbosity(False)

        assert logging.getLogger("readbulk").level > logging.CRITICAL

    @pytest.mark.parametrize("invalid", [1, 0, "DEBUG", None, ["info"]])
    def test_rejects_unknown_levels(self, invalid):
        with pytest.raises(InvalidArgumentError, match="Invalid verbose level"):
            set_verbosity(invalid)
