"""Tests for logging setup."""

import logging

import pytest
from rich.logging import RichHandler

from fscache.config.schema import CacheConfig
from fscache.log import setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    @pytest.mark.parametrize(
        ("verbosity", "expected"),
        [(0, logging.WARNING), (1, logging.INFO), (2, logging.DEBUG), (5, logging.DEBUG)],
    )
    def test_verbosity_levels(self, verbosity, expected):
        setup_logging(verbosity)
        assert logging.getLogger().level == expected

    def test_uses_rich_handler(self):
        setup_logging()
        assert any(isinstance(h, RichHandler) for h in logging.getLogger().handlers)

    def test_level_name_wins(self):
        setup_logging(verbosity=2, level="error")
        assert logging.getLogger().level == logging.ERROR

    def test_level_from_config(self):
        setup_logging(config=CacheConfig(log_level="info"))
        assert logging.getLogger().level == logging.INFO

    def test_config_beats_verbosity_and_level_beats_config(self):
        config = CacheConfig(log_level="error")
        setup_logging(verbosity=2, config=config)
        assert logging.getLogger().level == logging.ERROR
        setup_logging(level="debug", config=config)
        assert logging.getLogger().level == logging.DEBUG
