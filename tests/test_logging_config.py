import logging

import pytest
from pythonjsonlogger.json import JsonFormatter

from ideaflow.logging_config import LOGGING_CONFIG, configure_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def test_configure_logging_sets_root_level():
    configure_logging("debug")

    assert logging.getLogger().level == logging.DEBUG


def test_configure_logging_installs_json_formatter():
    configure_logging()

    formatters = [h.formatter for h in logging.getLogger().handlers]
    assert any(isinstance(f, JsonFormatter) for f in formatters)


def test_configure_logging_leaves_module_config_untouched():
    configure_logging("WARNING")

    assert LOGGING_CONFIG["root"]["level"] == "INFO"
