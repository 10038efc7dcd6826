import io
import json
import logging

import pytest
import structlog

from basicbundles.logging import LOGGER_NAME, configure_from_settings, configure_logging
from basicbundles.settings import BundleSettings


@pytest.fixture(autouse=True)
def restore_logging():
    package_logger = logging.getLogger(LOGGER_NAME)
    handlers, level, propagate = list(package_logger.handlers), package_logger.level, package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
    structlog.reset_defaults()


def test_reconfiguring_replaces_the_package_handler():
    configure_logging("debug", json_output=True)
    configure_logging("warning")

    package_logger = logging.getLogger(LOGGER_NAME)
    assert len(package_logger.handlers) == 1
    assert isinstance(package_logger.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)
    assert package_logger.level == logging.WARNING
    assert not package_logger.propagate


def test_unknown_level_name_means_info():
    configure_logging("chatty")

    assert logging.getLogger(LOGGER_NAME).level == logging.INFO


def test_json_events_are_tagged_with_the_package():
    stream = io.StringIO()
    configure_logging("info", json_output=True, stream=stream)

    structlog.get_logger("basicbundles.repository").info("repository built", resources=3)
    structlog.get_logger("basicbundles.repository").debug("flavor loaded")

    (line,) = stream.getvalue().splitlines()
    event = json.loads(line)
    assert event["event"] == "repository built"
    assert event["resources"] == 3
    assert event["package"] == "basicbundles"
    assert event["level"] == "info"


def test_configure_from_settings(capsys):
    configure_from_settings(BundleSettings(log_level="INFO", json_logs=True))

    structlog.get_logger("basicbundles.test").info("hello", answer=42)

    err = capsys.readouterr().err
    assert '"event": "hello"' in err
    assert '"answer": 42' in err
