"""
structlog setup for the ``basicbundles`` logger namespace.

Build, declaration and serving events are emitted through
``structlog.get_logger(__name__)`` in each module. Hosts that already configure
structlog can ignore this module; the others call :func:`configure_from_settings`
once at start-up.
"""

import logging
import sys
from typing import Optional, TextIO

import structlog

from basicbundles.settings import BundleSettings

__all__ = ["LOGGER_NAME", "configure_logging", "configure_from_settings"]

LOGGER_NAME = "basicbundles"


def _tag_package(logger, method_name: str, event_dict: dict) -> dict:
    event_dict.setdefault("package", LOGGER_NAME)
    return event_dict


def configure_logging(level: str = "INFO", json_output: bool = False, stream: Optional[TextIO] = None) -> None:
    """
    Route ``basicbundles`` events to a single stream handler.

    Calling this again replaces the handler installed by the previous call.
    Loggers outside the ``basicbundles`` namespace are left alone.

    Args:
        level: Level name for the ``basicbundles`` logger; unknown names mean INFO.
        json_output: Render one JSON object per line instead of the console format.
        stream: Where to write; defaults to ``sys.stderr`` at call time.
    """
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            _tag_package,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
    )

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    package_logger = logging.getLogger(LOGGER_NAME)
    package_logger.handlers = [handler]
    numeric_level = logging.getLevelName(level.upper())
    package_logger.setLevel(numeric_level if isinstance(numeric_level, int) else logging.INFO)
    package_logger.propagate = False


def configure_from_settings(settings: BundleSettings) -> None:
    """Apply ``log_level`` and ``json_logs`` from *settings*."""
    configure_logging(settings.log_level, settings.json_logs)
