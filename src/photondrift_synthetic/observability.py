"""Structured logging for photondrift-synthetic.

This module provides:
- The shared package logger used by every generator
- configure_logging for callers that want generator output on a stream

Generators never configure logging themselves. Embedding applications either
configure structlog globally or call configure_logging, which only touches
the package logger and leaves the root logger alone.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from structlog.stdlib import BoundLogger

LOGGER_NAME = "photondrift.synthetic"

_logger: BoundLogger | None = None


def get_logger() -> BoundLogger:
    """Get the package logger, creating it if necessary.

    Returns:
        Configured structlog BoundLogger instance.

    Example:
        >>> logger = get_logger()
        >>> logger.info("fixtures_written", path="fixtures/dataset.json")
    """
    global _logger
    if _logger is None:
        _logger = structlog.get_logger(LOGGER_NAME)
    assert _logger is not None  # Type narrowing for mypy
    return _logger


def _renderer(json_format: bool) -> Any:
    if json_format:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(colors=False)


def configure_logging(
    *,
    log_level: str = "INFO",
    json_format: bool = True,
    add_timestamp: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Send generator events to a stream as structured lines.

    Args:
        log_level: Minimum level for generator events (DEBUG logs batch linking).
        json_format: If True, one JSON object per line. If False, console format.
        add_timestamp: If True, add an ISO timestamp to each event.
        stream: Destination for events (default: sys.stderr).

    Raises:
        ValueError: If log_level is not a standard level name.

    Example:
        >>> configure_logging(log_level="DEBUG", json_format=False)
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.format_exc_info,
        _renderer(json_format),
    ]
    if add_timestamp:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Replace any handler from an earlier call so events are not duplicated
    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
