"""
Logfire Configuration

Logging for the client goes through standard library loggers obtained from
get_logger(). When LOGFIRE_ENABLED is set, setup_logfire() also configures
Logfire and forwards log records to it; spans opened with safe_span() are then
real Logfire spans. When disabled, every helper here is a cheap no-op.

Environment:
    LOGFIRE_ENABLED  - "true"/"1"/"yes" to enable Logfire (default: disabled)
    LOGFIRE_TOKEN    - Logfire write token (optional, nothing is sent without it)
    LOG_LEVEL        - standard logging level name (default: INFO)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import logfire

SERVICE_NAME = "sqld-client"

_logfire_enabled = False


class NoopSpan:
    """Stand-in span used while Logfire is disabled."""

    def set_attribute(self, key: str, value: Any) -> None:
        pass

    def record_exception(self, exception: BaseException, **kwargs: Any) -> None:
        pass


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def setup_logfire(
    token: str | None = None,
    environment: str | None = None,
    service_name: str = SERVICE_NAME,
) -> bool:
    """
    Configure logging and, if enabled, Logfire.

    Args:
        token: Logfire write token (defaults to LOGFIRE_TOKEN)
        environment: deployment environment tag passed to Logfire
        service_name: service name reported to Logfire

    Returns:
        True if Logfire was enabled, False otherwise
    """
    global _logfire_enabled

    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )

    if not _env_flag("LOGFIRE_ENABLED"):
        _logfire_enabled = False
        return False

    logfire.configure(
        token=token or os.getenv("LOGFIRE_TOKEN"),
        service_name=service_name,
        environment=environment,
        send_to_logfire="if-token-present",
        console=False,
    )
    root_logger = logging.getLogger()
    if not any(isinstance(h, logfire.LogfireLoggingHandler) for h in root_logger.handlers):
        root_logger.addHandler(logfire.LogfireLoggingHandler())

    _logfire_enabled = True
    logging.getLogger(__name__).info("Logfire enabled (service=%s)", service_name)
    return True


def is_logfire_enabled() -> bool:
    return _logfire_enabled


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger; records reach Logfire once it is set up."""
    return logging.getLogger(name)


@contextmanager
def safe_span(name: str, **attributes: Any) -> Iterator[Any]:
    """Open a Logfire span if enabled, otherwise yield a NoopSpan."""
    if not _logfire_enabled:
        yield NoopSpan()
        return
    with logfire.span(name, **attributes) as span:
        yield span


def safe_set_attribute(span: Any, key: str, value: Any) -> None:
    if _logfire_enabled and span is not None:
        span.set_attribute(key, value)


def safe_logfire_info(message: str, **kwargs: Any) -> None:
    if _logfire_enabled:
        logfire.info(message, **kwargs)


def safe_logfire_error(message: str, **kwargs: Any) -> None:
    if _logfire_enabled:
        logfire.error(message, **kwargs)
