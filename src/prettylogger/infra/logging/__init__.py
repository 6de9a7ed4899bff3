from __future__ import annotations

from .config import DIAGNOSTIC_LOGGER_NAME, LoggingConfig
from .core import (
    _CONFIGURED_FLAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    configure_logging,
    get_logger,
    reset_logging,
)
from .handlers import _HANDLER_TAG_ATTR

__all__ = [
    "DIAGNOSTIC_LOGGER_NAME",
    "LoggingConfig",
    "configure_logging",
    "get_logger",
    "reset_logging",
]
