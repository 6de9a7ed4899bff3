from __future__ import annotations

"""
Console Sink.

Pass-through sink that hands every entry to the standard library logging
tree, one logger per tag, so the host application's handlers decide how the
text is finally displayed.
"""

import logging
from typing import Dict, Optional

from prettylogger.core.sinks.base import LogSink
from prettylogger.domain.models import Priority

logger = logging.getLogger(__name__)

DEFAULT_NAMESPACE: str = "pretty"

_LEVEL_MAP: Dict[int, int] = {
    Priority.VERBOSE: logging.DEBUG,
    Priority.DEBUG: logging.DEBUG,
    Priority.INFO: logging.INFO,
    Priority.WARN: logging.WARNING,
    Priority.ERROR: logging.ERROR,
    Priority.ASSERT: logging.CRITICAL,
}


def to_logging_level(priority: int) -> int:
    """
    Map a priority code onto a standard logging level.

    Codes below VERBOSE map to DEBUG and codes above ASSERT to CRITICAL.

    Args:
        priority: Integer severity code.

    Returns:
        int: Numeric logging level.
    """
    if priority in _LEVEL_MAP:
        return _LEVEL_MAP[priority]
    if priority < Priority.VERBOSE:
        return logging.DEBUG
    return logging.CRITICAL


class ConsoleLogSink(LogSink):
    """
    Sink that forwards entries to ``logging.getLogger(<namespace>.<tag>)``.

    Args:
        namespace: Parent logger name for all tag loggers.
    """

    def __init__(self, namespace: str = DEFAULT_NAMESPACE):
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def logger_for(self, tag: Optional[str]) -> logging.Logger:
        """Resolve the stdlib logger receiving entries for a tag."""
        if not tag:
            return logging.getLogger(self._namespace)
        return logging.getLogger(f"{self._namespace}.{tag}")

    def log(self, priority: int, tag: Optional[str], message: str) -> None:
        try:
            self.logger_for(tag).log(to_logging_level(priority), message)
        except Exception as e:
            logger.error(f"Console sink failed to emit entry: {e}")
