from __future__ import annotations

"""
Base Definition for Log Sinks.

Provides the abstract capability shared by every output stage of the
pipeline. Formatters wrap a sink and are sinks themselves, so stages can be
composed freely.
"""

from abc import ABC, abstractmethod
from typing import Optional


class LogSink(ABC):
    """
    Abstract destination for finished log output.
    """

    @abstractmethod
    def log(self, priority: int, tag: Optional[str], message: str) -> None:
        """
        Accept a log entry for output.

        Implementations must not raise exceptions to the caller.

        Args:
            priority: Integer severity code.
            tag: Optional tag identifying the origin.
            message: Text to output.
        """
        pass
