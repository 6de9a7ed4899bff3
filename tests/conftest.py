from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A recording sink shared by formatter and facade tests.
3. Isolation of the diagnostic logger between tests.
"""

import os
import sys
from typing import Generator, List, Optional, Tuple

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from prettylogger.core.sinks.base import LogSink  # noqa: E402
from prettylogger.infra.logging import reset_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Test Doubles
# -----------------------------------------------------------------------------
class RecordingSink(LogSink):
    """Sink that keeps every call in memory."""

    def __init__(self) -> None:
        self.calls: List[Tuple[int, Optional[str], str]] = []

    def log(self, priority: int, tag: Optional[str], message: str) -> None:
        self.calls.append((priority, tag, message))

    @property
    def messages(self) -> List[str]:
        return [call[2] for call in self.calls]


class ExplodingSink(LogSink):
    """Sink that violates the contract by raising on every call."""

    def log(self, priority: int, tag: Optional[str], message: str) -> None:
        raise RuntimeError("sink exploded")


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def recording_sink() -> RecordingSink:
    """Return a fresh in-memory sink."""
    return RecordingSink()


@pytest.fixture
def exploding_sink() -> ExplodingSink:
    return ExplodingSink()


@pytest.fixture(autouse=True)
def isolate_diagnostic_logger() -> Generator[None, None, None]:
    """
    Undo any configure_logging() call made by a test.

    The CLI disables propagation on the 'prettylogger' logger, which would
    hide diagnostics from caplog in later tests.
    """
    yield
    reset_logging()
