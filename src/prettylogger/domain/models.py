from __future__ import annotations

"""
Logging Domain Data Models.

Defines the immutable value objects exchanged between callers, formatters
and sinks: priority levels, log records, captured stack frames and the
configuration values fixed at component construction.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import TYPE_CHECKING, Optional

from prettylogger.domain import constants as const

if TYPE_CHECKING:
    from prettylogger.core.sinks.base import LogSink


# -----------------------------------------------------------------------------
# PRIORITY LEVELS
# -----------------------------------------------------------------------------

class Priority(IntEnum):
    """Severity codes understood by every sink."""

    VERBOSE = 2
    DEBUG = 3
    INFO = 4
    WARN = 5
    ERROR = 6
    ASSERT = 7


def priority_label(priority: int) -> str:
    """
    Resolve the printable name of a priority code.

    Args:
        priority: Raw integer severity.

    Returns:
        str: Level name, or "UNKNOWN" for codes outside the enum.
    """
    try:
        return Priority(priority).name
    except ValueError:
        return "UNKNOWN"


# -----------------------------------------------------------------------------
# RECORDS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LogRecord:
    """
    A single severity/tag/message triple travelling through the pipeline.

    Attributes:
        priority: Integer severity code (see Priority).
        tag: Optional tag supplied by the caller.
        message: Fully rendered text to output.
    """
    priority: int
    tag: Optional[str]
    message: str


@dataclass(frozen=True)
class CapturedFrame:
    """
    One level of the call stack, as printed in the formatter header.

    Attributes:
        declaring_type_name: Dotted module path that owns the code.
        method_name: Qualified function name.
        file_name: Base name of the source file.
        line_number: Line currently executing in that frame.
    """
    declaring_type_name: str
    method_name: str
    file_name: str
    line_number: int


# -----------------------------------------------------------------------------
# COMPONENT CONFIGURATION
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class FormatterConfig:
    """
    Read-only settings of a PrettyFormatter.

    Attributes:
        method_count: Number of caller frames to print.
        method_offset: Extra frames to skip past the computed caller boundary.
        show_thread_info: Whether the thread name line is printed.
        tag: Default tag merged with per-call tags.
        sink: Destination of the rendered blocks. Resolved to the console
              sink when left unset.
    """
    method_count: int = const.DEFAULT_METHOD_COUNT
    method_offset: int = const.DEFAULT_METHOD_OFFSET
    show_thread_info: bool = const.DEFAULT_SHOW_THREAD_INFO
    tag: Optional[str] = const.DEFAULT_TAG
    sink: Optional["LogSink"] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.method_count < 0:
            raise ValueError(f"method_count must be >= 0, got {self.method_count}")
        if self.method_offset < 0:
            raise ValueError(f"method_offset must be >= 0, got {self.method_offset}")
        if self.sink is None:
            from prettylogger.core.sinks.console import ConsoleLogSink
            object.__setattr__(self, "sink", ConsoleLogSink())


@dataclass(frozen=True)
class DiskConfig:
    """
    Settings of a DiskLogSink.

    Attributes:
        folder: Directory receiving the rotation files.
        max_file_size: Rotation ceiling in bytes.
        file_prefix: Base name of the rotation files (``<prefix>_<n>.csv``).
    """
    folder: str
    max_file_size: int = const.DEFAULT_MAX_FILE_SIZE
    file_prefix: str = const.DEFAULT_FILE_PREFIX

    def __post_init__(self) -> None:
        if self.max_file_size <= 0:
            raise ValueError(f"max_file_size must be > 0, got {self.max_file_size}")
        if not self.file_prefix:
            raise ValueError("file_prefix must not be empty")
