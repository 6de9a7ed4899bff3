from __future__ import annotations

"""
PrettyLogger.

Bordered, context-rich log formatting with an asynchronous rotating disk
sink. Typical wiring::

    disk = DiskLogSink("/var/log/myapp", max_file_size=512 * 1024)
    printer = Printer(
        PrettyFormatter(FormatterConfig(tag="MyApp")),
        CsvFormatter(disk),
    )
    printer.d("hello %s", "world")
"""

from prettylogger.core.disk.rotation import RotatingFileManager
from prettylogger.core.disk.writer import DiskLogSink
from prettylogger.core.formatting.csv_format import CsvFormatter
from prettylogger.core.formatting.pretty import PrettyFormatter, merge_tag, split_chunks
from prettylogger.core.formatting.stack import capture_call_stack, get_stack_offset
from prettylogger.core.printer import Printer
from prettylogger.core.sinks.base import LogSink
from prettylogger.core.sinks.console import ConsoleLogSink
from prettylogger.domain.errors import LogFolderError, PrettyLoggerError
from prettylogger.domain.models import (
    CapturedFrame,
    DiskConfig,
    FormatterConfig,
    LogRecord,
    Priority,
)

__version__ = "1.0.0"

__all__ = [
    "CapturedFrame",
    "ConsoleLogSink",
    "CsvFormatter",
    "DiskConfig",
    "DiskLogSink",
    "FormatterConfig",
    "LogFolderError",
    "LogRecord",
    "LogSink",
    "PrettyFormatter",
    "PrettyLoggerError",
    "Printer",
    "Priority",
    "RotatingFileManager",
    "capture_call_stack",
    "get_stack_offset",
    "merge_tag",
    "split_chunks",
]
