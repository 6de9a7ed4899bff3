from __future__ import annotations

"""
Diagnostic Logging Configuration Models.

Defines the settings used to wire the library's own diagnostic channel:
the ``prettylogger`` logger hierarchy on which the disk worker and the
formatters report failures.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

# Root of every logger created with logging.getLogger(__name__) in the package
DIAGNOSTIC_LOGGER_NAME: str = "prettylogger"

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable settings of the diagnostic channel.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        log_file: Optional path for persistent diagnostics.
        max_bytes: Maximum size per diagnostic file before rotation.
        backup_count: Number of historical diagnostic files to preserve.
        console_fmt: Structural format for terminal output.
        file_fmt: Structural format for file entries.
        datefmt: Chronological format for timestamp generation.
        propagate: Whether diagnostics also reach the root logger.
    """
    level: str = "WARNING"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 1024 * 1024
    backup_count: int = 2

    console_fmt: str = "prettylogger | %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    propagate: bool = False
