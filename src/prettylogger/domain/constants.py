from __future__ import annotations

"""
Domain Constants.

Centralizes the fixed values shared by the formatter, the stack extractor
and the disk writer: chunk ceiling, drawing toolbox, default tags and the
on-disk naming scheme.
"""

from typing import Tuple

# -----------------------------------------------------------------------------
# FORMATTER
# -----------------------------------------------------------------------------

# Console backends cap a single entry at roughly 4 KiB; 4000 bytes keeps a
# UTF-8 encoded chunk below that limit.
CHUNK_SIZE: int = 4000

DEFAULT_TAG: str = "PRETTY_LOGGER"
DEFAULT_METHOD_COUNT: int = 2
DEFAULT_METHOD_OFFSET: int = 0
DEFAULT_SHOW_THREAD_INFO: bool = True

NEW_LINE: str = "\n"
FRAME_INDENT: str = "   "

# Drawing toolbox
TOP_LEFT_CORNER: str = "┌"
BOTTOM_LEFT_CORNER: str = "└"
MIDDLE_CORNER: str = "├"
HORIZONTAL_LINE: str = "│"
DOUBLE_DIVIDER: str = "─" * 56
SINGLE_DIVIDER: str = "┄" * 56
TOP_BORDER: str = TOP_LEFT_CORNER + DOUBLE_DIVIDER + DOUBLE_DIVIDER
BOTTOM_BORDER: str = BOTTOM_LEFT_CORNER + DOUBLE_DIVIDER + DOUBLE_DIVIDER
MIDDLE_BORDER: str = MIDDLE_CORNER + SINGLE_DIVIDER + SINGLE_DIVIDER

# -----------------------------------------------------------------------------
# STACK EXTRACTION
# -----------------------------------------------------------------------------

# Index of the first frame that may belong to a caller: frame 0 is the
# header builder and frame 1 is PrettyFormatter.log.
MIN_STACK_OFFSET: int = 2
STACK_NOT_FOUND: int = -1

# Modules whose frames are part of the library call chain
INTERNAL_MODULES: Tuple[str, ...] = (
    "prettylogger.core.formatting.pretty",
    "prettylogger.core.printer",
)

# -----------------------------------------------------------------------------
# DISK OUTPUT
# -----------------------------------------------------------------------------

DEFAULT_FILE_PREFIX: str = "logs"
LOG_FILE_EXTENSION: str = ".csv"
DEFAULT_MAX_FILE_SIZE: int = 500 * 1024
DEFAULT_LOG_FOLDER_NAME: str = "logger"
EXIT_CLOSE_TIMEOUT: float = 5.0

# -----------------------------------------------------------------------------
# CSV FORMAT
# -----------------------------------------------------------------------------

CSV_SEPARATOR: str = ","
CSV_SEPARATOR_REPLACEMENT: str = " <c> "
CSV_NEW_LINE_REPLACEMENT: str = " <br> "
CSV_DATE_FORMAT: str = "%Y.%m.%d %H:%M:%S.%f"

EMPTY_MESSAGE: str = "Empty/NULL log message"
JSON_INDENT: int = 2
