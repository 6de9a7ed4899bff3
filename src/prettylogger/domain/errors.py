from __future__ import annotations

"""
Library Exception Hierarchy.

None of these errors ever cross a public ``log(...)`` call; they are raised
and handled inside the background worker and reported on the diagnostic
channel.
"""


class PrettyLoggerError(Exception):
    """Base class for errors raised inside the logging pipeline."""


class LogFolderError(PrettyLoggerError, OSError):
    """
    The target log folder is missing and could not be created.

    Attributes:
        folder: Directory that was requested.
    """

    def __init__(self, folder: str, reason: str = "") -> None:
        self.folder = folder
        detail = f": {reason}" if reason else ""
        super().__init__(f"Unable to create log folder '{folder}'{detail}")
