from __future__ import annotations

"""
Rotating File Manager.

Owns the open rotation file and its size counter. Decides which physical
file receives the next append, closing the current one when the pending
payload would push it past the ceiling and reusing a partially filled file
left over from an earlier run.

Every method here runs on the disk sink's single worker thread, so the
rotation state is never shared and needs no locking.
"""

import logging
import os
from typing import BinaryIO, Optional, Tuple

from prettylogger.domain.constants import DEFAULT_FILE_PREFIX
from prettylogger.domain.errors import LogFolderError
from prettylogger.domain.models import LogRecord
from prettylogger.infra.fs import list_rotation_files, rotation_file_path, safe_mkdir

logger = logging.getLogger(__name__)


class RotatingFileManager:
    """
    Size-bounded appender over ``<prefix>_<n>.csv`` files.

    Args:
        folder: Directory receiving the rotation files.
        max_file_size: Rotation ceiling in bytes.
        file_prefix: Base name of the rotation files.
    """

    def __init__(self, folder: str, max_file_size: int, file_prefix: str = DEFAULT_FILE_PREFIX):
        self._folder = folder
        self._max_file_size = max_file_size
        self._file_prefix = file_prefix

        self._file: Optional[BinaryIO] = None
        self._path: Optional[str] = None
        self._size: int = 0
        self._folder_error_reported = False

    # -------------------------------------------------------------------------
    # STATE INSPECTION
    # -------------------------------------------------------------------------

    @property
    def folder(self) -> str:
        return self._folder

    @property
    def max_file_size(self) -> int:
        return self._max_file_size

    @property
    def current_path(self) -> Optional[str]:
        """Path of the open rotation file, or None in the NoFileOpen state."""
        return self._path

    @property
    def current_size(self) -> int:
        """Bytes already committed to the open file (0 when none is open)."""
        return self._size

    # -------------------------------------------------------------------------
    # WORKER ENTRY POINT
    # -------------------------------------------------------------------------

    def handle(self, record: LogRecord) -> None:
        """
        Persist one queued record, isolating every failure.

        I/O errors close the current file and drop the record so the next
        one starts file selection from scratch. Anything else is reported
        and the worker keeps running.

        Args:
            record: Dequeued record whose message is appended verbatim.
        """
        try:
            self.write(record.message)
        except LogFolderError as e:
            self._reset()
            if not self._folder_error_reported:
                self._folder_error_reported = True
                logger.error(f"{e}. Log records are dropped until the folder becomes writable.")
        except OSError as e:
            failed_path = self._path
            self._reset()
            logger.warning(f"Dropped log record after I/O failure on '{failed_path}': {e}")
        except Exception as e:
            logger.error(f"Unexpected failure while writing log record: {e}", exc_info=True)

    def write(self, content: str) -> None:
        """
        Append content to the selected file, then flush.

        Args:
            content: Text to append as UTF-8.

        Raises:
            LogFolderError: If the target folder cannot be created.
            OSError: If opening, writing or flushing fails.
        """
        data = content.encode("utf-8")
        writer = self.select_writer(len(data))
        writer.write(data)
        writer.flush()
        self._size += len(data)

    def select_writer(self, pending_byte_length: int) -> BinaryIO:
        """
        Return the handle that should receive the next append.

        Args:
            pending_byte_length: Size of the payload about to be written.

        Returns:
            BinaryIO: Open append-mode handle.

        Raises:
            LogFolderError: If the target folder cannot be created.
            OSError: If the selected file cannot be opened.
        """
        if self._file is not None and self._size + pending_byte_length > self._max_file_size:
            logger.debug(f"Rotating away from '{self._path}' at {self._size} bytes")
            self._reset()

        if self._file is None:
            path, size = self._find_log_file(pending_byte_length)
            self._file = open(path, "ab")
            self._path = path
            self._size = size
            self._folder_error_reported = False

        return self._file

    def close(self) -> None:
        """Release the open handle, if any."""
        self._reset()

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _find_log_file(self, pending_byte_length: int) -> Tuple[str, int]:
        """
        Pick the file for the next append when none is open.

        The last existing rotation file is reused while it is below the
        ceiling and the payload fits (an empty file always accepts it);
        otherwise the next unused suffix is chosen.

        Returns:
            Tuple[str, int]: Selected path and its current size in bytes.
        """
        if not os.path.isdir(self._folder):
            ok, err = safe_mkdir(self._folder)
            if not ok:
                raise LogFolderError(self._folder, err or "")

        existing = list_rotation_files(self._folder, self._file_prefix)
        new_path = rotation_file_path(self._folder, self._file_prefix, len(existing))

        if existing:
            last = existing[-1]
            size = os.path.getsize(last)
            fits = size == 0 or size + pending_byte_length <= self._max_file_size
            if size < self._max_file_size and fits:
                return last, size

        return new_path, 0

    def _reset(self) -> None:
        handle = self._file
        self._file = None
        self._path = None
        self._size = 0
        if handle is not None:
            try:
                handle.close()
            except OSError as e:
                logger.debug(f"Ignoring failure while closing log file: {e}")
