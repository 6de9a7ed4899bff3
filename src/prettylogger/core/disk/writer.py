from __future__ import annotations

"""
Asynchronous Disk Sink.

Accepts records from any thread and defers all file I/O to a single
background worker. Producers only pay for a queue insertion; the worker
(a QueueListener thread) drains the queue strictly FIFO and hands each
record to the RotatingFileManager, which it owns exclusively.
"""

import atexit
import logging
import queue
import threading
from logging.handlers import QueueListener
from typing import Optional

from prettylogger.core.disk.rotation import RotatingFileManager
from prettylogger.core.sinks.base import LogSink
from prettylogger.domain import constants as const
from prettylogger.domain.models import DiskConfig, LogRecord

logger = logging.getLogger(__name__)


class DiskLogSink(LogSink):
    """
    Crash-tolerant sink writing every message to rotating files.

    Owners must call ``close()`` when done with the sink. Until then an
    interpreter-exit hook keeps the sink and its worker thread alive so that
    pending records are still drained at shutdown (bounded by
    EXIT_CLOSE_TIMEOUT).

    Args:
        folder: Directory receiving ``<prefix>_<n>.csv`` files.
        max_file_size: Rotation ceiling in bytes.
        file_prefix: Base name of the rotation files.
    """

    def __init__(
            self,
            folder: str,
            max_file_size: int = const.DEFAULT_MAX_FILE_SIZE,
            file_prefix: str = const.DEFAULT_FILE_PREFIX,
    ):
        self._config = DiskConfig(folder=folder, max_file_size=max_file_size, file_prefix=file_prefix)
        self._manager = RotatingFileManager(folder, max_file_size, file_prefix)

        self._queue: queue.Queue[LogRecord] = queue.Queue(-1)
        self._state_lock = threading.Lock()
        self._closed = False

        self._listener = QueueListener(self._queue, self._manager)
        self._listener.start()

        # Drain pending records on interpreter shutdown
        atexit.register(self.close, const.EXIT_CLOSE_TIMEOUT)

    @classmethod
    def from_config(cls, config: DiskConfig) -> "DiskLogSink":
        return cls(config.folder, config.max_file_size, config.file_prefix)

    @property
    def config(self) -> DiskConfig:
        return self._config

    @property
    def closed(self) -> bool:
        return self._closed

    # -------------------------------------------------------------------------
    # PRODUCER API
    # -------------------------------------------------------------------------

    def log(self, priority: int, tag: Optional[str], message: str) -> None:
        """
        Enqueue a record for the worker. Never blocks on disk I/O.
        """
        try:
            with self._state_lock:
                if self._closed:
                    logger.debug("Disk sink is closed; record dropped.")
                    return
                self._queue.put_nowait(LogRecord(priority, tag, message))
        except Exception as e:
            logger.error(f"Failed to enqueue log record: {e}")

    def flush(self) -> None:
        """Block until every record enqueued so far has been processed."""
        self._queue.join()

    def close(self, timeout: Optional[float] = None) -> None:
        """
        Drain the queue, stop the worker and release the open file.

        Records logged after the first call are dropped. Safe to call
        repeatedly; a call made after a timed-out one resumes the wait.

        Args:
            timeout: Maximum seconds to wait for the worker. None waits until
                     every pending record is written.
        """
        with self._state_lock:
            if not self._closed:
                self._closed = True
                self._listener.enqueue_sentinel()

        thread = getattr(self._listener, "_thread", None)
        if thread is not None:
            thread.join(timeout)
            if thread.is_alive():
                # The sentinel is still queued behind the stalled record
                pending = max(self._queue.qsize() - 1, 0)
                logger.warning(
                    f"Disk worker still busy after {timeout}s; "
                    f"{pending} queued record(s) not yet written to {self._config.folder}"
                )
                return
            self._listener._thread = None

        # The worker has exited, so the handle is no longer in use
        self._manager.close()
        atexit.unregister(self.close)

    def __enter__(self) -> "DiskLogSink":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


# -----------------------------------------------------------------------------
# SHARED DEFAULT SINK
# -----------------------------------------------------------------------------

_default_sink: Optional[DiskLogSink] = None
_default_sink_lock = threading.Lock()


def get_default_disk_sink() -> DiskLogSink:
    """
    Return the process-wide sink writing into the default log folder.

    Every caller shares one worker so appends to the default rotation files
    go through a single size counter. A closed default sink is replaced on
    the next call.
    """
    global _default_sink
    with _default_sink_lock:
        if _default_sink is None or _default_sink.closed:
            from prettylogger.infra.fs import get_default_log_folder
            _default_sink = DiskLogSink(get_default_log_folder())
        return _default_sink
