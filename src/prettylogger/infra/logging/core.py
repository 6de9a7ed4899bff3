from __future__ import annotations

"""
Diagnostic Channel Orchestrator.

Idempotently wires the ``prettylogger`` logger used by the pipeline to
report its own failures. Handlers sit behind a QueueHandler/QueueListener
pair so reporting a failure never blocks the thread that hit it.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import List, Optional

from prettylogger.infra.logging.config import (
    _LEVEL_MAP,
    DIAGNOSTIC_LOGGER_NAME,
    LoggingConfig,
)
from prettylogger.infra.logging.handlers import (
    _create_console_handler,
    _create_rotating_file_handler,
    _is_our_handler,
    _tag_handler,
)

# Internal state flags for idempotency and lifecycle tracking
_CONFIGURED_FLAG_ATTR: str = "_prettylogger_configured"
_QUEUE_LISTENER_ATTR: str = "_prettylogger_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Configure the diagnostic logger using non-blocking handlers.

    Repeated calls are no-ops unless ``force`` is set.

    Args:
        cfg: Diagnostic channel settings.
        force: If True, tear down and rebuild the handlers.

    Returns:
        logging.Logger: The ``prettylogger`` logger.
    """
    diag = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)

    try:
        if getattr(diag, _CONFIGURED_FLAG_ATTR, False) and not force:
            return diag

        level_int = _parse_level(cfg.level)
        diag.setLevel(level_int)
        diag.propagate = cfg.propagate

        _remove_our_handlers(diag)
        _stop_existing_listener(diag)

        handlers_list: List[logging.Handler] = []

        if cfg.console:
            handlers_list.append(
                _create_console_handler(level_int, logging.Formatter(cfg.console_fmt))
            )

        if cfg.log_file:
            fh = _create_rotating_file_handler(
                cfg.log_file,
                level_int,
                logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt),
                cfg.max_bytes,
                cfg.backup_count,
            )
            if fh:
                handlers_list.append(fh)

        setattr(diag, _CONFIGURED_FLAG_ATTR, True)
        if not handlers_list:
            return diag

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        queue_handler = QueueHandler(log_queue)
        _tag_handler(queue_handler)

        listener = QueueListener(log_queue, *handlers_list, respect_handler_level=True)
        listener.start()

        diag.addHandler(queue_handler)
        setattr(diag, _QUEUE_LISTENER_ATTR, listener)

        atexit.register(_safe_stop_listener, listener)
        return diag

    # Fall back to a plain stderr handler if the wiring itself fails
    except Exception as e:
        sys.stderr.write(f"WARNING: prettylogger diagnostics fell back to stderr: {e}\n")
        _remove_our_handlers(diag)
        sh = logging.StreamHandler(sys.stderr)
        sh.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        _tag_handler(sh)
        diag.addHandler(sh)
        return diag


def reset_logging() -> None:
    """Remove every handler installed by ``configure_logging``."""
    diag = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)
    _stop_existing_listener(diag)
    _remove_our_handlers(diag)
    if hasattr(diag, _CONFIGURED_FLAG_ATTR):
        delattr(diag, _CONFIGURED_FLAG_ATTR)
    diag.propagate = True
    diag.setLevel(logging.NOTSET)


def get_logger(name: str) -> logging.Logger:
    """
    Acquire a named logger (usually ``__name__``).
    """
    return logging.getLogger(name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _parse_level(level: str) -> int:
    """Convert a string-based logging level to its numeric constant."""
    if not level:
        return logging.WARNING
    return _LEVEL_MAP.get(str(level).strip().upper(), logging.WARNING)


def _remove_our_handlers(target: logging.Logger) -> None:
    for h in list(target.handlers):
        if _is_our_handler(h):
            target.removeHandler(h)
            h.close()


def _stop_existing_listener(target: logging.Logger) -> None:
    listener = getattr(target, _QUEUE_LISTENER_ATTR, None)
    if listener:
        _safe_stop_listener(listener)
        setattr(target, _QUEUE_LISTENER_ATTR, None)


def _safe_stop_listener(listener: Optional[QueueListener]) -> None:
    """
    Stop a QueueListener, tolerating double-stop calls from atexit.
    """
    if not listener:
        return
    if getattr(listener, "_thread", None) is not None:
        listener.stop()
