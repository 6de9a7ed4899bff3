from __future__ import annotations

"""
Printer Facade.

Single entry point that fans one logging call out to every registered sink.
Adds the convenience shortcuts (one per priority), exception traceback
rendering, and pretty-printing of JSON and XML payloads.
"""

import json
import logging
import traceback
from typing import Any, List, Optional
from xml.dom import minidom
from xml.parsers.expat import ExpatError

from prettylogger.core.sinks.base import LogSink
from prettylogger.domain import constants as const
from prettylogger.domain.models import Priority

logger = logging.getLogger(__name__)


class Printer:
    """
    Fan-out facade over a list of sinks.

    Args:
        sinks: Initial sinks; more can be added with ``add_sink``.
    """

    def __init__(self, *sinks: LogSink):
        self._sinks: List[LogSink] = list(sinks)

    @property
    def sinks(self) -> List[LogSink]:
        return list(self._sinks)

    def add_sink(self, sink: LogSink) -> None:
        self._sinks.append(sink)

    def clear_sinks(self) -> None:
        self._sinks.clear()

    # -------------------------------------------------------------------------
    # PRIORITY SHORTCUTS
    # -------------------------------------------------------------------------

    def v(self, message: str, *args: Any, tag: Optional[str] = None) -> None:
        self._log(Priority.VERBOSE, tag, message, args)

    def d(self, message: Any, *args: Any, tag: Optional[str] = None) -> None:
        """Log at DEBUG. Non-string objects are rendered with ``repr``."""
        if not isinstance(message, str) and message is not None:
            message = repr(message)
            args = ()
        self._log(Priority.DEBUG, tag, message, args)

    def i(self, message: str, *args: Any, tag: Optional[str] = None) -> None:
        self._log(Priority.INFO, tag, message, args)

    def w(self, message: str, *args: Any, tag: Optional[str] = None) -> None:
        self._log(Priority.WARN, tag, message, args)

    def e(
            self,
            message: Optional[str] = None,
            *args: Any,
            error: Optional[BaseException] = None,
            tag: Optional[str] = None,
    ) -> None:
        """
        Log at ERROR, optionally appending the traceback of ``error``.
        """
        self._log(Priority.ERROR, tag, message, args, error)

    def wtf(self, message: str, *args: Any, tag: Optional[str] = None) -> None:
        """Log a condition that should never happen, at ASSERT."""
        self._log(Priority.ASSERT, tag, message, args)

    # -------------------------------------------------------------------------
    # STRUCTURED PAYLOADS
    # -------------------------------------------------------------------------

    def json(self, payload: Optional[str], tag: Optional[str] = None) -> None:
        """
        Pretty-print a JSON document at DEBUG.

        Invalid or empty payloads are reported at ERROR instead.
        """
        if not payload:
            self._log(Priority.DEBUG, tag, "Empty/Null json content", ())
            return
        try:
            parsed = json.loads(payload)
        except ValueError as e:
            self._log(Priority.ERROR, tag, f"{e}\n{payload}", ())
            return
        if not isinstance(parsed, (dict, list)):
            self._log(Priority.ERROR, tag, "Invalid Json", ())
            return
        self._log(Priority.DEBUG, tag, json.dumps(parsed, indent=const.JSON_INDENT, ensure_ascii=False), ())

    def xml(self, payload: Optional[str], tag: Optional[str] = None) -> None:
        """
        Pretty-print an XML document at DEBUG.

        Unparseable payloads are reported at ERROR instead.
        """
        if not payload:
            self._log(Priority.DEBUG, tag, "Empty/Null xml content", ())
            return
        try:
            document = minidom.parseString(payload)
        except ExpatError as e:
            self._log(Priority.ERROR, tag, f"Invalid xml: {e}", ())
            return
        pretty = document.toprettyxml(indent=" " * const.JSON_INDENT)
        lines = [line for line in pretty.splitlines() if line.strip()]
        self._log(Priority.DEBUG, tag, const.NEW_LINE.join(lines), ())

    # -------------------------------------------------------------------------
    # DISPATCH
    # -------------------------------------------------------------------------

    def log(
            self,
            priority: int,
            tag: Optional[str],
            message: Optional[str],
            error: Optional[BaseException] = None,
    ) -> None:
        """
        Send a message to every sink.

        Args:
            priority: Integer severity code.
            tag: Optional once-only tag.
            message: Message text; falls back to a placeholder when empty.
            error: Optional exception whose traceback is appended.
        """
        self._dispatch(priority, tag, message, error)

    def _log(
            self,
            priority: int,
            tag: Optional[str],
            message: Optional[str],
            args: tuple,
            error: Optional[BaseException] = None,
    ) -> None:
        if message and args:
            try:
                message = message % args
            except (TypeError, ValueError) as e:
                message = f"{message} (format failed: {e}; args={args!r})"
        self._dispatch(priority, tag, message, error)

    def _dispatch(
            self,
            priority: int,
            tag: Optional[str],
            message: Optional[str],
            error: Optional[BaseException],
    ) -> None:
        if error is not None:
            trace = "".join(traceback.format_exception(type(error), error, error.__traceback__))
            message = f"{message} : {trace}" if message else trace
        if not message:
            message = const.EMPTY_MESSAGE

        for sink in self._sinks:
            try:
                sink.log(priority, tag, message)
            except Exception as e:
                logger.error(f"Sink {type(sink).__name__} failed: {e}")
