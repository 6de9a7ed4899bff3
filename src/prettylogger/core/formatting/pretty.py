from __future__ import annotations

"""
Bordered Multi-Line Formatter.

Draws borders around a log message together with thread information and
the caller's method stack, then hands the finished block to the configured
sink:

    ┌────────────────────────────
    │ Thread information
    ├┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄
    │ Method stack history
    ├┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄┄
    │ Log message
    └────────────────────────────

Bodies larger than CHUNK_SIZE bytes are split on raw byte boundaries and
emitted as several blocks sharing the same header. A multi-byte character
sitting on a boundary is split between two chunks; the undecodable halves
are rendered as replacement characters.
"""

import logging
import threading
from typing import Iterable, List, Optional

from prettylogger.core.formatting.stack import (
    capture_call_stack,
    format_frame,
    get_stack_offset,
)
from prettylogger.core.sinks.base import LogSink
from prettylogger.domain import constants as const
from prettylogger.domain.models import FormatterConfig

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC HELPERS
# -----------------------------------------------------------------------------

def merge_tag(default_tag: Optional[str], tag: Optional[str]) -> Optional[str]:
    """
    Combine the configured default tag with a once-only tag.

    Args:
        default_tag: Tag configured on the formatter.
        tag: Tag supplied with a single call.

    Returns:
        Optional[str]: ``default-tag`` when the call tag is non-empty and
                       different from the default, otherwise the default.
    """
    if tag and tag != default_tag:
        if default_tag is None:
            return tag
        return f"{default_tag}-{tag}"
    return default_tag


def split_chunks(data: bytes, size: int = const.CHUNK_SIZE) -> List[bytes]:
    """
    Slice a byte string into consecutive ranges of at most ``size`` bytes.

    Args:
        data: Encoded message body.
        size: Maximum length of a range.

    Returns:
        List[bytes]: Ordered ranges; empty input yields a single empty range.
    """
    if not data:
        return [b""]
    return [data[i:i + size] for i in range(0, len(data), size)]


# -----------------------------------------------------------------------------
# FORMATTER
# -----------------------------------------------------------------------------

class PrettyFormatter(LogSink):
    """
    Sink decorator that renders bordered, context-rich log blocks.

    Args:
        config: Immutable formatter settings. Defaults apply when omitted.
    """

    def __init__(self, config: Optional[FormatterConfig] = None):
        self._config = config or FormatterConfig()

    @property
    def config(self) -> FormatterConfig:
        return self._config

    def format_tag(self, tag: Optional[str]) -> Optional[str]:
        return merge_tag(self._config.tag, tag)

    def log(self, priority: int, tag: Optional[str], message: str) -> None:
        """
        Render the message and emit one sink call per chunk.

        Never raises; rendering or sink failures are reported on the
        diagnostic logger.
        """
        try:
            effective_tag = self.format_tag(tag)
            header = self._header_content()
            for block in self._render_blocks(header, message or ""):
                self._config.sink.log(priority, effective_tag, block)
        except Exception as e:
            logger.error(f"Failed to format log entry: {e}", exc_info=True)

    # -------------------------------------------------------------------------
    # BLOCK ASSEMBLY
    # -------------------------------------------------------------------------

    def _header_content(self) -> str:
        """
        Build the shared header: top border, thread info and caller frames.

        Must be called directly from ``log`` so the captured stack layout
        matches MIN_STACK_OFFSET.
        """
        lines: List[str] = [" ", const.TOP_BORDER]

        if self._config.show_thread_info:
            lines.append(
                f"{const.HORIZONTAL_LINE} Thread: {threading.current_thread().name}"
            )
            lines.append(const.MIDDLE_BORDER)

        if self._config.method_count > 0:
            lines.extend(self._frame_lines(capture_call_stack()))
            lines.append(const.MIDDLE_BORDER)

        return const.NEW_LINE.join(lines) + const.NEW_LINE

    def _frame_lines(self, trace: List) -> List[str]:
        """
        Render up to ``method_count`` caller frames, most distant first.

        The nearest frame carries no indentation; every frame further out
        gains one FRAME_INDENT.
        """
        offset = get_stack_offset(trace)
        if offset == const.STACK_NOT_FOUND:
            return []

        stack_offset = offset + self._config.method_offset
        # The requested count may reach past the captured stack
        count = min(self._config.method_count, len(trace) - stack_offset - 1)

        lines: List[str] = []
        for i in range(count, 0, -1):
            frame = trace[stack_offset + i]
            indent = const.FRAME_INDENT * (i - 1)
            lines.append(f"{const.HORIZONTAL_LINE} {indent}{format_frame(frame)}")
        return lines

    def _render_blocks(self, header: str, message: str) -> Iterable[str]:
        data = message.encode("utf-8")
        if len(data) <= const.CHUNK_SIZE:
            yield header + self._content(message) + self._bottom_border()
            return

        for chunk in split_chunks(data):
            text = chunk.decode("utf-8", errors="replace")
            yield header + self._content(text) + self._bottom_border()

    @staticmethod
    def _content(chunk: str) -> str:
        lines = chunk.split(const.NEW_LINE)
        while lines and not lines[-1]:
            lines.pop()
        return "".join(
            f"{const.HORIZONTAL_LINE} {line}{const.NEW_LINE}" for line in lines
        )

    @staticmethod
    def _bottom_border() -> str:
        return const.BOTTOM_BORDER + const.NEW_LINE
