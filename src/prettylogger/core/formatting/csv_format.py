from __future__ import annotations

"""
Single-Line CSV Formatter.

Renders each entry as one comma-separated row suited to the rotating disk
files: ``epoch_millis,date_time,LEVEL,tag,message``. Commas and line breaks
inside the message are replaced by visible markers so every record stays on
exactly one line.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from prettylogger.core.formatting.pretty import merge_tag
from prettylogger.core.sinks.base import LogSink
from prettylogger.domain import constants as const
from prettylogger.domain.models import priority_label

logger = logging.getLogger(__name__)


class CsvFormatter(LogSink):
    """
    Sink decorator producing one CSV row per record.

    Args:
        sink: Destination of the rows. Defaults to the shared DiskLogSink
              writing into the default log folder.
        tag: Default tag merged with per-call tags.
        date_format: strftime pattern of the human-readable time column.
        clock: Source of the record timestamp (injectable for tests).
    """

    def __init__(
            self,
            sink: Optional[LogSink] = None,
            tag: Optional[str] = const.DEFAULT_TAG,
            date_format: str = const.CSV_DATE_FORMAT,
            clock: Callable[[], datetime] = datetime.now,
    ):
        if sink is None:
            from prettylogger.core.disk.writer import get_default_disk_sink
            sink = get_default_disk_sink()
        self._sink = sink
        self._tag = tag
        self._date_format = date_format
        self._clock = clock

    @property
    def sink(self) -> LogSink:
        return self._sink

    def format_row(self, priority: int, tag: Optional[str], message: str) -> str:
        """
        Build the CSV row for one record, newline-terminated.

        Args:
            priority: Integer severity code.
            tag: Effective (already merged) tag.
            message: Raw message text.

        Returns:
            str: The rendered row.
        """
        now = self._clock()
        text = (message or "").replace("\r\n", "\n")
        text = text.replace(const.NEW_LINE, const.CSV_NEW_LINE_REPLACEMENT)
        text = text.replace(const.CSV_SEPARATOR, const.CSV_SEPARATOR_REPLACEMENT)

        columns = [
            str(int(now.timestamp() * 1000)),
            now.strftime(self._date_format),
            priority_label(priority),
            tag or "",
            text,
        ]
        return const.CSV_SEPARATOR.join(columns) + const.NEW_LINE

    def log(self, priority: int, tag: Optional[str], message: str) -> None:
        try:
            effective_tag = merge_tag(self._tag, tag)
            self._sink.log(priority, effective_tag, self.format_row(priority, effective_tag, message))
        except Exception as e:
            logger.error(f"Failed to format CSV entry: {e}", exc_info=True)
