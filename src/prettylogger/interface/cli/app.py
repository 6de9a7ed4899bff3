from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates a one-shot emission: diagnostic logging bootstrap, settings
resolution (defaults, JSON file, CLI overrides), sink assembly and a single
log call routed through the Printer facade.
"""

import json
import logging
import sys
from typing import Any, Dict, List, Optional

from prettylogger.core.disk.writer import DiskLogSink
from prettylogger.core.formatting.csv_format import CsvFormatter
from prettylogger.core.formatting.pretty import PrettyFormatter
from prettylogger.core.printer import Printer
from prettylogger.core.sinks.base import LogSink
from prettylogger.core.sinks.console import ConsoleLogSink
from prettylogger.domain.config import (
    build_disk_config,
    build_formatter_config,
    load_settings,
    validate_settings,
)
from prettylogger.domain.models import Priority
from prettylogger.infra.fs import normalize_path
from prettylogger.infra.logging import LoggingConfig, configure_logging, get_logger
from prettylogger.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 failure, 2 invalid input).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig(level="DEBUG" if args.debug else "WARNING"), force=True)

    # 1. Settings hierarchy: defaults < JSON file < CLI overrides
    raw = load_settings(args.config_path)
    raw = _merge_settings(raw, cli_args.args_to_overrides(args))
    try:
        settings, _ = validate_settings(raw, strict=True)
    except (TypeError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2

    if args.dump_config:
        print(json.dumps(settings, ensure_ascii=False, indent=2))
        return 0

    # 2. Message acquisition
    message = args.message
    if message is None:
        if sys.stdin is None or sys.stdin.isatty():
            print("ERROR: no message given (use --message or pipe text to stdin).", file=sys.stderr)
            return 2
        message = sys.stdin.read()

    # 3. Sink assembly and emission
    disk_sink: Optional[DiskLogSink] = None
    if args.folder:
        disk_config = build_disk_config(settings)
        disk_sink = DiskLogSink(
            normalize_path(disk_config.folder, disk_config.folder),
            disk_config.max_file_size,
            disk_config.file_prefix,
        )
        sink: LogSink = disk_sink
    else:
        sink = _stdout_console_sink()

    if args.csv:
        formatter: LogSink = CsvFormatter(sink, tag=settings["formatter"]["tag"])
    else:
        formatter = PrettyFormatter(build_formatter_config(settings, sink))

    printer = Printer(formatter)
    try:
        printer.log(Priority[args.priority], args.tag, message)
    finally:
        if disk_sink is not None:
            disk_sink.close()
            logger.debug(f"Disk sink drained into {disk_sink.config.folder}")

    return 0

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_settings(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay non-empty override sections onto the base settings."""
    merged = {section: dict(values) for section, values in base.items()}
    for section, values in overrides.items():
        merged.setdefault(section, {}).update(values)
    return merged


def _stdout_console_sink() -> ConsoleLogSink:
    """
    Console sink whose logger tree prints raw messages to stdout.
    """
    sink = ConsoleLogSink()
    target = logging.getLogger(sink.namespace)
    if not any(getattr(h, "_prettylogger_cli", False) for h in target.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))
        handler.terminator = ""
        setattr(handler, "_prettylogger_cli", True)
        target.addHandler(handler)
    target.setLevel(logging.DEBUG)
    target.propagate = False
    return sink
