from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
settings overrides shaped like ``domain.config.get_default_settings()``.
"""

import argparse
from typing import Any, Dict

from prettylogger.domain.models import Priority

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the prettylogger CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="prettylogger",
        description="Emit a message through the bordered formatter to the console or rotating log files.",
    )

    # --- Record ---
    p.add_argument(
        "-m", "--message",
        default=None,
        help="Message text. Read from stdin when omitted.",
    )
    p.add_argument(
        "-t", "--tag",
        default=None,
        help="Once-only tag merged with the configured default tag.",
    )
    p.add_argument(
        "-p", "--priority",
        type=str.upper,
        choices=[level.name for level in Priority],
        default=Priority.DEBUG.name,
        help="Severity of the record (default: DEBUG).",
    )

    # --- Formatter ---
    p.add_argument("--method-count", dest="method_count", type=int, default=None,
                   help="Caller frames to print.")
    p.add_argument("--method-offset", dest="method_offset", type=int, default=None,
                   help="Extra frames to skip past the caller boundary.")
    p.add_argument("--no-thread-info", dest="no_thread_info", action="store_true",
                   help="Hide the thread name line.")
    p.add_argument("--default-tag", dest="default_tag", default=None,
                   help="Default tag of the formatter.")
    p.add_argument("--csv", action="store_true",
                   help="Render one CSV row instead of a bordered block.")

    # --- Disk output ---
    p.add_argument("--folder", default=None,
                   help="Write to rotating files in this folder instead of the console.")
    p.add_argument("--max-file-size", dest="max_file_size", type=int, default=None,
                   help="Rotation ceiling in bytes.")
    p.add_argument("--prefix", dest="file_prefix", default=None,
                   help="Rotation file prefix (default: logs).")

    # --- Configuration and Diagnostic Tools ---
    p.add_argument("--config", dest="config_path", default=None,
                   help="JSON settings file.")
    p.add_argument("--dump-config", dest="dump_config", action="store_true",
                   help="Print the effective settings as JSON and exit.")
    p.add_argument("--debug", action="store_true",
                   help="Elevate diagnostic logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into settings overrides.

    Only options given on the command line appear in the result.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: ``{"formatter": {...}, "disk": {...}}`` subset.
    """
    formatter: Dict[str, Any] = {}
    disk: Dict[str, Any] = {}

    if args.method_count is not None:
        formatter["method_count"] = args.method_count
    if args.method_offset is not None:
        formatter["method_offset"] = args.method_offset
    if args.no_thread_info:
        formatter["show_thread_info"] = False
    if args.default_tag is not None:
        formatter["tag"] = args.default_tag

    if args.folder:
        disk["folder"] = args.folder
    if args.max_file_size is not None:
        disk["max_file_size"] = args.max_file_size
    if args.file_prefix:
        disk["file_prefix"] = args.file_prefix

    return {"formatter": formatter, "disk": disk}
