from __future__ import annotations

"""
Configuration Domain Management.

Loads pipeline settings from a JSON file, merges them over the defaults and
normalizes untrusted values before they are frozen into FormatterConfig and
DiskConfig instances.

File layout::

    {
      "formatter": {"method_count": 2, "method_offset": 0,
                    "show_thread_info": true, "tag": "PRETTY_LOGGER"},
      "disk": {"folder": "...", "max_file_size": 512000, "file_prefix": "logs"}
    }
"""

import copy
import json
import logging
import os
from typing import Any, Dict, List, Optional, Tuple

from prettylogger.domain import constants as const
from prettylogger.domain.models import DiskConfig, FormatterConfig

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

def get_default_settings() -> Dict[str, Any]:
    """
    Generate the default settings structure.

    Returns:
        Dict[str, Any]: Nested ``formatter`` and ``disk`` sections.
    """
    from prettylogger.infra.fs import get_default_log_folder

    return {
        "formatter": {
            "method_count": const.DEFAULT_METHOD_COUNT,
            "method_offset": const.DEFAULT_METHOD_OFFSET,
            "show_thread_info": const.DEFAULT_SHOW_THREAD_INFO,
            "tag": const.DEFAULT_TAG,
        },
        "disk": {
            "folder": get_default_log_folder(),
            "max_file_size": const.DEFAULT_MAX_FILE_SIZE,
            "file_prefix": const.DEFAULT_FILE_PREFIX,
        },
    }


# -----------------------------------------------------------------------------
# Persistence Logic
# -----------------------------------------------------------------------------

def load_settings(path: Optional[str]) -> Dict[str, Any]:
    """
    Load settings from a JSON file, merged over the defaults.

    Missing or corrupt files yield the defaults; the problem is logged.

    Args:
        path: JSON file to read. None returns the defaults.

    Returns:
        Dict[str, Any]: Raw (not yet validated) settings.
    """
    settings = get_default_settings()
    if not path:
        return settings

    if not os.path.exists(path):
        logger.warning(f"Settings file not found: {path}. Using defaults.")
        return settings

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load settings from {path}: {e}. Using defaults.")
        return settings

    if not isinstance(data, dict):
        logger.warning(f"Corrupted settings file {path}. Using defaults.")
        return settings

    for section in ("formatter", "disk"):
        if isinstance(data.get(section), dict):
            settings[section].update(data[section])
    return settings


# -----------------------------------------------------------------------------
# Validation
# -----------------------------------------------------------------------------

def validate_settings(
        raw: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Normalize a settings dictionary, filling gaps with defaults.

    Args:
        raw: Settings as loaded from disk or CLI overrides.
        strict: If True, raise on invalid values instead of falling back.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Clean settings and warnings.

    Raises:
        TypeError: In strict mode, on a type mismatch.
        ValueError: In strict mode, on an out-of-range value.
    """
    warnings: List[str] = []
    defaults = get_default_settings()

    if not isinstance(raw, dict):
        msg = f"Invalid settings type: expected dict, received {type(raw).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        return defaults, warnings

    clean = copy.deepcopy(defaults)
    for section in ("formatter", "disk"):
        if isinstance(raw.get(section), dict):
            clean[section].update(raw[section])

    fmt, disk = clean["formatter"], clean["disk"]
    fmt_defaults, disk_defaults = defaults["formatter"], defaults["disk"]

    fmt["method_count"] = _as_int(fmt.get("method_count"), fmt_defaults["method_count"],
                                  "formatter.method_count", 0, warnings, strict)
    fmt["method_offset"] = _as_int(fmt.get("method_offset"), fmt_defaults["method_offset"],
                                   "formatter.method_offset", 0, warnings, strict)
    fmt["show_thread_info"] = _as_bool(fmt.get("show_thread_info"), fmt_defaults["show_thread_info"],
                                       "formatter.show_thread_info", warnings, strict)
    # An explicit null tag is allowed
    if fmt.get("tag") is not None and not isinstance(fmt["tag"], str):
        fmt["tag"] = _reject("Invalid field 'formatter.tag': expected str.",
                             fmt_defaults["tag"], warnings, strict, TypeError)

    disk["folder"] = _as_str(disk.get("folder"), disk_defaults["folder"],
                             "disk.folder", warnings, strict)
    disk["max_file_size"] = _as_int(disk.get("max_file_size"), disk_defaults["max_file_size"],
                                    "disk.max_file_size", 1, warnings, strict)
    disk["file_prefix"] = _as_str(disk.get("file_prefix"), disk_defaults["file_prefix"],
                                  "disk.file_prefix", warnings, strict)

    for w in warnings:
        logger.warning(f"Settings constraint: {w}")
    return clean, warnings


# -----------------------------------------------------------------------------
# Factories
# -----------------------------------------------------------------------------

def build_formatter_config(settings: Dict[str, Any], sink: Any = None) -> FormatterConfig:
    """
    Freeze the ``formatter`` section into a FormatterConfig.

    Args:
        settings: Validated settings.
        sink: Destination sink; the console sink is used when None.
    """
    fmt = settings["formatter"]
    return FormatterConfig(
        method_count=fmt["method_count"],
        method_offset=fmt["method_offset"],
        show_thread_info=fmt["show_thread_info"],
        tag=fmt["tag"],
        sink=sink,
    )


def build_disk_config(settings: Dict[str, Any]) -> DiskConfig:
    """Freeze the ``disk`` section into a DiskConfig."""
    disk = settings["disk"]
    return DiskConfig(
        folder=disk["folder"],
        max_file_size=disk["max_file_size"],
        file_prefix=disk["file_prefix"],
    )


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(msg: str, fallback: Any, warnings: List[str], strict: bool, exc: type) -> Any:
    if strict:
        raise exc(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_int(value: Any, fallback: int, field: str, minimum: int,
            warnings: List[str], strict: bool) -> int:
    """Validate integers, rejecting bools and values below ``minimum``."""
    if value is None:
        return fallback
    if isinstance(value, bool) or not isinstance(value, int):
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            value = int(value.strip())
        else:
            return _reject(f"Invalid field '{field}': expected int, received {type(value).__name__}.",
                           fallback, warnings, strict, TypeError)
    if value < minimum:
        return _reject(f"Invalid field '{field}': must be >= {minimum}, received {value}.",
                       fallback, warnings, strict, ValueError)
    return value


def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    if value is None:
        return fallback
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "false", "1", "0", "yes", "no"):
        return value.strip().lower() in ("true", "1", "yes")
    return _reject(f"Invalid field '{field}': expected bool, received {type(value).__name__}.",
                   fallback, warnings, strict, TypeError)


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if isinstance(value, str):
        v = value.strip()
        return v if v else fallback
    return _reject(f"Invalid field '{field}': expected str, received {type(value).__name__}.",
                   fallback, warnings, strict, TypeError)
