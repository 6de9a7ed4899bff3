from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Path resolution and directory helpers for the disk sink and the CLI. Acts
as a thin abstraction over 'os' so that Windows and Unix-like systems
resolve the same default locations.
"""

import os
from typing import List, Optional, Tuple

from prettylogger.domain.constants import DEFAULT_LOG_FOLDER_NAME, LOG_FILE_EXTENSION

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "PrettyLogger"
UNIX_APP_DIR_NAME = ".prettylogger"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/PrettyLogger
    - Linux/Mac: ~/.prettylogger

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def get_default_log_folder() -> str:
    """Return the folder used by disk sinks created without an explicit folder."""
    return os.path.join(get_user_data_dir(), DEFAULT_LOG_FOLDER_NAME)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Expands environment variables and ``~``. Reverts to fallback if the
    input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use if the input is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))


# -----------------------------------------------------------------------------
# ROTATION FILE NAMING
# -----------------------------------------------------------------------------

def rotation_file_path(folder: str, prefix: str, index: int) -> str:
    """Build the path of the ``index``-th rotation file (``<prefix>_<n>.csv``)."""
    return os.path.join(folder, f"{prefix}_{index}{LOG_FILE_EXTENSION}")


def list_rotation_files(folder: str, prefix: str) -> List[str]:
    """
    List the contiguous run of rotation files starting at suffix 0.

    Args:
        folder: Directory to inspect.
        prefix: Rotation file prefix.

    Returns:
        List[str]: Existing paths in suffix order; stops at the first gap.
    """
    files: List[str] = []
    index = 0
    path = rotation_file_path(folder, prefix, index)
    while os.path.exists(path):
        files.append(path)
        index += 1
        path = rotation_file_path(folder, prefix, index)
    return files


# -----------------------------------------------------------------------------
# DIRECTORY MANAGEMENT
# -----------------------------------------------------------------------------

def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)
