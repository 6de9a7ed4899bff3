from __future__ import annotations

"""
Call-Stack Context Extraction.

Captures the interpreter call stack as an ordered list of CapturedFrame
values and locates the boundary between the library's own frames and the
external caller. The formatter only ever sees the captured sequence.
"""

import os
import sys
from typing import Iterable, List, Sequence

from prettylogger.domain.constants import (
    INTERNAL_MODULES,
    MIN_STACK_OFFSET,
    STACK_NOT_FOUND,
)
from prettylogger.domain.models import CapturedFrame

# -----------------------------------------------------------------------------
# STACK CAPTURE
# -----------------------------------------------------------------------------

def capture_call_stack() -> List[CapturedFrame]:
    """
    Snapshot the current call stack.

    The frame of this function itself is excluded, so index 0 is the
    function that called ``capture_call_stack``.

    Returns:
        List[CapturedFrame]: Frames ordered from the capture point outwards.
    """
    frames: List[CapturedFrame] = []
    frame = sys._getframe(1)
    while frame is not None:
        code = frame.f_code
        frames.append(
            CapturedFrame(
                declaring_type_name=str(frame.f_globals.get("__name__", "")),
                method_name=getattr(code, "co_qualname", code.co_name),
                file_name=os.path.basename(code.co_filename),
                line_number=frame.f_lineno or 0,
            )
        )
        frame = frame.f_back
    return frames


# -----------------------------------------------------------------------------
# OFFSET INFERENCE
# -----------------------------------------------------------------------------

def get_stack_offset(
        frames: Sequence[CapturedFrame],
        internal_types: Iterable[str] = INTERNAL_MODULES,
        min_offset: int = MIN_STACK_OFFSET,
) -> int:
    """
    Determine the starting index of the caller frames.

    Scans from ``min_offset`` for the first frame declared outside the
    library call chain and returns its index minus one, so that
    ``offset + 1`` addresses the external caller.

    Args:
        frames: Captured stack, shallowest first.
        internal_types: Module names treated as library internals.
        min_offset: First index that may belong to a caller.

    Returns:
        int: The stack offset, or STACK_NOT_FOUND if every frame is internal.
    """
    internal = set(internal_types)
    for i in range(min_offset, len(frames)):
        if frames[i].declaring_type_name not in internal:
            return i - 1
    return STACK_NOT_FOUND


def simple_type_name(name: str) -> str:
    """Return the last dotted component of a declaring type name."""
    return name[name.rfind(".") + 1:]


def format_frame(frame: CapturedFrame) -> str:
    """
    Render a frame as ``Type.method  (file:line)``.

    Args:
        frame: Frame to render.

    Returns:
        str: Printable frame description without border or indentation.
    """
    return (
        f"{simple_type_name(frame.declaring_type_name)}.{frame.method_name} "
        f" ({frame.file_name}:{frame.line_number})"
    )
