"""Call-site resolution for log records."""

import os
import sys

UNKNOWN_LOCATION = "unknown:0"


def caller_location(depth: int = 1) -> str:
    """Return the source location of a frame above the caller.

    Args:
        depth: Number of frames to skip above the function calling
            caller_location. 1 is that function's caller.

    Returns:
        "<file basename>:<line>", or UNKNOWN_LOCATION if the frame is not
        available.
    """
    try:
        frame = sys._getframe(depth + 1)
    except (AttributeError, ValueError):
        return UNKNOWN_LOCATION
    code = frame.f_code
    return f"{os.path.basename(code.co_filename)}:{frame.f_lineno}"
