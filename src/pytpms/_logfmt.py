"""Debug-log rendering of device bodies.

Bodies are logged on every poll tick, so long strings are cut short.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any


def truncate_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a copy of *value* with long strings truncated."""
    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value
    if isinstance(value, (bytes, bytearray)):
        return f"<bytes:{len(value)}b>"
    if isinstance(value, Mapping):
        return {str(k): truncate_for_log(v, max_string=max_string) for k, v in value.items()}
    if isinstance(value, Sequence):
        return [truncate_for_log(v, max_string=max_string) for v in value]
    return value
