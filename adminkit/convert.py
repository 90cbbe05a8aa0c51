"""Small number and string conversions."""

from __future__ import annotations

import dataclasses
import json
import math
import re
from datetime import datetime
from typing import Any

from adminkit.context import RequestContext

_INT_RE = re.compile(r"[+-]?[0-9]+")


def round_half_up(value: float, digits: int) -> float:
    """Round *value* to *digits* decimals, halves going up."""
    scale = 10.0**digits
    return math.trunc((value + 0.5 / scale) * scale) / scale


def string_to_int(text: str) -> int:
    """Parse a plain decimal integer with an optional sign."""
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    return int(text)


def ids_from_string(keys: str) -> list[int]:
    """Split a comma separated list of ids; unparsable items become 0."""
    ids = []
    for part in keys.split(","):
        try:
            ids.append(string_to_int(part))
        except ValueError:
            ids.append(0)
    return ids


def ids_from_param(ctx: RequestContext, key: str) -> list[int]:
    """Read a comma separated id list from a path parameter."""
    return ids_from_string(ctx.param(key))


def current_time_str() -> str:
    """Return the local time as YYYY-MM-DD HH:MM:SS."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    raise TypeError(f"object of type {type(obj).__name__} is not JSON serializable")


def struct_to_json_str(obj: Any) -> str:
    """Serialise *obj* to compact JSON."""
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False, default=_default)