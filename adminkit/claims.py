"""Typed access to JWT claims."""

from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import Any

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1
_UINT64_MOD = 1 << 64


def _parse_int64(text: str) -> int:
    if not _INT_RE.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    number = int(text)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"value out of range: {text!r}")
    return number


def _format_float(value: float) -> str:
    """Format like the shortest 'g' representation: exponent form at 1e+06 and up."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value == 0:
        return "-0" if math.copysign(1.0, value) < 0 else "0"
    sign = "-" if value < 0 else ""
    _, raw_digits, exponent = Decimal(repr(abs(value))).as_tuple()
    point = len(raw_digits) + int(exponent)
    digits = "".join(map(str, raw_digits)).rstrip("0")
    count = len(digits)
    exp = point - 1
    if exp < -4 or exp >= 6:
        mantissa = digits[0] + ("." + digits[1:] if count > 1 else "")
        exp_sign = "-" if exp < 0 else "+"
        return f"{sign}{mantissa}e{exp_sign}{abs(exp):02d}"
    if point <= 0:
        return f"{sign}0.{'0' * -point}{digits}"
    if point >= count:
        return sign + digits + "0" * (point - count)
    return f"{sign}{digits[:point]}.{digits[point:]}"


class MapClaims(dict):
    """JWT claims with conversions of values to numbers and strings."""

    def exp(self) -> int:
        return self.as_int64("exp")

    def orig_iat(self) -> int:
        return self.as_int64("orig_iat")

    def identity(self) -> int:
        return self.as_int64("identity")

    def as_int64(self, key: str) -> int:
        """Return the value under *key* as a signed 64-bit integer."""
        value = self.get(key)
        if value is None:
            raise KeyError(f"invalid key '{key}'")
        if isinstance(value, bool):
            raise TypeError(f"invalid value '{value}' type '{type(value).__name__}'")
        if isinstance(value, int):
            if not _INT64_MIN <= value <= _INT64_MAX:
                raise ValueError(f"value out of range: {value}")
            return value
        if isinstance(value, Decimal):
            return _parse_int64(str(value))
        if isinstance(value, float):
            return int(value)
        if isinstance(value, str):
            return _parse_int64(value)
        raise TypeError(f"invalid value '{value}' type '{type(value).__name__}'")

    def as_string(self, key: str) -> str:
        """Return the value under *key* as text; unsupported types give ""."""
        value = self.get(key)
        if value is None or isinstance(value, bool):
            return ""
        if isinstance(value, (int, Decimal)):
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        if isinstance(value, str):
            return value
        return ""

    def as_int(self, key: str) -> int:
        """Return the value under *key* as an integer."""
        return self.as_int64(key)

    def as_uint64(self, key: str) -> int:
        """Return the value under *key* as an unsigned 64-bit integer."""
        return self.as_int64(key) % _UINT64_MOD