"""Table sharding by CRC32 of a field value."""

from __future__ import annotations

import zlib
from typing import Any, Callable


def _crc_mod(src: str, buckets: int) -> str:
    return str(zlib.crc32(src.encode()) % buckets)


def crc32_hash(src: str) -> str:
    """Shard index for 32 tables."""
    return _crc_mod(src, 32)


def crc16_hash(src: str) -> str:
    """Shard index for 16 tables."""
    return _crc_mod(src, 16)


def crc8_hash(src: str) -> str:
    """Shard index for 8 tables."""
    return _crc_mod(src, 8)


def dynamic_table(
    func: Callable[[str], str], base_table: str, field_value: str
) -> Callable[[Any], Any]:
    """Return a scope that points a query at the shard table for *field_value*."""

    def scope(db: Any) -> Any:
        return db.table(f"{base_table}_{func(field_value)}")

    return scope