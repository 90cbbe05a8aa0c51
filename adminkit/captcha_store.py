"""A captcha answer store kept in a cache."""

from __future__ import annotations

from typing import Any, Protocol


class _Cache(Protocol):
    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any, expire: int) -> Any: ...

    def delete(self, key: str) -> Any: ...


class CacheStore:
    """Stores captcha answers in a cache for *expiration* seconds.

    The cache's ``get`` raises LookupError (or returns None) for a missing key.
    """

    def __init__(self, cache: _Cache, expiration: int) -> None:
        self.cache = cache
        self.expiration = expiration

    def set(self, captcha_id: str, value: str) -> None:
        """Store the answer for a captcha id."""
        self.cache.set(captcha_id, value, self.expiration)

    def get(self, captcha_id: str, clear: bool) -> str:
        """Return the stored answer, or "" when absent; delete it when *clear*."""
        try:
            value = self.cache.get(captcha_id)
        except LookupError:
            return ""
        if value is None:
            return ""
        if clear:
            try:
                self.cache.delete(captcha_id)
            except LookupError:
                pass
        return value

    def verify(self, captcha_id: str, answer: str, clear: bool) -> bool:
        """Return True when *answer* matches the stored answer."""
        return self.get(captcha_id, clear) == answer