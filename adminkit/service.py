"""Base for business services that collect errors."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class CombinedError(Exception):
    """An error added on top of an earlier one."""

    def __init__(self, previous: BaseException, error: BaseException) -> None:
        super().__init__(f"{previous}; {error}")
        self.previous = previous
        self.error = error
        self.__cause__ = error


@dataclass
class Service:
    """Holds the handles a service needs and the errors it met."""

    orm: Any = None
    msg: str = ""
    msg_id: str = ""
    log: Any = None
    error: BaseException | None = None
    cache: Any = None

    def add_error(self, err: BaseException | None) -> BaseException | None:
        """Record *err*, combining it with any earlier error, and return the result."""
        if self.error is None:
            self.error = err
        elif err is not None:
            self.error = CombinedError(self.error, err)
        return self.error