"""Request context, run modes and request-level assertions."""

from __future__ import annotations

import enum
import logging
import uuid
from dataclasses import dataclass, field
from typing import Any

TRAFFIC_KEY = "X-Request-Id"
LOGGER_KEY = "_go-admin-logger-request"
MYSQL = "mysql"
SQLITE = "sqlite3"

_log = logging.getLogger(__name__)


class Mode(str, enum.Enum):
    """Run mode of the application."""

    DEV = "dev"
    TEST = "test"
    PROD = "prod"

    def __str__(self) -> str:
        return self.value


class CustomError(Exception):
    """Raised to stop handling a request with a given status code and message."""

    def __init__(self, status_code: int, msg: str) -> None:
        self.status_code = status_code
        self.msg = msg
        super().__init__(f"CustomError#{status_code}#{msg}")


@dataclass
class RequestContext:
    """A minimal HTTP request context: headers, path params and per-request values."""

    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    response_headers: dict[str, str] = field(default_factory=dict)
    status: int | None = None
    body: Any = None
    aborted: bool = False

    def __post_init__(self) -> None:
        self.headers = {name.lower(): value for name, value in self.headers.items()}

    def get_header(self, name: str) -> str:
        """Return a request header, or an empty string when it is absent."""
        return self.headers.get(name.lower(), "")

    def set_header(self, name: str, value: str) -> None:
        """Set a response header."""
        self.response_headers[name] = value

    def get(self, key: str) -> Any:
        """Return a value stored on the context, or None."""
        return self.values.get(key)

    def set(self, key: str, value: Any) -> None:
        """Store a value on the context."""
        self.values[key] = value

    def param(self, key: str) -> str:
        """Return a path parameter, or an empty string when it is absent."""
        return self.params.get(key, "")

    def abort_with_status_json(self, status: int, body: Any) -> None:
        """Finish the request with a status and a JSON body."""
        self.status = status
        self.body = body
        self.aborted = True


def generate_msg_id(ctx: RequestContext) -> str:
    """Return the request id header, creating one in the response when missing."""
    request_id = ctx.get_header(TRAFFIC_KEY)
    if not request_id:
        request_id = str(uuid.uuid4())
        ctx.set_header(TRAFFIC_KEY, request_id)
    return request_id


def get_orm(ctx: RequestContext) -> Any:
    """Return the database handle stored under "db" in the context."""
    db = ctx.get("db")
    if db is None:
        raise LookupError("db connect not exist")
    return db


def assert_condition(condition: bool, msg: str, code: int = 200) -> None:
    """Raise CustomError when *condition* is false."""
    if not condition:
        raise CustomError(code, msg)


def has_error(err: BaseException | None, msg: str, code: int = 200) -> None:
    """Raise CustomError when *err* is set; the message defaults to the error text."""
    if err is None:
        return
    if not msg:
        msg = str(err)
    _log.error("error: %r", err, stacklevel=2)
    raise CustomError(code, msg) from err