"""An exception that carries an API error response."""

from __future__ import annotations

import time
from http import HTTPStatus
from typing import Any


class APIException(Exception):
    """An API result with code, success flag, message and payload."""

    def __init__(self, code: int, msg: str, result: Any = None, success: bool = False) -> None:
        super().__init__(msg)
        self.code = code
        self.success = success
        self.msg = msg
        self.timestamp = int(time.time())
        self.result = result

    def __str__(self) -> str:
        return self.msg

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of the response."""
        return {
            "code": self.code,
            "success": self.success,
            "msg": self.msg,
            "timestamp": self.timestamp,
            "result": self.result,
        }


def server_error() -> APIException:
    status = HTTPStatus.INTERNAL_SERVER_ERROR
    return APIException(int(status), status.phrase)


def not_found() -> APIException:
    status = HTTPStatus.NOT_FOUND
    return APIException(int(status), status.phrase)


def unknown_error(message: str) -> APIException:
    return APIException(int(HTTPStatus.FORBIDDEN), message)


def parameter_error(message: str) -> APIException:
    return APIException(int(HTTPStatus.BAD_REQUEST), message)


def auth_error(message: str) -> APIException:
    return APIException(int(HTTPStatus.BAD_REQUEST), message)


def response_json(message: str, data: Any, success: bool) -> APIException:
    return APIException(int(HTTPStatus.OK), message, data, success)