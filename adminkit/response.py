"""Standard JSON responses."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from adminkit.context import RequestContext, generate_msg_id


def _plain(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    return to_dict() if callable(to_dict) else value


@dataclass
class Response:
    """A response body: request id, code, message, status and data."""

    request_id: str = ""
    code: int = 0
    msg: str = ""
    status: str = ""
    data: Any = None

    def clone(self) -> "Response":
        return dataclasses.replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; empty header fields are left out."""
        body: dict[str, Any] = {}
        if self.request_id:
            body["requestId"] = self.request_id
        if self.code:
            body["code"] = self.code
        if self.msg:
            body["msg"] = self.msg
        if self.status:
            body["status"] = self.status
        body["data"] = _plain(self.data)
        return body


@dataclass
class Page:
    """A page of results."""

    count: int = 0
    page_index: int = 0
    page_size: int = 0
    list: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "count": self.count,
            "pageIndex": self.page_index,
            "pageSize": self.page_size,
            "list": self.list,
        }


DEFAULT = Response()


def _finish(ctx: RequestContext, res: Response, code: int) -> None:
    ctx.set("result", res)
    ctx.set("status", code)
    ctx.abort_with_status_json(int(HTTPStatus.OK), res.to_dict())


def error(ctx: RequestContext, code: int, err: BaseException | None, msg: str) -> None:
    """Finish the request with an error body."""
    res = DEFAULT.clone()
    if err is not None:
        res.msg = str(err)
    if msg:
        res.msg = msg
    res.request_id = generate_msg_id(ctx)
    res.code = code
    res.status = "error"
    _finish(ctx, res, code)


def ok(ctx: RequestContext, data: Any, msg: str) -> None:
    """Finish the request with a success body."""
    res = DEFAULT.clone()
    res.data = data
    if msg:
        res.msg = msg
    res.request_id = generate_msg_id(ctx)
    res.code = int(HTTPStatus.OK)
    _finish(ctx, res, int(HTTPStatus.OK))


def page_ok(
    ctx: RequestContext, result: Any, count: int, page_index: int, page_size: int, msg: str
) -> None:
    """Finish the request with a page of results."""
    ok(ctx, Page(count, page_index, page_size, result), msg)


def custom(ctx: RequestContext, data: dict[str, Any]) -> None:
    """Finish the request with a caller-built body, adding the request id."""
    data["requestId"] = generate_msg_id(ctx)
    ctx.set("result", data)
    ctx.abort_with_status_json(int(HTTPStatus.OK), data)