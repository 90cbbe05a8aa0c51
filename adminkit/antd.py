"""JSON responses in the shape expected by Ant Design front ends."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any

from adminkit.context import RequestContext, generate_msg_id


class ShowType(str, enum.Enum):
    """How the front end displays an error."""

    SILENT = "0"
    MESSAGE_WARN = "1"
    MESSAGE_ERROR = "2"
    NOTIFICATION = "4"
    PAGE = "9"

    def __str__(self) -> str:
        return self.value


@dataclass
class AntdResponse:
    """An Ant Design response body; empty fields are left out of the JSON."""

    success: bool = False
    error_code: str = ""
    error_message: str = ""
    show_type: str = ""
    trace_id: str = ""
    host: str = ""
    status: str = ""
    data: Any = None

    def set_code(self, code: int) -> None:
        """Record an error code; 0 and 200 mean no error."""
        if code not in (0, 200):
            self.error_code = f"C{code}"

    def to_dict(self) -> dict[str, Any]:
        fields = (
            ("success", self.success),
            ("errorCode", self.error_code),
            ("errorMessage", self.error_message),
            ("showType", str(self.show_type)),
            ("traceId", self.trace_id),
            ("host", self.host),
            ("status", self.status),
        )
        body: dict[str, Any] = {name: value for name, value in fields if value}
        if self.data is not None:
            body["data"] = self.data
        return body


def _finish(ctx: RequestContext, result: Any, status: Any, body: dict[str, Any]) -> None:
    ctx.set("result", result)
    ctx.set("status", status)
    ctx.abort_with_status_json(int(HTTPStatus.OK), body)


def error(ctx: RequestContext, err_code: str, err_msg: str, show_type: str) -> None:
    """Finish the request with an error body."""
    res = AntdResponse(
        error_message=err_msg,
        show_type=show_type,
        trace_id=generate_msg_id(ctx),
        error_code=err_code,
    )
    _finish(ctx, res, err_code, res.to_dict())


def ok(ctx: RequestContext, data: Any) -> None:
    """Finish the request with a success body."""
    res = AntdResponse(success=True, status="done", data=data, trace_id=generate_msg_id(ctx))
    _finish(ctx, res, int(HTTPStatus.OK), res.to_dict())


def up_file_ok(ctx: RequestContext, data: Any) -> None:
    """Finish an upload request with a success body."""
    ok(ctx, data)


def _counts(total: int, current: int, page_size: int) -> dict[str, int]:
    pairs = (("total", total), ("current", current), ("pageSize", page_size))
    return {name: value for name, value in pairs if value}


def page_ok(ctx: RequestContext, result: Any, total: int, current: int, page_size: int) -> None:
    """Finish the request with a page: data plus total, current and pageSize."""
    res = AntdResponse(success=True, data=result, trace_id=generate_msg_id(ctx))
    body = res.to_dict()
    body.update(_counts(total, current, page_size))
    _finish(ctx, body, int(HTTPStatus.OK), body)


def list_ok(ctx: RequestContext, result: Any, total: int, current: int, page_size: int) -> None:
    """Finish the request with a list nested under data with its counts."""
    list_data: dict[str, Any] = {}
    if result is not None:
        list_data["list"] = result
    list_data.update(_counts(total, current, page_size))
    res = AntdResponse(success=True, data=list_data, trace_id=generate_msg_id(ctx))
    body = res.to_dict()
    _finish(ctx, body, int(HTTPStatus.OK), body)


def custom(ctx: RequestContext, data: dict[str, Any]) -> None:
    """Finish the request with a caller-built body, adding the trace id."""
    data["traceId"] = generate_msg_id(ctx)
    ctx.set("result", data)
    ctx.abort_with_status_json(int(HTTPStatus.OK), data)