from http import HTTPStatus

from adminkit.antd import (
    AntdResponse,
    ShowType,
    custom,
    error,
    list_ok,
    ok,
    page_ok,
    up_file_ok,
)
from adminkit.context import TRAFFIC_KEY, RequestContext


def _ctx():
    return RequestContext(headers={TRAFFIC_KEY: "t1"})


def test_error_body():
    ctx = _ctx()
    error(ctx, "500", "bad", ShowType.MESSAGE_ERROR)
    assert ctx.body == {
        "errorCode": "500",
        "errorMessage": "bad",
        "showType": "2",
        "traceId": "t1",
    }
    assert ctx.status == HTTPStatus.OK
    assert ctx.get("status") == "500"
    assert ctx.get("result").success is False


def test_error_empty_fields_omitted():
    ctx = _ctx()
    error(ctx, "E1", "", "")
    assert ctx.body == {"errorCode": "E1", "traceId": "t1"}


def test_ok_body():
    ctx = _ctx()
    ok(ctx, {"id": 1})
    assert ctx.body == {"success": True, "traceId": "t1", "status": "done", "data": {"id": 1}}
    assert ctx.get("status") == HTTPStatus.OK


def test_ok_without_data_omits_it():
    ctx = _ctx()
    ok(ctx, None)
    assert "data" not in ctx.body


def test_up_file_ok_matches_ok():
    first, second = _ctx(), _ctx()
    ok(first, "file.png")
    up_file_ok(second, "file.png")
    assert first.body == second.body


def test_page_ok():
    ctx = _ctx()
    page_ok(ctx, [1, 2], 2, 1, 10)
    assert ctx.body == {
        "success": True,
        "traceId": "t1",
        "data": [1, 2],
        "total": 2,
        "current": 1,
        "pageSize": 10,
    }


def test_page_ok_zero_counts_omitted():
    ctx = _ctx()
    page_ok(ctx, [1], 0, 0, 0)
    assert ctx.body == {"success": True, "traceId": "t1", "data": [1]}


def test_list_ok():
    ctx = _ctx()
    list_ok(ctx, ["a"], 1, 1, 10)
    assert ctx.body["data"] == {"list": ["a"], "total": 1, "current": 1, "pageSize": 10}
    assert ctx.body["success"] is True


def test_list_ok_keeps_data_even_when_empty():
    ctx = _ctx()
    list_ok(ctx, None, 0, 0, 0)
    assert ctx.body["data"] == {}
    other = _ctx()
    list_ok(other, [], 0, 0, 0)
    assert other.body["data"] == {"list": []}


def test_set_code():
    res = AntdResponse()
    res.set_code(200)
    assert res.error_code == ""
    res.set_code(0)
    assert res.error_code == ""
    res.set_code(404)
    assert res.error_code == "C404"


def test_custom_adds_trace_id():
    ctx = _ctx()
    custom(ctx, {"k": "v"})
    assert ctx.body == {"k": "v", "traceId": "t1"}


def test_show_type_string():
    assert str(ShowType.PAGE) == "9"
    assert ShowType("0") is ShowType.SILENT