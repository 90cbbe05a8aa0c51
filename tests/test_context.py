import uuid

import pytest

from adminkit.context import (
    TRAFFIC_KEY,
    CustomError,
    Mode,
    RequestContext,
    assert_condition,
    generate_msg_id,
    get_orm,
    has_error,
)


def test_mode_values():
    assert Mode("dev") is Mode.DEV
    assert str(Mode.PROD) == "prod"


def test_header_lookup_is_case_insensitive():
    ctx = RequestContext(headers={"X-Request-Id": "abc"})
    assert ctx.get_header("x-request-id") == "abc"
    assert ctx.get_header("Missing") == ""


def test_generate_msg_id_uses_existing_header():
    ctx = RequestContext(headers={TRAFFIC_KEY: "req-1"})
    assert generate_msg_id(ctx) == "req-1"
    assert TRAFFIC_KEY not in ctx.response_headers


def test_generate_msg_id_creates_uuid():
    ctx = RequestContext()
    request_id = generate_msg_id(ctx)
    assert str(uuid.UUID(request_id)) == request_id
    assert ctx.response_headers[TRAFFIC_KEY] == request_id


def test_get_orm_missing():
    with pytest.raises(LookupError, match="db connect not exist"):
        get_orm(RequestContext())


def test_get_orm_present():
    db = object()
    ctx = RequestContext()
    ctx.set("db", db)
    assert get_orm(ctx) is db


def test_assert_condition_raises_with_default_code():
    with pytest.raises(CustomError) as info:
        assert_condition(False, "bad")
    assert str(info.value) == "CustomError#200#bad"
    assert info.value.status_code == 200


def test_assert_condition_custom_code():
    with pytest.raises(CustomError) as info:
        assert_condition(1 > 2, "denied", 403)
    assert info.value.status_code == 403
    assert info.value.msg == "denied"


def test_has_error_without_error_returns_none():
    assert has_error(None, "unused") is None


def test_has_error_uses_error_text():
    with pytest.raises(CustomError) as info:
        has_error(ValueError("boom"), "")
    assert info.value.msg == "boom"
    assert isinstance(info.value.__cause__, ValueError)


def test_has_error_keeps_message_and_code():
    with pytest.raises(CustomError) as info:
        has_error(RuntimeError("x"), "failed", 500)
    assert str(info.value) == "CustomError#500#failed"


def test_abort_with_status_json():
    ctx = RequestContext()
    ctx.abort_with_status_json(200, {"code": 200})
    assert ctx.aborted is True
    assert ctx.status == 200
    assert ctx.body == {"code": 200}