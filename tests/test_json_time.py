import json
from datetime import datetime

import pytest

from adminkit.json_time import TIME_FORMAT, JSONTime


def test_zero_value_serialises_as_empty_string():
    assert JSONTime().to_json() == '""'
    assert JSONTime(datetime.min).to_json() == '""'


def test_timestamp_format_pinned():
    stamp = JSONTime(datetime(2021, 6, 9, 10, 39, 0))
    assert stamp.to_json() == '"2021-06-09 10:39:00"'


def test_to_json_round_trip():
    moment = datetime(2020, 8, 20, 23, 5, 7)
    text = JSONTime(moment).to_json()
    assert datetime.strptime(json.loads(text), TIME_FORMAT) == moment


def test_value_of_zero_is_none():
    assert JSONTime().value() is None


def test_value_returns_time():
    moment = datetime(2022, 1, 2, 3, 4, 5)
    assert JSONTime(moment).value() == moment


def test_scan_datetime():
    moment = datetime(2022, 1, 2, 3, 4, 5)
    assert JSONTime.scan(moment) == JSONTime(moment)


@pytest.mark.parametrize("bad", ["2022-01-02", 12, None])
def test_scan_rejects_non_datetime(bad):
    with pytest.raises(TypeError, match="can not convert"):
        JSONTime.scan(bad)