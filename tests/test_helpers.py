import base64
import binascii
import os
import time

import pytest

from adminkit.helpers import (
    base64_to_image,
    get_current_timestamp,
    get_dir_files,
    get_uuid,
    is_string_empty,
    md5_hex,
    path_exists,
    remove_duplicates,
)


def test_md5_hex_of_empty_string():
    assert md5_hex("") == "d41d8cd98f00b204e9800998ecf8427e"


def test_md5_hex_shape():
    digest = md5_hex("admin")
    assert len(digest) == 32
    assert digest == md5_hex("admin")


def test_is_string_empty():
    assert is_string_empty("   ") is True
    assert is_string_empty("") is True
    assert is_string_empty(" a ") is False
    assert is_string_empty("\t") is False


def test_get_uuid():
    first = get_uuid()
    assert len(first) == 32
    assert "-" not in first
    int(first, 16)
    assert first != get_uuid()


def test_path_exists(tmp_path):
    assert path_exists(tmp_path) is True
    assert path_exists(tmp_path / "missing") is False


def test_base64_round_trip():
    raw = b"\x89PNG\r\n\x1a\n"
    assert base64_to_image(base64.b64encode(raw).decode()) == raw


def test_base64_invalid():
    with pytest.raises(binascii.Error):
        base64_to_image("not*base64")


def test_get_dir_files(tmp_path):
    (tmp_path / "b").mkdir()
    (tmp_path / "a.txt").write_text("1")
    (tmp_path / "b" / "c.txt").write_text("2")
    root = str(tmp_path)
    assert get_dir_files(root) == [
        root + os.sep + "a.txt",
        root + os.sep + "b" + os.sep + "c.txt",
    ]


def test_get_dir_files_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        get_dir_files(str(tmp_path / "missing"))


def test_get_current_timestamp():
    before = int(time.time() * 1000) - 1
    stamp = get_current_timestamp()
    after = int(time.time() * 1000) + 1
    assert before <= stamp <= after


def test_remove_duplicates():
    assert remove_duplicates(["a", "b", "a", "c", "b"]) == ["a", "b", "c"]