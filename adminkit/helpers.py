"""Assorted helpers: hashing, ids, paths and lists."""

from __future__ import annotations

import base64
import hashlib
import os
import time
import uuid
from typing import Hashable, Iterable, TypeVar

T = TypeVar("T", bound=Hashable)


def md5_hex(data: str) -> str:
    """Return the hex MD5 digest of *data*."""
    return hashlib.md5(data.encode()).hexdigest()


def is_string_empty(text: str) -> bool:
    """Return True when *text* holds nothing but spaces."""
    return text.strip(" ") == ""


def get_uuid() -> str:
    """Return a random UUID without dashes."""
    return uuid.uuid4().hex


def path_exists(path: str | os.PathLike) -> bool:
    """Return True when *path* can be examined."""
    try:
        os.stat(path)
    except OSError:
        return False
    return True


def base64_to_image(data: str) -> bytes:
    """Decode standard base64 text; invalid input raises binascii.Error."""
    return base64.b64decode(data, validate=True)


def get_dir_files(directory: str) -> list[str]:
    """Return every file below *directory*, recursively, in name order."""
    files: list[str] = []
    for name in sorted(os.listdir(directory)):
        path = directory + os.sep + name
        if os.path.isdir(path):
            files.extend(get_dir_files(path))
        else:
            files.append(path)
    return files


def get_current_timestamp() -> int:
    """Return the current time in milliseconds."""
    return time.time_ns() // 1_000_000


def remove_duplicates(items: Iterable[T]) -> list[T]:
    """Return items with duplicates removed, first occurrence kept."""
    return list(dict.fromkeys(items))