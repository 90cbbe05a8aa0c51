"""File and directory helpers."""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import BinaryIO, Iterator, Protocol

_log = logging.getLogger(__name__)


class _Stop(Protocol):
    def is_set(self) -> bool: ...


def path_create(path: str | os.PathLike) -> None:
    """Create a directory and its parents."""
    os.makedirs(path, exist_ok=True)


def path_exist(path: str | os.PathLike) -> bool:
    """Return True when *path* is an existing directory."""
    try:
        return os.stat(path) is not None and os.path.isdir(path)
    except OSError as exc:
        _log.info("%s", exc)
        return False


def file_create(content: str, name: str | os.PathLike) -> None:
    """Write *content* to a new file named *name*."""
    with open(name, "w", encoding="utf-8") as handle:
        handle.write(content)


@dataclass
class ReplaceHelper:
    """Replaces text in every file below a root directory."""

    root: str
    old_text: str
    new_text: str

    def do_work(self) -> None:
        errors: list[OSError] = []
        old = self.old_text.encode()
        new = self.new_text.encode()
        for dirpath, _dirnames, filenames in os.walk(self.root, onerror=errors.append):
            if errors:
                raise errors[0]
            _log.info("DIR: %s", dirpath)
            for filename in filenames:
                path = os.path.join(dirpath, filename)
                with open(path, "rb") as handle:
                    content = handle.read()
                with open(path, "wb") as handle:
                    handle.write(content.replace(old, new))
        if errors:
            raise errors[0]


def follow_file(
    path: str | os.PathLike, stop: _Stop | None = None, interval: float = 0.5
) -> Iterator[bytes]:
    """Yield lines appended to *path* after this call, until *stop* is set."""
    handle = open(path, "rb")
    handle.seek(0, os.SEEK_END)
    return _follow(handle, stop, interval)


def _follow(handle: BinaryIO, stop: _Stop | None, interval: float) -> Iterator[bytes]:
    pending = b""
    with handle:
        while stop is None or not stop.is_set():
            chunk = handle.readline()
            if not chunk:
                time.sleep(interval)
                continue
            pending += chunk
            if pending.endswith(b"\n"):
                line, pending = pending, b""
                yield line


def _last_walked_size(path: str) -> int:
    try:
        info = os.lstat(path)
    except OSError:
        return 0
    size = info.st_size
    if os.path.isdir(path) and not os.path.islink(path):
        for name in sorted(os.listdir(path)):
            size = _last_walked_size(os.path.join(path, name))
    return size


def get_file_size(path: str | os.PathLike) -> int:
    """Return the size of a file; for a directory, of the last entry walked."""
    try:
        os.lstat(path)
    except OSError as exc:
        _log.info("%s", exc)
        return 0
    return _last_walked_size(os.fspath(path))


def get_current_path() -> str:
    """Return the working directory with forward slashes."""
    return os.getcwd().replace("\\", "/")


def read_size(stream: BinaryIO) -> int:
    """Read a stream to its end and return how many bytes it held."""
    return len(stream.read())


def get_ext(file_name: str) -> str:
    """Return the extension of the last path element, dot included."""
    base = file_name.rsplit("/", 1)[-1]
    index = base.rfind(".")
    return base[index:] if index >= 0 else ""


def check_exist(path: str | os.PathLike) -> bool:
    """Return True when *path* does NOT exist."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return True
    except OSError:
        return False
    return False


def check_permission(path: str | os.PathLike) -> bool:
    """Return True when *path* cannot be examined for lack of permission."""
    try:
        os.stat(path)
    except PermissionError:
        return True
    except OSError:
        return False
    return False


def is_not_exist_mkdir(path: str | os.PathLike) -> None:
    """Create the directory when it does not exist."""
    if check_exist(path):
        mk_dir(path)


def mk_dir(path: str | os.PathLike) -> None:
    """Create a directory and its parents."""
    os.makedirs(path, exist_ok=True)