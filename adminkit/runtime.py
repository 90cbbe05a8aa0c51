"""Application runtime registry and tenant-prefixed storage adapters."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

PREFIX_KEY = "__prefix"
WX_TOKEN_STORE_KEY = "wx_token_store_key"
_INTERVAL_TENANT = ""


@dataclass(frozen=True)
class Router:
    """One route of the HTTP engine."""

    http_method: str
    relative_path: str
    handler: str


@dataclass
class Message:
    """A queue message: id, stream name and values."""

    id: str = ""
    stream: str = ""
    values: dict[str, Any] | None = None


class PrefixedCache:
    """A cache whose keys are prefixed with a tenant marker."""

    def __init__(
        self, prefix: str, store: Any, wx_token_store_key: str = WX_TOKEN_STORE_KEY
    ) -> None:
        self.prefix = prefix
        self.store = store
        self.wx_token_store_key = wx_token_store_key or WX_TOKEN_STORE_KEY

    def __str__(self) -> str:
        return "" if self.store is None else str(self.store)

    def _key(self, key: str) -> str:
        return self.prefix + _INTERVAL_TENANT + key

    def get(self, key: str) -> Any:
        return self.store.get(self._key(key))

    def set(self, key: str, value: Any, expire: int) -> Any:
        return self.store.set(self._key(key), value, expire)

    def delete(self, key: str) -> Any:
        return self.store.delete(self._key(key))

    def hash_get(self, hk: str, key: str) -> Any:
        """Read a field of the hash *hk*; only the field name is prefixed."""
        return self.store.hash_get(hk, self._key(key))

    def hash_del(self, hk: str, key: str) -> Any:
        return self.store.hash_del(hk, self._key(key))

    def increase(self, key: str) -> Any:
        return self.store.increase(self._key(key))

    def decrease(self, key: str) -> Any:
        return self.store.decrease(self._key(key))

    def expire(self, key: str, duration: Any) -> Any:
        return self.store.expire(self._key(key), duration)

    def token(self) -> dict[str, Any]:
        """Return the stored OAuth2 token, decoded from JSON."""
        return json.loads(self.store.get(self._key(self.wx_token_store_key)))

    def put_token(self, token: Mapping[str, Any]) -> Any:
        """Store an OAuth2 token; it expires 200 seconds before the token does."""
        encoded = json.dumps(dict(token), separators=(",", ":"))
        expire = int(token.get("expires_in", 0)) - 200
        return self.store.set(self._key(self.wx_token_store_key), encoded, expire)


class PrefixedLocker:
    """A distributed locker whose keys are prefixed with a tenant marker."""

    def __init__(self, prefix: str, locker: Any) -> None:
        self.prefix = prefix
        self.locker = locker

    def __str__(self) -> str:
        return str(self.locker)

    def lock(self, key: str, ttl: int, options: Any = None) -> Any:
        return self.locker.lock(self.prefix + _INTERVAL_TENANT + key, ttl, options)


class PrefixedQueue:
    """A queue that tags every appended message with a tenant marker."""

    def __init__(self, prefix: str, queue: Any) -> None:
        self.prefix = prefix
        self.queue = queue

    def __str__(self) -> str:
        return str(self.queue)

    def register(self, name: str, func: Callable[[Any], Any]) -> None:
        """Register a consumer for the stream *name*."""
        self.queue.register(name, func)

    def append(self, message: Any) -> Any:
        """Tag the message with the prefix and hand it to the producer."""
        if message.values is None:
            message.values = {}
        message.values[PREFIX_KEY] = self.prefix
        return self.queue.append(message)

    def run(self) -> None:
        self.queue.run()

    def shutdown(self) -> None:
        if self.queue is not None:
            self.queue.shutdown()


def _by_key(mapping: Mapping[str, Any], key: str) -> Any:
    if "*" in mapping:
        return mapping["*"]
    return mapping.get(key)


class Application:
    """Holds the shared resources of a running application."""

    def __init__(self, memory_queue: Any = None) -> None:
        self._lock = threading.RLock()
        self._dbs: dict[str, Any] = {}
        self._casbins: dict[str, Any] = {}
        self._crontabs: dict[str, Any] = {}
        self._middlewares: dict[str, Any] = {}
        self._handlers: dict[str, list[Callable[..., Any]]] = {}
        self._routers: list[Router] = []
        self._configs: dict[str, Any] = {}
        self._app_routers: list[Callable[[], Any]] = []
        self.memory_queue = memory_queue
        self.engine: Any = None
        self.logger: logging.Logger = logging.getLogger("adminkit")
        self.cache: Any = None
        self.queue: Any = None
        self.locker: Any = None

    def set_db(self, key: str, db: Any) -> None:
        with self._lock:
            self._dbs[key] = db

    def get_dbs(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._dbs)

    def get_db_by_key(self, key: str) -> Any:
        """Return the db for *key*; a db stored under "*" wins for every key."""
        with self._lock:
            return _by_key(self._dbs, key)

    def set_casbin(self, key: str, enforcer: Any) -> None:
        with self._lock:
            self._casbins[key] = enforcer

    def get_casbins(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._casbins)

    def get_casbin_by_key(self, key: str) -> Any:
        with self._lock:
            return _by_key(self._casbins, key)

    def get_router(self) -> list[Router]:
        """Collect the engine's routes into the route table and return it."""
        routes = getattr(self.engine, "routes", None)
        if callable(routes):
            for route in routes():
                self._routers.append(Router(route.method, route.path, route.handler))
        return list(self._routers)

    def set_crontab(self, key: str, crontab: Any) -> None:
        with self._lock:
            self._crontabs[key] = crontab

    def get_crontabs(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._crontabs)

    def get_crontab_by_key(self, key: str) -> Any:
        with self._lock:
            return _by_key(self._crontabs, key)

    def set_middleware(self, key: str, middleware: Any) -> None:
        with self._lock:
            self._middlewares[key] = middleware

    def get_middlewares(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._middlewares)

    def get_middleware_by_key(self, key: str) -> Any:
        with self._lock:
            return self._middlewares.get(key)

    def get_cache_adapter(self) -> PrefixedCache:
        return PrefixedCache("", self.cache)

    def get_cache_prefix(self, key: str) -> PrefixedCache:
        return PrefixedCache(key, self.cache)

    def get_queue_adapter(self) -> PrefixedQueue:
        return PrefixedQueue("", self.queue)

    def get_queue_prefix(self, key: str) -> PrefixedQueue:
        return PrefixedQueue(key, self.queue)

    def get_locker_adapter(self) -> PrefixedLocker:
        return PrefixedLocker("", self.locker)

    def get_locker_prefix(self, key: str) -> PrefixedLocker:
        return PrefixedLocker(key, self.locker)

    def get_memory_queue(self, prefix: str) -> PrefixedQueue:
        return PrefixedQueue(prefix, self.memory_queue)

    def set_handler(self, key: str, handler: Callable[..., Any]) -> None:
        with self._lock:
            self._handlers.setdefault(key, []).append(handler)

    def get_handlers(self) -> dict[str, list[Callable[..., Any]]]:
        with self._lock:
            return {key: list(value) for key, value in self._handlers.items()}

    def get_handler_prefix(self, key: str) -> list[Callable[..., Any]]:
        with self._lock:
            return list(self._handlers.get(key, []))

    def get_stream_message(
        self, message_id: str, stream: str, values: dict[str, Any] | None
    ) -> Message:
        """Build a message for the queue."""
        return Message(message_id, stream, values)

    def set_config(self, key: str, value: Any) -> None:
        with self._lock:
            self._configs[key] = value

    def get_config(self, key: str) -> Any:
        with self._lock:
            return self._configs.get(key)

    def add_app_router(self, router: Callable[[], Any]) -> None:
        self._app_routers.append(router)

    def get_app_routers(self) -> list[Callable[[], Any]]:
        return list(self._app_routers)


RUNTIME = Application()