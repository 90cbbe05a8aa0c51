"""Application settings: typed sections, connection options and reload hooks."""

import dataclasses
import logging
import logging.handlers
import os
import socket
import ssl
import sys
import types
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable, Mapping, Optional, Union, get_args, get_origin

from adminkit.files import path_create, path_exist

_log = logging.getLogger(__name__)

_APP_LOGGER = "adminkit"
_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
}

_redis_client: Any = None


def get_redis_client() -> Any:
    """Return the shared redis client, or None when none is set."""
    return _redis_client


def set_redis_client(client: Any) -> None:
    """Replace the shared redis client, closing the previous one."""
    global _redis_client
    if _redis_client is not None and _redis_client is not client:
        closer = getattr(_redis_client, "close", None)
        if callable(closer):
            closer()
    _redis_client = client


@dataclass
class ApplicationConfig:
    read_timeout: int = 0
    writer_timeout: int = 0
    host: str = ""
    port: int = 0
    name: str = ""
    jwt_secret: str = ""
    mode: str = ""
    demo_msg: str = ""
    enable_dp: bool = False


@dataclass
class SslConfig:
    key_str: str = ""
    pem: str = ""
    enable: bool = False
    domain: str = ""


@dataclass
class LoggerConfig:
    """Logging settings; *cap* is the rotation size in kilobytes."""

    type: str = "default"
    path: str = "temp/logs"
    level: str = "warn"
    stdout: str = "default"
    enabled_db: bool = False
    cap: int = 0


@dataclass
class JwtConfig:
    secret: str = ""
    timeout: int = 0


@dataclass
class DBResolverConfig:
    sources: list[str] = field(default_factory=list)
    replicas: list[str] = field(default_factory=list)
    policy: str = ""
    tables: list[str] = field(default_factory=list)


@dataclass
class DatabaseConfig:
    driver: str = ""
    source: str = ""
    conn_max_idle_time: int = 0
    conn_max_life_time: int = 0
    max_idle_conns: int = 0
    max_open_conns: int = 0
    registers: list[DBResolverConfig] = field(default_factory=list)


@dataclass
class GenConfig:
    db_name: str = ""
    front_path: str = ""


@dataclass
class TlsConfig:
    cert: str = ""
    key: str = ""
    ca: str = ""


def build_tls_context(tls: Optional[TlsConfig]) -> Optional[ssl.SSLContext]:
    """Build a TLS context that requires and verifies client certificates.

    Returns None when no certificate is configured; unreadable files raise.
    """
    if tls is None or not tls.cert:
        return None
    context = ssl.SSLContext(ssl.PROTOCOL_TLS_SERVER)
    context.load_cert_chain(tls.cert, tls.key or None)
    context.load_verify_locations(cafile=tls.ca)
    context.verify_mode = ssl.CERT_REQUIRED
    return context


@dataclass
class RedisConnectOptions:
    network: str = ""
    addr: str = ""
    username: str = ""
    password: str = ""
    db: int = 0
    pool_size: int = 0
    tls: Optional[TlsConfig] = None
    max_retries: int = 0

    def redis_options(self) -> dict[str, Any]:
        """Return the connection options for a redis client."""
        return {
            "network": self.network,
            "addr": self.addr,
            "username": self.username,
            "password": self.password,
            "db": self.db,
            "max_retries": self.max_retries,
            "pool_size": self.pool_size,
            "tls": build_tls_context(self.tls),
        }


def _nsq_defaults() -> dict[str, Any]:
    hostname = socket.gethostname()
    return {
        "dial_timeout": timedelta(seconds=1),
        "read_timeout": timedelta(seconds=60),
        "write_timeout": timedelta(seconds=1),
        "lookupd_poll_interval": timedelta(seconds=60),
        "lookupd_poll_jitter": 0.3,
        "max_requeue_delay": timedelta(minutes=15),
        "default_requeue_delay": timedelta(seconds=90),
        "max_backoff_duration": timedelta(minutes=2),
        "backoff_multiplier": timedelta(seconds=1),
        "max_attempts": 5,
        "low_rdy_idle_timeout": timedelta(seconds=10),
        "low_rdy_timeout": timedelta(seconds=30),
        "rdy_redistribute_interval": timedelta(seconds=5),
        "client_id": hostname.split(".")[0],
        "hostname": hostname,
        "user_agent": "",
        "heartbeat_interval": timedelta(seconds=30),
        "sample_rate": 0,
        "tls_config": None,
        "deflate": False,
        "deflate_level": 6,
        "snappy": False,
        "output_buffer_size": 16384,
        "output_buffer_timeout": timedelta(milliseconds=250),
        "max_in_flight": 1,
        "msg_timeout": timedelta(0),
        "auth_secret": "",
    }


_NSQ_SECOND_FIELDS = (
    "dial_timeout",
    "read_timeout",
    "write_timeout",
    "lookupd_poll_interval",
    "max_requeue_delay",
    "default_requeue_delay",
    "backoff_multiplier",
    "low_rdy_idle_timeout",
    "low_rdy_timeout",
    "rdy_redistribute_interval",
    "heartbeat_interval",
    "output_buffer_timeout",
    "msg_timeout",
)


@dataclass
class NSQOptions:
    """NSQ client settings; durations are seconds, except max_backoff_duration in ms."""

    dial_timeout: float = 0
    read_timeout: float = 0
    write_timeout: float = 0
    addresses: list[str] = field(default_factory=list)
    lookupd_poll_interval: float = 0
    lookupd_poll_jitter: float = 0
    max_requeue_delay: float = 0
    default_requeue_delay: float = 0
    max_backoff_duration: float = 0
    backoff_multiplier: float = 0
    max_attempts: int = 0
    low_rdy_idle_timeout: float = 0
    low_rdy_timeout: float = 0
    rdy_redistribute_interval: float = 0
    client_id: str = ""
    hostname: str = ""
    user_agent: str = ""
    heartbeat_interval: float = 0
    sample_rate: int = 0
    tls: Optional[TlsConfig] = None
    deflate: bool = False
    deflate_level: int = 0
    snappy: bool = False
    output_buffer_size: int = 0
    output_buffer_timeout: float = 0
    max_in_flight: int = 0
    msg_timeout: float = 0
    auth_secret: str = ""

    def nsq_options(self) -> dict[str, Any]:
        """Return the NSQ client configuration: defaults overridden by set values."""
        cfg = _nsq_defaults()
        cfg["tls_config"] = build_tls_context(self.tls)
        for name in _NSQ_SECOND_FIELDS:
            value = getattr(self, name)
            if value > 0:
                cfg[name] = timedelta(seconds=value)
        if self.max_backoff_duration > 0:
            cfg["max_backoff_duration"] = timedelta(milliseconds=self.max_backoff_duration)
        if self.lookupd_poll_jitter > 0:
            cfg["lookupd_poll_jitter"] = self.lookupd_poll_jitter
        cfg["max_attempts"] = self.max_attempts
        for name in ("client_id", "hostname", "user_agent", "auth_secret"):
            if getattr(self, name):
                cfg[name] = getattr(self, name)
        if self.sample_rate > 0:
            cfg["sample_rate"] = self.sample_rate
        cfg["deflate"] = self.deflate
        if 6 <= self.deflate_level <= 9:
            cfg["deflate_level"] = self.deflate_level
        cfg["snappy"] = self.snappy
        if self.output_buffer_size > 0:
            cfg["output_buffer_size"] = self.output_buffer_size
        if self.max_in_flight > 0:
            cfg["max_in_flight"] = self.max_in_flight
        return cfg


@dataclass
class QueueRedisConfig(RedisConnectOptions):
    producer: Optional[dict[str, Any]] = None
    consumer: Optional[dict[str, Any]] = None


@dataclass
class QueueMemoryConfig:
    pool_size: int = 0


@dataclass
class QueueNSQConfig(NSQOptions):
    channel_prefix: str = ""


@dataclass
class QueueConfig:
    redis: Optional[QueueRedisConfig] = None
    memory: Optional[QueueMemoryConfig] = None
    nsq: Optional[QueueNSQConfig] = None

    def empty(self) -> bool:
        """Return True when no queue backend is configured."""
        return self.memory is None and self.redis is None and self.nsq is None


@dataclass
class CacheConfig:
    redis: Optional[RedisConnectOptions] = None
    memory: Any = None


@dataclass
class LockerConfig:
    redis: Optional[RedisConnectOptions] = None

    def empty(self) -> bool:
        """Return True when no locker backend is configured."""
        return self.redis is None


def _norm(name: str) -> str:
    return name.replace("_", "").lower()


def _convert(tp: Any, value: Any) -> Any:
    if value is None or tp is Any:
        return value
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        options = [arg for arg in get_args(tp) if arg is not type(None)]
        return _convert(options[0], value) if len(options) == 1 else value
    if isinstance(tp, type) and dataclasses.is_dataclass(tp):
        return _from_mapping(tp, value)
    if origin is list:
        (item_type,) = get_args(tp)
        return [_convert(item_type, item) for item in value]
    if origin is dict:
        _, value_type = get_args(tp)
        if not isinstance(value, Mapping):
            raise TypeError(f"expected a mapping, got {type(value).__name__}")
        return {key: _convert(value_type, item) for key, item in value.items()}
    if tp is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    return value


def _from_mapping(cls: type, data: Any) -> Any:
    if not isinstance(data, Mapping):
        raise TypeError(f"expected a mapping for {cls.__name__}, got {type(data).__name__}")
    given = {_norm(str(key)): value for key, value in data.items()}
    kwargs = {}
    for item in dataclasses.fields(cls):
        key = _norm(item.name)
        if key in given:
            kwargs[item.name] = _convert(item.type, given[key])
    return cls(**kwargs)


@dataclass
class Config:
    """Every configuration section of the application."""

    application: ApplicationConfig = field(default_factory=ApplicationConfig)
    ssl: SslConfig = field(default_factory=SslConfig)
    logger: LoggerConfig = field(default_factory=LoggerConfig)
    jwt: JwtConfig = field(default_factory=JwtConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    databases: dict[str, DatabaseConfig] = field(default_factory=dict)
    gen: GenConfig = field(default_factory=GenConfig)
    cache: CacheConfig = field(default_factory=CacheConfig)
    queue: QueueConfig = field(default_factory=QueueConfig)
    locker: LockerConfig = field(default_factory=LockerConfig)
    extend: Any = None

    def multi_database(self) -> None:
        """Use the single database for every key when no databases are listed."""
        if not self.databases:
            self.databases = {"*": self.database}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Config":
        """Build a Config from parsed settings; keys match case- and underscore-blind."""
        return _from_mapping(cls, data)


def _setup_logging(cfg: LoggerConfig) -> logging.Logger:
    if not path_exist(cfg.path):
        path_create(cfg.path)
    level_name = cfg.level.lower()
    if level_name not in _LEVELS:
        raise ValueError(f"unknown logger level: {cfg.level!r}")
    handler: logging.Handler
    if cfg.stdout == "file":
        handler = logging.handlers.RotatingFileHandler(
            os.path.join(cfg.path, "adminkit.log"),
            maxBytes=cfg.cap << 10,
            backupCount=5 if cfg.cap else 0,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler._adminkit = True  # type: ignore[attr-defined]
    app_logger = logging.getLogger(_APP_LOGGER)
    for old in list(app_logger.handlers):
        if getattr(old, "_adminkit", False):
            app_logger.removeHandler(old)
            old.close()
    app_logger.addHandler(handler)
    app_logger.setLevel(_LEVELS[level_name])
    return app_logger


@dataclass
class Settings:
    """The loaded configuration and the callbacks run on every (re)load."""

    settings: Config = field(default_factory=Config)
    callbacks: list[Callable[[], Any]] = field(default_factory=list)

    def _apply(self) -> None:
        _setup_logging(self.settings.logger)
        self.settings.multi_database()
        for callback in self.callbacks:
            callback()

    def init(self) -> None:
        """Apply the configuration for the first time."""
        self._apply()
        _log.info("config init")

    def on_change(self) -> None:
        """Re-apply the configuration after it changed."""
        self._apply()
        _log.info("config change and reload")