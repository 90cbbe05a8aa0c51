# adminkit

Building blocks for the back end of an admin application: a registry for
shared resources, tenant-prefixed cache, queue and locker wrappers, JSON
response envelopes, JWT claim helpers, configuration models, a websocket
client manager and small utilities.

## Installation

```
pip install adminkit
```

To run the tests:

```
pip install "adminkit[test]"
pytest
```

## Modules

- `adminkit.context` – `RequestContext`, a small request object with
  headers, path parameters, stored values and `abort_with_status_json`;
  `generate_msg_id` (reads `X-Request-Id` or creates one in the response
  headers), `get_orm` (raises `LookupError` when no `"db"` value is stored),
  `assert_condition` and `has_error`, which raise `CustomError`; the `Mode`
  enum (`dev`, `test`, `prod`).
- `adminkit.response` – `Response` and `Page`, and `ok`, `error`, `page_ok`
  and `custom`, which store the result on the context and finish it with
  status 200 and a JSON body.
- `adminkit.antd` – the same for Ant Design front ends: `AntdResponse`,
  `ShowType`, `ok`, `error`, `up_file_ok`, `page_ok`, `list_ok` and `custom`.
- `adminkit.runtime` – `Application`, a thread-safe registry of databases,
  enforcers, crontabs, middlewares, handlers, configs and app routers (a
  value stored under `"*"` is returned for every key by the `get_*_by_key`
  methods); `PrefixedCache`, `PrefixedQueue` and `PrefixedLocker`, which put a
  tenant prefix on keys or tag queue messages with it; `Router`, `Message`
  and the shared instance `RUNTIME`.
- `adminkit.claims` – `MapClaims`, a `dict` with `exp`, `orig_iat`,
  `identity`, `as_int64`, `as_int`, `as_uint64` and `as_string`.
- `adminkit.config` – dataclasses for every settings section (`Config`,
  `ApplicationConfig`, `DatabaseConfig`, `CacheConfig`, `QueueConfig`,
  `LockerConfig`, `LoggerConfig`, `JwtConfig`, `SslConfig`, `GenConfig`,
  `RedisConnectOptions`, `NSQOptions` and others). `Config.from_dict` builds
  them from parsed data, matching keys regardless of case and underscores.
  `Settings.init` and `Settings.on_change` set up the `adminkit` logger,
  fill `databases` from `database` when empty, and run the callbacks.
  `RedisConnectOptions.redis_options` and `NSQOptions.nsq_options` return
  option dictionaries; `build_tls_context` builds an `ssl.SSLContext` that
  requires client certificates.
- `adminkit.service` – `Service`, which collects errors into a
  `CombinedError`.
- `adminkit.captcha_store` – `CacheStore`, captcha answers kept in any cache
  object with `get`, `set` and `delete`.
- `adminkit.ws` – `Manager` and `Client`: clients kept in groups, with
  direct, group and broadcast messages delivered by service loops that stop
  when a given event is set. A socket is any object with `receive`, `send`
  and `close`.
- Utilities: `adminkit.convert`, `adminkit.security` (random keys, scrypt
  `set_password`, bcrypt `compare_hash_and_password`), `adminkit.files`,
  `adminkit.helpers`, `adminkit.table` (CRC32 shard names and
  `dynamic_table`), `adminkit.textcolor`, `adminkit.json_time` and
  `adminkit.api_exception`.

## Examples

```python
from adminkit.context import RequestContext
from adminkit import response

ctx = RequestContext()
response.page_ok(ctx, [{"id": 1}], 1, 1, 10, "ok")
print(ctx.status, ctx.body)
```

```python
from adminkit.security import set_password, generate_random_key16

password = "password"
salt = generate_random_key16()
digest = set_password(password, salt)
```

```python
from adminkit.table import crc32_hash

shard = crc32_hash("user-42")   # a string from "0" to "31"
```

## What the package does not do

- It has no HTTP server or router; `RequestContext` is a plain object that
  the calling web framework fills in and reads back.
- It does not connect to Redis, NSQ or a database. The configuration
  classes only describe connections and return option dictionaries; the
  cache, queue, locker and database objects given to `Application` must be
  supplied by the caller.
- It does not open websocket connections; `adminkit.ws` manages sockets the
  caller has already accepted.
- It does not draw captcha images or load access-control policies.