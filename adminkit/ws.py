"""Websocket connection manager with groups, direct messages and broadcasts."""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Protocol

_log = logging.getLogger(__name__)

_CHANNEL_SIZE = 128
_CLIENT_BUFFER = 1024
_POLL_INTERVAL = 0.05
_CLOSED = object()


class _Socket(Protocol):
    def receive(self) -> bytes | None: ...

    def send(self, data: bytes) -> None: ...

    def close(self) -> None: ...


class _Stop(Protocol):
    def is_set(self) -> bool: ...


@dataclass
class _MessageData:
    id: str
    group: str
    message: bytes


@dataclass
class _GroupMessageData:
    group: str
    message: bytes


@dataclass
class _BroadcastMessageData:
    message: bytes


@dataclass(eq=False)
class Client:
    """One websocket connection in a group."""

    id: str
    group: str
    socket: Any = None
    messages: queue.Queue = field(default_factory=lambda: queue.Queue(_CLIENT_BUFFER))
    done: threading.Event = field(default_factory=threading.Event)

    def cancel(self) -> None:
        """Stop the client's read and write loops."""
        self.done.set()

    def close_messages(self) -> None:
        """Mark the outgoing message channel as closed."""
        try:
            self.messages.put_nowait(_CLOSED)
        except queue.Full:
            pass

    def _close_socket(self) -> None:
        _log.info("client [%s] disconnect", self.id)
        if self.socket is None:
            return
        try:
            self.socket.close()
        except OSError as exc:
            _log.warning("client [%s] disconnect err: %s", self.id, exc)

    def read(self, manager: "Manager") -> None:
        """Read from the socket into the message channel until it closes."""
        try:
            while not self.done.is_set():
                try:
                    message = self.socket.receive()
                except OSError:
                    break
                if message is None:
                    break
                _log.info("client [%s] receive message: %r", self.id, message)
                self.messages.put(message)
        finally:
            manager.unregister_client(self)
            self._close_socket()

    def write(self) -> None:
        """Write messages from the channel to the socket until it is closed."""
        try:
            while not self.done.is_set():
                try:
                    message = self.messages.get(timeout=_POLL_INTERVAL)
                except queue.Empty:
                    continue
                if message is _CLOSED:
                    return
                _log.info("client [%s] write message: %r", self.id, message)
                try:
                    self.socket.send(message)
                except OSError as exc:
                    _log.warning("client [%s] writemessage err: %s", self.id, exc)
        finally:
            self._close_socket()


class Manager:
    """Keeps every websocket client, grouped, and routes messages to them."""

    def __init__(self) -> None:
        self.groups: dict[str, dict[str, Client]] = {}
        self.lock = threading.Lock()
        self.register = queue.Queue(_CHANNEL_SIZE)
        self.unregister = queue.Queue(_CHANNEL_SIZE)
        self.message = queue.Queue(_CHANNEL_SIZE)
        self.group_message = queue.Queue(_CHANNEL_SIZE)
        self.broadcast_message = queue.Queue(_CHANNEL_SIZE)
        self._group_count = 0
        self._client_count = 0

    @staticmethod
    def _serve(
        handlers: Iterable[tuple[queue.Queue, Callable[[Any], None]]],
        stop: _Stop | None,
    ) -> None:
        """Dispatch queued items; return once *stop* is set and nothing is pending."""
        handlers = list(handlers)
        while True:
            handled = False
            for channel, handler in handlers:
                try:
                    item = channel.get_nowait()
                except queue.Empty:
                    continue
                handler(item)
                handled = True
            if not handled:
                if stop is not None and stop.is_set():
                    return
                time.sleep(_POLL_INTERVAL)

    def _on_register(self, client: Client) -> None:
        _log.info("register client [%s] to group [%s]", client.id, client.group)
        with self.lock:
            if client.group not in self.groups:
                self.groups[client.group] = {}
                self._group_count += 1
            self.groups[client.group][client.id] = client
            self._client_count += 1

    def _on_unregister(self, client: Client) -> None:
        _log.info("unregister client [%s] from group [%s]", client.id, client.group)
        with self.lock:
            members = self.groups.get(client.group)
            if members is None:
                return
            known = members.pop(client.id, None)
            if known is None:
                return
            known.close_messages()
            self._client_count -= 1
            if not members:
                del self.groups[client.group]
                self._group_count -= 1
            known.cancel()

    def _members(self, group: str) -> list[Client]:
        with self.lock:
            return list(self.groups.get(group, {}).values())

    def _on_message(self, data: _MessageData) -> None:
        with self.lock:
            client = self.groups.get(data.group, {}).get(data.id)
        if client is not None:
            client.messages.put(data.message)

    def _on_group_message(self, data: _GroupMessageData) -> None:
        for client in self._members(data.group):
            client.messages.put(data.message)

    def _on_broadcast(self, data: _BroadcastMessageData) -> None:
        with self.lock:
            clients = [c for members in self.groups.values() for c in members.values()]
        for client in clients:
            client.messages.put(data.message)

    def start(self, stop: _Stop | None = None) -> None:
        """Handle registrations and removals until *stop* is set."""
        _log.info("websocket manage start")
        self._serve(
            [(self.register, self._on_register), (self.unregister, self._on_unregister)],
            stop,
        )

    def send_service(self, stop: _Stop | None = None) -> None:
        """Deliver direct messages until *stop* is set."""
        self._serve([(self.message, self._on_message)], stop)

    def send_group_service(self, stop: _Stop | None = None) -> None:
        """Deliver group messages until *stop* is set."""
        self._serve([(self.group_message, self._on_group_message)], stop)

    def send_all_service(self, stop: _Stop | None = None) -> None:
        """Deliver broadcasts until *stop* is set."""
        self._serve([(self.broadcast_message, self._on_broadcast)], stop)

    def send(self, client_id: str, group: str, message: bytes) -> None:
        self.message.put(_MessageData(client_id, group, message))

    def send_group(self, group: str, message: bytes) -> None:
        self.group_message.put(_GroupMessageData(group, message))

    def send_all(self, message: bytes) -> None:
        self.broadcast_message.put(_BroadcastMessageData(message))

    def register_client(self, client: Client) -> None:
        self.register.put(client)

    def unregister_client(self, client: Client) -> None:
        self.unregister.put(client)

    def len_group(self) -> int:
        return self._group_count

    def len_client(self) -> int:
        return self._client_count

    def info(self) -> dict[str, int]:
        """Return counts of groups, clients and pending channel items."""
        return {
            "groupLen": self.len_group(),
            "clientLen": self.len_client(),
            "chanRegisterLen": self.register.qsize(),
            "chanUnregisterLen": self.unregister.qsize(),
            "chanMessageLen": self.message.qsize(),
            "chanGroupMessageLen": self.group_message.qsize(),
            "chanBroadCastMessageLen": self.broadcast_message.qsize(),
        }


WEBSOCKET_MANAGER = Manager()


def _wrap(msg: bytes) -> bytes:
    return b'{"code":200,"data":' + msg + b"}"


def send_group(msg: bytes) -> None:
    """Broadcast *msg* to the default group."""
    WEBSOCKET_MANAGER.send_group("leffss", _wrap(msg))
    _log.info("%s", WEBSOCKET_MANAGER.info())


def send_all(msg: bytes) -> None:
    """Broadcast *msg* to every client."""
    WEBSOCKET_MANAGER.send_all(_wrap(msg))
    _log.info("%s", WEBSOCKET_MANAGER.info())


def send_one(client_id: str, group: str, msg: bytes) -> None:
    """Send *msg* to one client."""
    WEBSOCKET_MANAGER.send(client_id, group, _wrap(msg))
    _log.info("%s", WEBSOCKET_MANAGER.info())


def ws_logout(client_id: str, group: str) -> None:
    """Remove a client from the manager."""
    WEBSOCKET_MANAGER.unregister_client(Client(client_id, group))
    _log.info("%s", WEBSOCKET_MANAGER.info())