"""Websocket session client that decodes messages and fires callbacks."""

from __future__ import annotations

import json
import queue
import threading
from enum import Enum
from typing import Any, Callable, Optional, Union

from websockets.exceptions import ConnectionClosed
from websockets.sync.client import ClientConnection
from websockets.sync.client import connect as ws_connect

from eventsub.dispatch import decode_event, decode_message, parse_base_message
from eventsub.subscriptions import EventSubscription
from eventsub.types import (
    KeepAliveMessage,
    MessageMetadata,
    NotificationMessage,
    PayloadSubscription,
    ReconnectMessage,
    RevokeMessage,
    WelcomeMessage,
)

TWITCH_WEBSOCKET_URL = "wss://eventsub.wss.twitch.tv/ws"

_NORMAL_CLOSURE = 1000
_CLOSE_REASON = "Stopping Connection"

ErrorCallback = Callable[[Exception], Any]
EventCallback = Callable[[Any, NotificationMessage], Any]
RawEventCallback = Callable[[str, MessageMetadata, PayloadSubscription], Any]


class ConnClosedError(ConnectionError):
    """The connection is closed."""

    def __init__(self, message: str = "connection closed") -> None:
        super().__init__(message)


class NilOnWelcomeError(RuntimeError):
    """A welcome callback must be set before connecting."""

    def __init__(self, message: str = "OnWelcome function was not set") -> None:
        super().__init__(message)


def _default_on_error(err: Exception) -> None:
    print(f"ERROR: {err}")


def _spawn(callback: Optional[Callable[..., Any]], *args: Any) -> None:
    if callback is not None:
        threading.Thread(target=callback, args=args, daemon=True).start()


def _is_normal_closure(exc: ConnectionClosed) -> bool:
    frame = exc.rcvd or exc.sent
    return frame is not None and frame.code == _NORMAL_CLOSURE


def _websocket_uri(address: str) -> str:
    if address.startswith("http://"):
        return "ws://" + address[len("http://"):]
    if address.startswith("https://"):
        return "wss://" + address[len("https://"):]
    return address


class Client:
    """Reads an event websocket session and hands each message to callbacks.

    Callbacks for messages and events run in their own threads; the error and
    raw event callbacks run on the reading thread.
    """

    def __init__(self, address: str = TWITCH_WEBSOCKET_URL) -> None:
        self.address = address
        self._ws: Optional[ClientConnection] = None
        self._connected = False
        self._reader: Optional[threading.Thread] = None
        self._reconnecting = False
        self._reconnected: queue.Queue[None] = queue.Queue()

        self._on_error: ErrorCallback = _default_on_error
        self._on_welcome: Optional[Callable[[WelcomeMessage], Any]] = None
        self._on_keep_alive: Optional[Callable[[KeepAliveMessage], Any]] = None
        self._on_notification: Optional[Callable[[NotificationMessage], Any]] = None
        self._on_reconnect: Optional[Callable[[ReconnectMessage], Any]] = None
        self._on_revoke: Optional[Callable[[RevokeMessage], Any]] = None
        self._on_raw_event: Optional[RawEventCallback] = None
        self._event_callbacks: dict[EventSubscription, EventCallback] = {}

    def __enter__(self) -> Client:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    @property
    def connected(self) -> bool:
        """Whether the client holds an open session."""
        return self._connected

    def connect(self, on_read_error: Optional[ErrorCallback] = None) -> None:
        """Open the session and start reading it in the background.

        A read error that is not a normal closure goes to ``on_read_error``,
        or to the error callback when that is not given.
        """
        if self._on_welcome is None:
            raise NilOnWelcomeError()
        self._ws = self._dial()
        self._connected = True
        self._reader = threading.Thread(
            target=self._read_loop, args=(on_read_error,), daemon=True
        )
        self._reader.start()

    def wait(self) -> None:
        """Block until the reading thread has stopped."""
        if self._reader is not None:
            self._reader.join()

    def close(self) -> None:
        """Close the session with a normal closure."""
        ws, self._ws = self._ws, None
        if not self._connected or ws is None:
            return
        self._connected = False
        try:
            ws.close(_NORMAL_CLOSURE, _CLOSE_REASON)
        except ConnectionClosed:
            pass
        except Exception as exc:
            raise ConnectionError(f"could not close websocket connection: {exc}") from exc

    def on_error(self, callback: ErrorCallback) -> None:
        self._on_error = callback

    def on_welcome(self, callback: Callable[[WelcomeMessage], Any]) -> None:
        self._on_welcome = callback

    def on_keep_alive(self, callback: Callable[[KeepAliveMessage], Any]) -> None:
        self._on_keep_alive = callback

    def on_notification(self, callback: Callable[[NotificationMessage], Any]) -> None:
        self._on_notification = callback

    def on_reconnect(self, callback: Callable[[ReconnectMessage], Any]) -> None:
        self._on_reconnect = callback

    def on_revoke(self, callback: Callable[[RevokeMessage], Any]) -> None:
        self._on_revoke = callback

    def on_raw_event(self, callback: RawEventCallback) -> None:
        """Receive every notification event as JSON text before it is decoded."""
        self._on_raw_event = callback

    def on_event(
        self,
        subscription: Union[EventSubscription, str],
        callback: Optional[EventCallback],
    ) -> None:
        """Receive decoded events of one subscription type with their message.

        Raises ValueError for an unknown subscription type.
        """
        key = EventSubscription(subscription)
        if callback is None:
            self._event_callbacks.pop(key, None)
        else:
            self._event_callbacks[key] = callback

    def _dial(self) -> ClientConnection:
        try:
            return ws_connect(_websocket_uri(self.address))
        except Exception as exc:
            raise ConnectionError(f"could not dial {self.address}: {exc}") from exc

    def _read_loop(self, on_read_error: Optional[ErrorCallback]) -> None:
        while True:
            ws = self._ws
            if ws is None:
                return
            try:
                data = ws.recv()
            except ConnectionClosed as exc:
                if _is_normal_closure(exc):
                    if self._reconnecting:
                        self._reconnecting = False
                        self._reconnected.get()
                        continue
                    return
                self._report_read_error(exc, on_read_error)
                return
            except Exception as exc:
                self._report_read_error(exc, on_read_error)
                return

            try:
                self._handle_message(data)
            except Exception as exc:
                self._on_error(exc)

    def _report_read_error(
        self, exc: Exception, on_read_error: Optional[ErrorCallback]
    ) -> None:
        if on_read_error is None:
            self._on_error(exc)
        else:
            on_read_error(exc)

    def _handle_message(self, data: Union[str, bytes]) -> None:
        message = decode_message(data)
        if isinstance(message, WelcomeMessage):
            _spawn(self._on_welcome, message)
        elif isinstance(message, KeepAliveMessage):
            _spawn(self._on_keep_alive, message)
        elif isinstance(message, NotificationMessage):
            _spawn(self._on_notification, message)
            try:
                self._handle_notification(message)
            except ValueError as exc:
                raise ValueError(f"could not handle notification: {exc}") from exc
        elif isinstance(message, ReconnectMessage):
            _spawn(self._on_reconnect, message)
            try:
                self._reconnect(message)
            except ConnectionError as exc:
                raise ConnectionError(f"could not handle reconnect: {exc}") from exc
        elif isinstance(message, RevokeMessage):
            _spawn(self._on_revoke, message)
        else:
            raise ValueError(f"unhandled {type(message).__name__} message: {message}")

    def _handle_notification(self, message: NotificationMessage) -> None:
        subscription = message.payload.subscription
        kind = subscription.type
        name = kind.value if isinstance(kind, Enum) else str(kind)
        try:
            key = EventSubscription(name)
        except ValueError:
            raise ValueError(f"unknown subscription type {name}") from None

        if self._on_raw_event is not None:
            raw = json.dumps(
                message.payload.event, separators=(",", ":"), ensure_ascii=False
            )
            self._on_raw_event(raw, message.metadata, subscription)

        event = decode_event(message)
        _spawn(self._event_callbacks.get(key), event, message)

    def _reconnect(self, message: ReconnectMessage) -> None:
        self.address = message.payload.session.reconnect_url
        try:
            ws = self._dial()
        except ConnectionError as exc:
            raise ConnectionError("could not dial to reconnect") from exc
        threading.Thread(target=self._finish_reconnect, args=(ws,), daemon=True).start()

    def _finish_reconnect(self, ws: ClientConnection) -> None:
        try:
            data = ws.recv()
        except Exception as exc:
            self._on_error(
                ConnectionError(
                    "reconnect failed: could not read reconnect websocket for welcome: "
                    f"{exc}"
                )
            )
            return
        try:
            metadata = parse_base_message(data)
        except ValueError as exc:
            self._on_error(ValueError(f"reconnect failed: could parse base message: {exc}"))
            return
        if metadata.message_type != "session_welcome":
            self._on_error(
                ValueError(
                    "reconnect failed: did not get a session_welcome message first: "
                    f"got message {metadata.message_type}"
                )
            )
            return

        self._reconnecting = True
        old = self._ws
        if old is not None:
            try:
                old.close(_NORMAL_CLOSURE, _CLOSE_REASON)
            except Exception:
                pass
        self._ws = ws
        self._reconnected.put(None)