"""Decoding of websocket frames into session messages and notification events."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from eventsub.subscriptions import EventSubscription, sub_metadata
from eventsub.types import (
    KeepAliveMessage,
    MessageMetadata,
    Model,
    NotificationMessage,
    ReconnectMessage,
    RevokeMessage,
    WelcomeMessage,
)

SessionMessage = Union[
    WelcomeMessage, KeepAliveMessage, NotificationMessage, ReconnectMessage, RevokeMessage
]


class MessageType(str, Enum):
    """The kinds of message a session can receive."""

    SESSION_WELCOME = "session_welcome"
    SESSION_KEEPALIVE = "session_keepalive"
    NOTIFICATION = "notification"
    SESSION_RECONNECT = "session_reconnect"
    REVOCATION = "revocation"

    @property
    def message_class(self) -> type[Model]:
        """The model a message of this kind decodes into."""
        return _MESSAGE_CLASSES[self]


_MESSAGE_CLASSES: dict[MessageType, type[Model]] = {
    MessageType.SESSION_WELCOME: WelcomeMessage,
    MessageType.SESSION_KEEPALIVE: KeepAliveMessage,
    MessageType.NOTIFICATION: NotificationMessage,
    MessageType.SESSION_RECONNECT: ReconnectMessage,
    MessageType.REVOCATION: RevokeMessage,
}


@dataclass
class _BaseMessage(Model):
    metadata: MessageMetadata = field(default_factory=MessageMetadata)


def _as_text(data: Union[str, bytes, bytearray]) -> str:
    if isinstance(data, (bytes, bytearray)):
        return bytes(data).decode("utf-8", errors="replace")
    return data


def _plain(value: Any) -> str:
    return str(value.value) if isinstance(value, Enum) else str(value)


def parse_base_message(data: Union[str, bytes, bytearray]) -> MessageMetadata:
    """Read only the metadata of a raw frame.

    Raises ValueError if the frame is not a JSON object with valid metadata.
    """
    try:
        decoded = json.loads(data)
        if decoded is None:
            return MessageMetadata()
        return _BaseMessage.from_dict(decoded).metadata
    except ValueError as exc:
        raise ValueError(
            f"could not unmarshal basemessage to get message type: {exc}"
        ) from exc


def decode_message(data: Union[str, bytes, bytearray]) -> SessionMessage:
    """Decode a raw frame into the message model its type names.

    Raises ValueError for invalid JSON, an unknown message type or a payload
    that does not fit its model.
    """
    metadata = parse_base_message(data)
    name = metadata.message_type
    try:
        kind = MessageType(name)
    except ValueError:
        raise ValueError(f"unknown message type {name}: {_as_text(data)}") from None
    try:
        return kind.message_class.from_json(data)  # type: ignore[return-value]
    except ValueError as exc:
        raise ValueError(f"could not unmarshal message into {kind.value}: {exc}") from exc


def decode_event(message: NotificationMessage) -> Any:
    """Decode the event a notification carries into its event model.

    Drop entitlement grants decode into a list. Raises ValueError for an
    unknown subscription type or an event that does not fit its model.
    """
    name = _plain(message.payload.subscription.type)
    try:
        subscription = EventSubscription(name)
    except ValueError:
        raise ValueError(f"unknown subscription type {name}") from None
    metadata = sub_metadata()[subscription]
    try:
        return metadata.decode(message.payload.event)
    except ValueError as exc:
        raise ValueError(
            f"could not unmarshal {name} into {metadata.event_type.__name__}: {exc}"
        ) from exc