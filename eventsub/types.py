"""Wire envelope types and the JSON model machinery shared by all payloads."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from enum import Enum
from functools import lru_cache
from types import UnionType
from typing import Any, NamedTuple, Union, get_args, get_origin

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})"
    r"(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)

_NONE_TYPE = type(None)

_BASIC_NAMES: dict[str, Any] = {
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "datetime": datetime,
    "Any": Any,
    "None": _NONE_TYPE,
    "NoneType": _NONE_TYPE,
}

_MODELS: dict[str, list[type]] = {}

_HINT_PIECE = re.compile(r"\s*([A-Za-z_][\w.]*|[\[\],|])")


def _parse_time(text: str, path: str) -> datetime:
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"cannot decode {path}: {text!r} is not an RFC 3339 time")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    try:
        return datetime(
            int(year), int(month), int(day),
            int(hour), int(minute), int(second), micro, tzinfo=tz,
        )
    except ValueError as exc:
        raise ValueError(f"cannot decode {path}: {exc}") from exc


def _format_time(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"
    sign = "-" if offset < timedelta(0) else "+"
    minutes = abs(int(offset.total_seconds())) // 60
    return f"{text}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _make_union(parts: list[Any]) -> Any:
    if len(parts) == 1:
        return parts[0]
    return Union[tuple(parts)]


class _HintParser:
    """Resolves a string annotation into a type without running any code."""

    def __init__(self, text: str, module: str) -> None:
        self.text = text
        self.module = module
        self.pieces: list[str] = []
        pos = 0
        stripped = text.strip()
        while pos < len(stripped):
            match = _HINT_PIECE.match(stripped, pos)
            if match is None:
                raise TypeError(f"unsupported field annotation {text!r}")
            self.pieces.append(match.group(1))
            pos = match.end()
        self.pos = 0

    def parse(self) -> Any:
        result = self._union()
        if self.pos != len(self.pieces):
            raise TypeError(f"unsupported field annotation {self.text!r}")
        return result

    def _peek(self) -> str | None:
        return self.pieces[self.pos] if self.pos < len(self.pieces) else None

    def _take(self) -> str:
        piece = self._peek()
        if piece is None:
            raise TypeError(f"unsupported field annotation {self.text!r}")
        self.pos += 1
        return piece

    def _union(self) -> Any:
        parts = [self._primary()]
        while self._peek() == "|":
            self.pos += 1
            parts.append(self._primary())
        return _make_union(parts)

    def _primary(self) -> Any:
        piece = self._take()
        if piece in "[],|":
            raise TypeError(f"unsupported field annotation {self.text!r}")
        name = piece.rsplit(".", 1)[-1]
        if self._peek() != "[":
            return self._lookup(name)
        self.pos += 1
        args = [self._union()]
        while self._peek() == ",":
            self.pos += 1
            args.append(self._union())
        if self._take() != "]":
            raise TypeError(f"unsupported field annotation {self.text!r}")
        return self._subscript(name, args)

    def _subscript(self, name: str, args: list[Any]) -> Any:
        if name in ("list", "List") and len(args) == 1:
            return list[args[0]]
        if name in ("dict", "Dict") and len(args) == 2:
            return dict[args[0], args[1]]
        if name == "Optional" and len(args) == 1:
            return _make_union([args[0], _NONE_TYPE])
        if name == "Union":
            return _make_union(args)
        raise TypeError(f"unsupported field annotation {self.text!r}")

    def _lookup(self, name: str) -> Any:
        if name in _BASIC_NAMES:
            return _BASIC_NAMES[name]
        candidates = _MODELS.get(name, [])
        for candidate in candidates:
            if candidate.__module__ == self.module:
                return candidate
        if candidates:
            return candidates[0]
        raise TypeError(f"unknown type {name!r} in annotation {self.text!r}")


def _field_hints(cls: type) -> dict[str, Any]:
    raw: dict[str, tuple[Any, str]] = {}
    for klass in reversed(cls.__mro__):
        annotations = klass.__dict__.get("__annotations__", {})
        for name, hint in annotations.items():
            raw[name] = (hint, klass.__module__)
    hints: dict[str, Any] = {}
    for item in fields(cls):
        hint, module = raw[item.name]
        hints[item.name] = _HintParser(hint, module).parse() if isinstance(hint, str) else hint
    return hints


def _is_optional(hint: Any) -> bool:
    return get_origin(hint) in (Union, UnionType) and _NONE_TYPE in get_args(hint)


def _unwrap_optional(hint: Any) -> Any:
    args = [arg for arg in get_args(hint) if arg is not _NONE_TYPE]
    if len(args) != 1:
        raise TypeError(f"unsupported union field type {hint!r}")
    return args[0]


def _zero_value(hint: Any) -> Any:
    origin = get_origin(hint)
    if origin is list:
        return []
    if origin is dict:
        return {}
    if isinstance(hint, type):
        if issubclass(hint, Model):
            return hint()
        if hint is datetime:
            return ZERO_TIME
        if hint is bool:
            return False
        if hint in (int, float, str):
            return hint()
    return None


def _mismatch(path: str, expected: str, value: Any) -> ValueError:
    return ValueError(
        f"cannot decode {path}: expected {expected}, got {type(value).__name__}"
    )


def _decode(hint: Any, value: Any, path: str) -> Any:
    if hint is Any:
        return value
    if _is_optional(hint):
        return None if value is None else _decode(_unwrap_optional(hint), value, path)
    if value is None:
        return _zero_value(hint)

    origin = get_origin(hint)
    if origin is list:
        if not isinstance(value, list):
            raise _mismatch(path, "array", value)
        (item_hint,) = get_args(hint)
        return [
            _decode(item_hint, item, f"{path}[{index}]")
            for index, item in enumerate(value)
        ]
    if origin is dict:
        if not isinstance(value, Mapping):
            raise _mismatch(path, "object", value)
        _, value_hint = get_args(hint)
        return {
            key: _decode(value_hint, item, f"{path}.{key}")
            for key, item in value.items()
        }
    if isinstance(hint, type) and issubclass(hint, Model):
        return hint._decode_mapping(value, path)
    if hint is bool:
        if not isinstance(value, bool):
            raise _mismatch(path, "boolean", value)
        return value
    if hint is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _mismatch(path, "integer", value)
        if not _INT64_MIN <= value <= _INT64_MAX:
            raise ValueError(f"cannot decode {path}: {value} overflows a 64-bit integer")
        return value
    if hint is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _mismatch(path, "number", value)
        return float(value)
    if hint is str:
        if not isinstance(value, str):
            raise _mismatch(path, "string", value)
        return value
    if hint is datetime:
        if not isinstance(value, str):
            raise _mismatch(path, "time string", value)
        return _parse_time(value, path)
    raise TypeError(f"unsupported field type {hint!r} at {path}")


def _encode(value: Any) -> Any:
    if isinstance(value, Model):
        return value.to_dict()
    if isinstance(value, datetime):
        return _format_time(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _encode(item) for key, item in value.items()}
    return value


class _FieldSpec(NamedTuple):
    name: str
    key: str
    hint: Any
    optional: bool
    nullable: bool


@lru_cache(maxsize=None)
def _specs(cls: type) -> tuple[_FieldSpec, ...]:
    hints = _field_hints(cls)
    specs = []
    for item in fields(cls):
        if not item.init:
            continue
        hint = hints[item.name]
        optional = _is_optional(hint)
        specs.append(
            _FieldSpec(
                name=item.name,
                key=item.metadata.get("json", item.name),
                hint=hint,
                optional=optional,
                nullable=optional or hint is Any,
            )
        )
    return tuple(specs)


@lru_cache(maxsize=None)
def _key_index(cls: type) -> tuple[dict[str, _FieldSpec], dict[str, _FieldSpec]]:
    exact: dict[str, _FieldSpec] = {}
    folded: dict[str, _FieldSpec] = {}
    for spec in _specs(cls):
        exact[spec.key] = spec
        folded.setdefault(spec.key.casefold(), spec)
    return exact, folded


class Model:
    """Base for JSON-backed dataclasses.

    Keys match field names (exactly, else case-insensitively); unknown keys are
    ignored, missing keys and nulls leave the zero value, and optional fields
    that are ``None`` are left out when encoding.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _MODELS.setdefault(cls.__name__, []).append(cls)

    @classmethod
    def from_dict(cls, data):
        """Build an instance from a decoded JSON object."""
        return cls._decode_mapping(data, cls.__name__)

    @classmethod
    def from_json(cls, data):
        """Build an instance from JSON text or bytes."""
        try:
            decoded = json.loads(data)
        except json.JSONDecodeError as exc:
            raise ValueError(f"invalid JSON for {cls.__name__}: {exc}") from exc
        return cls.from_dict(decoded)

    @classmethod
    def _decode_mapping(cls, data: Any, path: str):
        if not isinstance(data, Mapping):
            raise _mismatch(path, "object", data)
        exact, folded = _key_index(cls)
        values: dict[str, Any] = {}
        for key, value in data.items():
            spec = exact.get(key) or folded.get(str(key).casefold())
            if spec is None:
                continue
            if value is None and not spec.nullable:
                values.pop(spec.name, None)
                continue
            values[spec.name] = _decode(spec.hint, value, f"{path}.{spec.key}")
        return cls(**values)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON object form of this instance."""
        out: dict[str, Any] = {}
        for spec in _specs(type(self)):
            value = getattr(self, spec.name)
            if value is None and spec.optional:
                continue
            out[spec.key] = _encode(value)
        return out

    def to_json(self) -> str:
        """Return compact JSON text for this instance."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)


@dataclass
class MessageMetadata(Model):
    message_id: str = ""
    message_type: str = ""
    message_timestamp: datetime = ZERO_TIME


@dataclass
class PayloadSession(Model):
    id: str = ""
    status: str = ""
    connected_at: datetime = ZERO_TIME
    keepalive_timeout_seconds: int = 0
    reconnect_url: str = ""


@dataclass
class SubscriptionTransport(Model):
    method: str = ""
    session_id: str = ""


@dataclass
class SubscriptionRequest(Model):
    type: str = ""
    version: str = ""
    condition: dict[str, str] = field(default_factory=dict)
    transport: SubscriptionTransport = field(default_factory=SubscriptionTransport)


@dataclass
class PayloadSubscription(SubscriptionRequest):
    id: str = ""
    status: str = ""
    cost: int = 0
    created_at: datetime = ZERO_TIME


@dataclass
class WelcomePayload(Model):
    session: PayloadSession = field(default_factory=PayloadSession)


@dataclass
class WelcomeMessage(Model):
    metadata: MessageMetadata = field(default_factory=MessageMetadata)
    payload: WelcomePayload = field(default_factory=WelcomePayload)


@dataclass
class KeepAliveMessage(Model):
    metadata: MessageMetadata = field(default_factory=MessageMetadata)
    payload: dict[str, Any] = field(default_factory=dict)


@dataclass
class NotificationPayload(Model):
    subscription: PayloadSubscription = field(default_factory=PayloadSubscription)
    event: Any = None


@dataclass
class NotificationMessage(Model):
    metadata: MessageMetadata = field(default_factory=MessageMetadata)
    payload: NotificationPayload = field(default_factory=NotificationPayload)


@dataclass
class ReconnectMessage(Model):
    metadata: MessageMetadata = field(default_factory=MessageMetadata)
    payload: WelcomePayload = field(default_factory=WelcomePayload)


@dataclass
class RevokePayload(Model):
    subscription: PayloadSubscription = field(default_factory=PayloadSubscription)


@dataclass
class RevokeMessage(Model):
    metadata: MessageMetadata = field(default_factory=MessageMetadata)
    payload: RevokePayload = field(default_factory=RevokePayload)