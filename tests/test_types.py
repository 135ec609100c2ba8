import json
from datetime import datetime, timedelta, timezone

import pytest

from eventsub.types import (
    KeepAliveMessage,
    MessageMetadata,
    NotificationMessage,
    NotificationPayload,
    PayloadSession,
    PayloadSubscription,
    ReconnectMessage,
    RevokeMessage,
    SubscriptionRequest,
    SubscriptionTransport,
    WelcomeMessage,
)

REVOKE = """{
    "metadata": {
        "message_id": "84c1e79a-2a4b-4c13-ba0b-4312293e9308",
        "message_type": "revocation",
        "message_timestamp": "2019-11-16T10:11:12.464757833Z",
        "subscription_type": "channel.follow",
        "subscription_version": "1"
    },
    "payload": {
        "subscription": {
            "id": "f1c2a387-161a-49f9-a165-0f21d7a4e1c4",
            "status": "authorization_revoked",
            "type": "channel.follow",
            "version": "1",
            "cost": 1,
            "condition": {"broadcaster_user_id": "12826"},
            "transport": {"method": "websocket", "session_id": "AQoQexAWVYKSTIu4ec_2VAxyuhAB"},
            "created_at": "2019-11-16T10:11:12.464757833Z"
        }
    }
}"""

RECONNECT = """{
    "metadata": {
        "message_id": "84c1e79a-2a4b-4c13-ba0b-4312293e9308",
        "message_type": "session_reconnect",
        "message_timestamp": "2019-11-18T09:10:11.634234626Z"
    },
    "payload": {
        "session": {
            "id": "AQoQexAWVYKSTIu4ec_2VAxyuhAB",
            "status": "reconnecting",
            "keepalive_timeout_seconds": null,
            "reconnect_url": "ws://127.0.0.1:9000/ws",
            "connected_at": "2019-11-16T10:11:12.634234626Z"
        }
    }
}"""

KEEPALIVE = """{
    "metadata": {
        "message_id": "84c1e79a-2a4b-4c13-ba0b-4312293e9308",
        "message_type": "session_keepalive",
        "message_timestamp": "2019-11-16T10:11:12.634234626Z"
    },
    "payload": {}
}"""


def test_revoke_message_decodes_subscription():
    message = RevokeMessage.from_json(REVOKE)
    sub = message.payload.subscription
    assert message.metadata.message_type == "revocation"
    assert sub.type == "channel.follow"
    assert sub.status == "authorization_revoked"
    assert sub.cost == 1
    assert sub.condition == {"broadcaster_user_id": "12826"}
    assert sub.transport.session_id == "AQoQexAWVYKSTIu4ec_2VAxyuhAB"
    assert sub.created_at == datetime(2019, 11, 16, 10, 11, 12, 464757, tzinfo=timezone.utc)


def test_reconnect_null_keepalive_keeps_zero():
    message = ReconnectMessage.from_json(RECONNECT)
    session = message.payload.session
    assert session.keepalive_timeout_seconds == 0
    assert session.reconnect_url == "ws://127.0.0.1:9000/ws"
    assert session.status == "reconnecting"


def test_keepalive_message_decodes():
    message = KeepAliveMessage.from_json(KEEPALIVE)
    assert message.metadata.message_type == "session_keepalive"
    assert message.payload == {}


def test_bytes_input_accepted():
    message = KeepAliveMessage.from_json(KEEPALIVE.encode())
    assert message.metadata.message_id == "84c1e79a-2a4b-4c13-ba0b-4312293e9308"


def test_welcome_round_trip():
    welcome = WelcomeMessage.from_dict(
        {
            "metadata": {"message_id": "m1", "message_type": "session_welcome",
                         "message_timestamp": "2023-07-19T14:56:51.634234Z"},
            "payload": {"session": {"id": "abc", "status": "connected",
                                    "connected_at": "2023-07-19T14:56:51.616329Z",
                                    "keepalive_timeout_seconds": 10}},
        }
    )
    assert welcome.payload.session.keepalive_timeout_seconds == 10
    assert WelcomeMessage.from_json(welcome.to_json()) == welcome


def test_zero_time_encoding():
    assert MessageMetadata().to_dict()["message_timestamp"] == "0001-01-01T00:00:00Z"


def test_offset_time_round_trip():
    metadata = MessageMetadata.from_dict({"message_timestamp": "2019-11-16T10:11:12.5+02:00"})
    assert metadata.message_timestamp.utcoffset() == timedelta(hours=2)
    assert metadata.to_dict()["message_timestamp"] == "2019-11-16T10:11:12.5+02:00"


def test_nanoseconds_truncated_to_microseconds():
    metadata = MessageMetadata.from_dict({"message_timestamp": "2019-11-16T10:11:12.634234626Z"})
    assert metadata.message_timestamp.microsecond == 634234


def test_notification_keeps_raw_event():
    raw = {"broadcaster_user_id": "1337", "nested": [1, 2]}
    message = NotificationMessage.from_dict(
        {"metadata": {"message_type": "notification"},
         "payload": {"subscription": {"type": "stream.online"}, "event": raw}}
    )
    assert message.payload.event == raw
    assert message.payload.subscription.type == "stream.online"


def test_missing_event_is_emitted_as_null():
    encoded = NotificationMessage().to_dict()
    assert encoded["payload"]["event"] is None


def test_subscription_request_wire_shape():
    request = SubscriptionRequest(
        type="channel.update",
        version="2",
        condition={"broadcaster_user_id": "1"},
        transport=SubscriptionTransport(method="websocket", session_id="s"),
    )
    assert json.loads(request.to_json()) == {
        "type": "channel.update",
        "version": "2",
        "condition": {"broadcaster_user_id": "1"},
        "transport": {"method": "websocket", "session_id": "s"},
    }


def test_payload_subscription_inherits_request_fields():
    sub = PayloadSubscription.from_dict({"type": "user.update", "id": "x", "cost": 0})
    assert sub.type == "user.update"
    assert sub.id == "x"
    assert set(sub.to_dict()) >= {"type", "version", "condition", "transport", "id", "created_at"}


def test_case_insensitive_keys():
    session = PayloadSession.from_dict({"ID": "upper", "Status": "connected"})
    assert session.id == "upper"
    assert session.status == "connected"


def test_unknown_keys_ignored():
    session = PayloadSession.from_dict({"id": "a", "surprise": {"x": 1}})
    assert session == PayloadSession(id="a")


def test_invalid_json_raises():
    with pytest.raises(ValueError):
        KeepAliveMessage.from_json("{")


def test_non_object_raises():
    with pytest.raises(ValueError):
        WelcomeMessage.from_json("[]")


@pytest.mark.parametrize(
    "data",
    [
        {"keepalive_timeout_seconds": "10"},
        {"keepalive_timeout_seconds": 1.5},
        {"keepalive_timeout_seconds": True},
        {"id": 5},
        {"connected_at": "yesterday"},
        {"connected_at": "2019-13-01T00:00:00Z"},
    ],
)
def test_type_mismatch_raises(data):
    with pytest.raises(ValueError):
        PayloadSession.from_dict(data)


def test_condition_values_must_be_strings():
    with pytest.raises(ValueError):
        SubscriptionRequest.from_dict({"condition": {"broadcaster_user_id": 1}})


def test_null_nested_object_keeps_default():
    payload = NotificationPayload.from_dict({"subscription": None})
    assert payload.subscription == PayloadSubscription()