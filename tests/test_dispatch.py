import json
from datetime import datetime, timezone

import pytest

from eventsub.chat import EventChannelChatMessage, EventChannelModerate
from eventsub.dispatch import MessageType, decode_event, decode_message, parse_base_message
from eventsub.events import EventStreamOnline
from eventsub.subscriptions import EventSubscription, sub_metadata
from eventsub.types import (
    KeepAliveMessage,
    NotificationMessage,
    ReconnectMessage,
    RevokeMessage,
    WelcomeMessage,
)

KEEPALIVE = """{
    "metadata": {
        "message_id": "84c1e79a-2a4b-4c13-ba0b-4312293e9308",
        "message_type": "session_keepalive",
        "message_timestamp": "2019-11-16T10:11:12.634234626Z"
    },
    "payload": {}
}"""

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
            "reconnect_url": "ws://127.0.0.1:9999/ws",
            "connected_at": "2019-11-16T10:11:12.634234626Z"
        }
    }
}"""

WELCOME = """{
    "metadata": {
        "message_id": "96a3f3b5-5dec-4eed-908e-e11ee657416c",
        "message_type": "session_welcome",
        "message_timestamp": "2023-07-19T14:56:51.634234626Z"
    },
    "payload": {
        "session": {
            "id": "AQoQILE98gtqShGmLD7AM6yJThAB",
            "status": "connected",
            "connected_at": "2023-07-19T14:56:51.616329898Z",
            "keepalive_timeout_seconds": 10,
            "reconnect_url": null
        }
    }
}"""


def make_notification(sub_type, event):
    return json.dumps(
        {
            "metadata": {
                "message_id": "befa7b53-d79d-478f-86b9-120f112b044e",
                "message_type": "notification",
                "message_timestamp": "2022-11-16T10:11:12.464757833Z",
            },
            "payload": {
                "subscription": {
                    "type": str(getattr(sub_type, "value", sub_type)),
                    "version": "1",
                    "condition": {},
                    "transport": {"method": "websocket", "session_id": ""},
                    "id": "",
                    "status": "enabled",
                    "cost": 1,
                    "created_at": "2022-11-16T10:11:12.464757833Z",
                },
                "event": event,
            },
        }
    )


def event_for(sub_type, event):
    message = decode_message(make_notification(sub_type, event))
    return decode_event(message)


def test_message_type_values_and_classes():
    assert MessageType("session_welcome") is MessageType.SESSION_WELCOME
    assert MessageType.SESSION_KEEPALIVE.message_class is KeepAliveMessage
    assert MessageType.NOTIFICATION.message_class is NotificationMessage
    assert MessageType.SESSION_RECONNECT.message_class is ReconnectMessage
    assert MessageType.REVOCATION.message_class is RevokeMessage
    assert MessageType.SESSION_WELCOME.message_class is WelcomeMessage


def test_parse_base_message_reads_metadata():
    metadata = parse_base_message(REVOKE)
    assert metadata.message_id == "84c1e79a-2a4b-4c13-ba0b-4312293e9308"
    assert metadata.message_type == "revocation"
    assert metadata.message_timestamp.year == 2019


def test_parse_base_message_empty_object():
    assert parse_base_message(b"{}").message_type == ""


def test_parse_base_message_invalid_json():
    with pytest.raises(ValueError, match="basemessage"):
        parse_base_message("{")


def test_parse_base_message_not_an_object():
    with pytest.raises(ValueError):
        parse_base_message("[1, 2]")


def test_decode_empty_object_is_unknown_type():
    with pytest.raises(ValueError, match="unknown message type"):
        decode_message("{}")


def test_decode_invalid_json():
    with pytest.raises(ValueError):
        decode_message(b"{")


def test_decode_keepalive():
    message = decode_message(KEEPALIVE)
    assert isinstance(message, KeepAliveMessage)
    assert message.payload == {}
    assert message.metadata.message_id == "84c1e79a-2a4b-4c13-ba0b-4312293e9308"


def test_decode_revoke():
    message = decode_message(REVOKE.encode("utf-8"))
    assert isinstance(message, RevokeMessage)
    subscription = message.payload.subscription
    assert subscription.status == "authorization_revoked"
    assert subscription.type == "channel.follow"
    assert subscription.condition == {"broadcaster_user_id": "12826"}
    assert subscription.transport.session_id == "AQoQexAWVYKSTIu4ec_2VAxyuhAB"
    assert subscription.cost == 1


def test_decode_reconnect():
    message = decode_message(RECONNECT)
    assert isinstance(message, ReconnectMessage)
    session = message.payload.session
    assert session.reconnect_url == "ws://127.0.0.1:9999/ws"
    assert session.keepalive_timeout_seconds == 0
    assert session.status == "reconnecting"


def test_decode_welcome():
    message = decode_message(WELCOME)
    assert isinstance(message, WelcomeMessage)
    assert message.payload.session.id == "AQoQILE98gtqShGmLD7AM6yJThAB"
    assert message.payload.session.keepalive_timeout_seconds == 10
    assert message.payload.session.reconnect_url == ""


def test_decode_message_with_bad_field_type():
    data = KEEPALIVE.replace('"payload": {}', '"payload": []')
    with pytest.raises(ValueError, match="session_keepalive"):
        decode_message(data)


def test_notification_stream_online():
    event = event_for(
        EventSubscription.STREAM_ONLINE,
        {
            "id": "9001",
            "broadcaster_user_id": "1337",
            "broadcaster_user_login": "cool_user",
            "broadcaster_user_name": "Cool_User",
            "type": "live",
            "started_at": "2020-10-11T10:11:12.123Z",
        },
    )
    assert isinstance(event, EventStreamOnline)
    assert event.id == "9001"
    assert event.type == "live"
    assert event.broadcaster_user_login == "cool_user"
    assert event.started_at == datetime(2020, 10, 11, 10, 11, 12, 123000, tzinfo=timezone.utc)


def test_unknown_subscription():
    message = decode_message(make_notification("unknown", {}))
    with pytest.raises(ValueError, match="unknown subscription type unknown"):
        decode_event(message)


def test_event_with_wrong_field_type():
    message = decode_message(make_notification(EventSubscription.STREAM_ONLINE, {"id": 5}))
    with pytest.raises(ValueError, match="EventStreamOnline"):
        decode_event(message)


def test_subscription_gift_anonymous():
    event = event_for(
        EventSubscription.CHANNEL_SUBSCRIPTION_GIFT,
        {
            "user_id": None,
            "user_login": None,
            "user_name": None,
            "broadcaster_user_id": "1337",
            "total": 2,
            "tier": "1000",
            "cumulative_total": None,
            "is_anonymous": True,
        },
    )
    assert event.user_id == ""
    assert event.total == 2
    assert event.cumulative_total == 0
    assert event.is_anonymous is True


def test_cheer_anonymous():
    event = event_for(
        EventSubscription.CHANNEL_CHEER,
        {"is_anonymous": True, "user_id": None, "message": "pogchamp", "bits": 1000},
    )
    assert event.bits == 1000
    assert event.message == "pogchamp"
    assert event.is_anonymous is True


def test_authorization_revoke_without_user():
    event = event_for(
        EventSubscription.USER_AUTHORIZATION_REVOKE,
        {"client_id": "crq72vsaoijkc83xx42hz6i37", "user_id": "1337", "user_login": None},
    )
    assert event.client_id == "crq72vsaoijkc83xx42hz6i37"
    assert event.user_id == "1337"
    assert event.user_login == ""


def test_user_update_without_email():
    event = event_for(
        EventSubscription.USER_UPDATE,
        {"user_id": "1337", "user_login": "cool_user", "description": "cool description"},
    )
    assert event.email == ""
    assert event.email_verified is False
    assert event.description == "cool description"


def test_drop_entitlement_grant_is_a_list():
    event = event_for(
        EventSubscription.DROP_ENTITLEMENT_GRANT,
        [
            {
                "id": "bf7c8577-e3e6-474b-8b4c-3e76f9f1b0b2",
                "data": {
                    "organization_id": "9001",
                    "category_id": "9002",
                    "category_name": "Fortnite",
                    "user_id": "1234",
                    "created_at": "2019-01-28T04:17:53.325Z",
                },
            }
        ],
    )
    assert len(event) == 1
    assert event[0].id == "bf7c8577-e3e6-474b-8b4c-3e76f9f1b0b2"
    assert event[0].data.category_name == "Fortnite"
    assert event[0].data.user_id == "1234"


def test_channel_moderate_ban():
    event = event_for(
        EventSubscription.CHANNEL_MODERATE,
        {
            "broadcaster_user_id": "1337",
            "moderator_user_id": "424596340",
            "action": "ban",
            "ban": {"user_id": "141981764", "user_login": "twitchdev", "reason": "spam"},
        },
    )
    assert isinstance(event, EventChannelModerate)
    assert event.action == "ban"
    assert event.ban.reason == "spam"
    assert event.ban.user_login == "twitchdev"
    assert event.timeout is None


def test_chat_message_fragments():
    event = event_for(
        EventSubscription.CHANNEL_CHAT_MESSAGE,
        {
            "chatter_user_login": "viewer32",
            "message_id": "cc106a89-1814-919d-454c-f4f2f970aae7",
            "message": {
                "text": "Hi chat",
                "fragments": [{"type": "text", "text": "Hi chat"}],
            },
            "message_type": "text",
            "badges": [{"set_id": "moderator", "id": "1", "info": ""}],
        },
    )
    assert isinstance(event, EventChannelChatMessage)
    assert event.chatter_user_login == "viewer32"
    assert event.message.text == "Hi chat"
    assert event.message.fragments[0].type == "text"
    assert event.badges[0].set_id == "moderator"
    assert event.reply is None


def test_charity_donation_amount():
    event = event_for(
        EventSubscription.CHANNEL_CHARITY_CAMPAIGN_DONATE,
        {
            "campaign_id": "123-abc-456-def",
            "charity_name": "Example name",
            "amount": {"value": 550, "decimal_places": 2, "currency": "USD"},
        },
    )
    assert event.charity_name == "Example name"
    assert event.amount.currency == "USD"
    assert event.amount.amount() == 5.5


@pytest.mark.parametrize("subscription", list(EventSubscription))
def test_every_subscription_decodes_null_event(subscription):
    metadata = sub_metadata()[subscription]
    event = event_for(subscription, None)
    if metadata.many:
        assert event == []
    else:
        assert event == metadata.event_type()


@pytest.mark.parametrize(
    "subscription", [s for s in EventSubscription if not sub_metadata()[s].many]
)
def test_every_subscription_decodes_empty_event(subscription):
    event = event_for(subscription, {})
    assert event == sub_metadata()[subscription].event_type()