"""Subscription types, their metadata and the subscribe request."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Union

import httpx

from eventsub import chat, events
from eventsub.types import Model, PayloadSubscription, SubscriptionRequest, SubscriptionTransport

TWITCH_EVENTSUB_URL = "https://api.twitch.tv/helix/eventsub/subscriptions"


class EventSubscription(str, Enum):
    """The subscription types that can be requested."""

    CHANNEL_UPDATE = "channel.update"
    CHANNEL_FOLLOW = "channel.follow"

    CHANNEL_SUBSCRIBE = "channel.subscribe"
    CHANNEL_SUBSCRIPTION_END = "channel.subscription.end"
    CHANNEL_SUBSCRIPTION_GIFT = "channel.subscription.gift"
    CHANNEL_SUBSCRIPTION_MESSAGE = "channel.subscription.message"

    CHANNEL_CHEER = "channel.cheer"
    CHANNEL_RAID = "channel.raid"
    CHANNEL_BAN = "channel.ban"
    CHANNEL_UNBAN = "channel.unban"

    CHANNEL_MODERATOR_ADD = "channel.moderator.add"
    CHANNEL_MODERATOR_REMOVE = "channel.moderator.remove"
    CHANNEL_VIP_ADD = "channel.vip.add"
    CHANNEL_VIP_REMOVE = "channel.vip.remove"

    CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_ADD = "channel.channel_points_custom_reward.add"
    CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_UPDATE = "channel.channel_points_custom_reward.update"
    CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_REMOVE = "channel.channel_points_custom_reward.remove"
    CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_REDEMPTION_ADD = (
        "channel.channel_points_custom_reward_redemption.add"
    )
    CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_REDEMPTION_UPDATE = (
        "channel.channel_points_custom_reward_redemption.update"
    )
    CHANNEL_CHANNEL_POINTS_AUTOMATIC_REWARD_REDEMPTION_ADD = (
        "channel.channel_points_automatic_reward_redemption.add"
    )

    CHANNEL_POLL_BEGIN = "channel.poll.begin"
    CHANNEL_POLL_PROGRESS = "channel.poll.progress"
    CHANNEL_POLL_END = "channel.poll.end"

    CHANNEL_PREDICTION_BEGIN = "channel.prediction.begin"
    CHANNEL_PREDICTION_PROGRESS = "channel.prediction.progress"
    CHANNEL_PREDICTION_LOCK = "channel.prediction.lock"
    CHANNEL_PREDICTION_END = "channel.prediction.end"

    DROP_ENTITLEMENT_GRANT = "drop.entitlement.grant"
    EXTENSION_BITS_TRANSACTION_CREATE = "extension.bits_transaction.create"

    CHANNEL_GOAL_BEGIN = "channel.goal.begin"
    CHANNEL_GOAL_PROGRESS = "channel.goal.progress"
    CHANNEL_GOAL_END = "channel.goal.end"

    CHANNEL_HYPE_TRAIN_BEGIN = "channel.hype_train.begin"
    CHANNEL_HYPE_TRAIN_PROGRESS = "channel.hype_train.progress"
    CHANNEL_HYPE_TRAIN_END = "channel.hype_train.end"

    STREAM_ONLINE = "stream.online"
    STREAM_OFFLINE = "stream.offline"

    USER_AUTHORIZATION_GRANT = "user.authorization.grant"
    USER_AUTHORIZATION_REVOKE = "user.authorization.revoke"
    USER_UPDATE = "user.update"

    CHANNEL_CHARITY_CAMPAIGN_DONATE = "channel.charity_campaign.donate"
    CHANNEL_CHARITY_CAMPAIGN_START = "channel.charity_campaign.start"
    CHANNEL_CHARITY_CAMPAIGN_PROGRESS = "channel.charity_campaign.progress"
    CHANNEL_CHARITY_CAMPAIGN_STOP = "channel.charity_campaign.stop"

    CHANNEL_SHIELD_MODE_BEGIN = "channel.shield_mode.begin"
    CHANNEL_SHIELD_MODE_END = "channel.shield_mode.end"

    CHANNEL_SHOUTOUT_CREATE = "channel.shoutout.create"
    CHANNEL_SHOUTOUT_RECEIVE = "channel.shoutout.receive"

    CHANNEL_MODERATE = "channel.moderate"

    AUTOMOD_MESSAGE_HOLD = "automod.message.hold"
    AUTOMOD_MESSAGE_UPDATE = "automod.message.update"
    AUTOMOD_SETTINGS_UPDATE = "automod.settings.update"
    AUTOMOD_TERMS_UPDATE = "automod.terms.update"
    CHANNEL_CHAT_USER_MESSAGE_HOLD = "channel.chat.user_message_hold"
    CHANNEL_CHAT_USER_MESSAGE_UPDATE = "channel.chat.user_message_update"

    CHANNEL_CHAT_CLEAR = "channel.chat.clear"
    CHANNEL_CHAT_CLEAR_USER_MESSAGES = "channel.chat.clear_user_messages"
    CHANNEL_CHAT_MESSAGE = "channel.chat.message"
    CHANNEL_CHAT_MESSAGE_DELETE = "channel.chat.message_delete"
    CHANNEL_CHAT_NOTIFICATION = "channel.chat.notification"
    CHANNEL_CHAT_SETTINGS_UPDATE = "channel.chat_settings.update"
    CHANNEL_SUSPICIOUS_USER_MESSAGE = "channel.suspicious_user.message"
    CHANNEL_SUSPICIOUS_USER_UPDATE = "channel.suspicious_user.update"

    CHANNEL_SHARED_CHAT_BEGIN = "channel.shared_chat.begin"
    CHANNEL_SHARED_CHAT_UPDATE = "channel.shared_chat.update"
    CHANNEL_SHARED_CHAT_END = "channel.shared_chat.end"

    USER_WHISPER_MESSAGE = "user.whisper.message"

    CHANNEL_AD_BREAK_BEGIN = "channel.ad_break.begin"

    CHANNEL_WARNING_ACKNOWLEDGE = "channel.warning.acknowledge"
    CHANNEL_WARNING_SEND = "channel.warning.send"

    CHANNEL_UNBAN_REQUEST_CREATE = "channel.unban_request.create"
    CHANNEL_UNBAN_REQUEST_RESOLVE = "channel.unban_request.resolve"

    CONDUIT_SHARD_DISABLED = "conduit.shard.disabled"


@dataclass(frozen=True)
class SubscriptionMetadata:
    """The default version of a subscription type and the event it carries."""

    version: str
    event_type: type[Model]
    many: bool = False

    def decode(self, data: Any) -> Any:
        """Turn a decoded JSON event into this subscription's event object."""
        if self.many:
            if data is None:
                return []
            if not isinstance(data, list):
                raise ValueError(
                    f"cannot decode {self.event_type.__name__} list: "
                    f"expected array, got {type(data).__name__}"
                )
            return [
                self.event_type() if item is None else self.event_type.from_dict(item)
                for item in data
            ]
        if data is None:
            return self.event_type()
        return self.event_type.from_dict(data)


_S = EventSubscription

_SUB_METADATA: dict[EventSubscription, SubscriptionMetadata] = {
    _S.CHANNEL_UPDATE: SubscriptionMetadata("2", events.EventChannelUpdate),
    _S.CHANNEL_FOLLOW: SubscriptionMetadata("2", events.EventChannelFollow),
    _S.CHANNEL_SUBSCRIBE: SubscriptionMetadata("1", events.EventChannelSubscribe),
    _S.CHANNEL_SUBSCRIPTION_END: SubscriptionMetadata("1", events.EventChannelSubscriptionEnd),
    _S.CHANNEL_SUBSCRIPTION_GIFT: SubscriptionMetadata("1", events.EventChannelSubscriptionGift),
    _S.CHANNEL_SUBSCRIPTION_MESSAGE: SubscriptionMetadata(
        "1", events.EventChannelSubscriptionMessage
    ),
    _S.CHANNEL_CHEER: SubscriptionMetadata("1", events.EventChannelCheer),
    _S.CHANNEL_RAID: SubscriptionMetadata("1", events.EventChannelRaid),
    _S.CHANNEL_BAN: SubscriptionMetadata("1", events.EventChannelBan),
    _S.CHANNEL_UNBAN: SubscriptionMetadata("1", events.EventChannelUnban),
    _S.CHANNEL_MODERATOR_ADD: SubscriptionMetadata("1", events.EventChannelModeratorAdd),
    _S.CHANNEL_MODERATOR_REMOVE: SubscriptionMetadata("1", events.EventChannelModeratorRemove),
    _S.CHANNEL_VIP_ADD: SubscriptionMetadata("1", events.EventChannelVIPAdd),
    _S.CHANNEL_VIP_REMOVE: SubscriptionMetadata("1", events.EventChannelVIPRemove),
    _S.CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_ADD: SubscriptionMetadata(
        "1", events.EventChannelChannelPointsCustomRewardAdd
    ),
    _S.CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_UPDATE: SubscriptionMetadata(
        "1", events.EventChannelChannelPointsCustomRewardUpdate
    ),
    _S.CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_REMOVE: SubscriptionMetadata(
        "1", events.EventChannelChannelPointsCustomRewardRemove
    ),
    _S.CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_REDEMPTION_ADD: SubscriptionMetadata(
        "1", events.EventChannelChannelPointsCustomRewardRedemptionAdd
    ),
    _S.CHANNEL_CHANNEL_POINTS_CUSTOM_REWARD_REDEMPTION_UPDATE: SubscriptionMetadata(
        "1", events.EventChannelChannelPointsCustomRewardRedemptionUpdate
    ),
    _S.CHANNEL_CHANNEL_POINTS_AUTOMATIC_REWARD_REDEMPTION_ADD: SubscriptionMetadata(
        "1", events.EventChannelChannelPointsAutomaticRewardRedemptionAdd
    ),
    _S.CHANNEL_POLL_BEGIN: SubscriptionMetadata("1", events.EventChannelPollBegin),
    _S.CHANNEL_POLL_PROGRESS: SubscriptionMetadata("1", events.EventChannelPollProgress),
    _S.CHANNEL_POLL_END: SubscriptionMetadata("1", events.EventChannelPollEnd),
    _S.CHANNEL_PREDICTION_BEGIN: SubscriptionMetadata("1", events.EventChannelPredictionBegin),
    _S.CHANNEL_PREDICTION_PROGRESS: SubscriptionMetadata(
        "1", events.EventChannelPredictionProgress
    ),
    _S.CHANNEL_PREDICTION_LOCK: SubscriptionMetadata("1", events.EventChannelPredictionLock),
    _S.CHANNEL_PREDICTION_END: SubscriptionMetadata("1", events.EventChannelPredictionEnd),
    _S.DROP_ENTITLEMENT_GRANT: SubscriptionMetadata(
        "1", events.EventDropEntitlementGrant, many=True
    ),
    _S.EXTENSION_BITS_TRANSACTION_CREATE: SubscriptionMetadata(
        "1", events.EventExtensionBitsTransactionCreate
    ),
    _S.CHANNEL_GOAL_BEGIN: SubscriptionMetadata("1", events.EventChannelGoalBegin),
    _S.CHANNEL_GOAL_PROGRESS: SubscriptionMetadata("1", events.EventChannelGoalProgress),
    _S.CHANNEL_GOAL_END: SubscriptionMetadata("1", events.EventChannelGoalEnd),
    _S.CHANNEL_HYPE_TRAIN_BEGIN: SubscriptionMetadata("1", events.EventChannelHypeTrainBegin),
    _S.CHANNEL_HYPE_TRAIN_PROGRESS: SubscriptionMetadata(
        "1", events.EventChannelHypeTrainProgress
    ),
    _S.CHANNEL_HYPE_TRAIN_END: SubscriptionMetadata("1", events.EventChannelHypeTrainEnd),
    _S.STREAM_ONLINE: SubscriptionMetadata("1", events.EventStreamOnline),
    _S.STREAM_OFFLINE: SubscriptionMetadata("1", events.EventStreamOffline),
    _S.USER_AUTHORIZATION_GRANT: SubscriptionMetadata("1", events.EventUserAuthorizationGrant),
    _S.USER_AUTHORIZATION_REVOKE: SubscriptionMetadata(
        "1", events.EventUserAuthorizationRevoke
    ),
    _S.USER_UPDATE: SubscriptionMetadata("1", events.EventUserUpdate),
    _S.CHANNEL_CHARITY_CAMPAIGN_DONATE: SubscriptionMetadata(
        "1", events.EventChannelCharityCampaignDonate
    ),
    _S.CHANNEL_CHARITY_CAMPAIGN_START: SubscriptionMetadata(
        "1", events.EventChannelCharityCampaignStart
    ),
    _S.CHANNEL_CHARITY_CAMPAIGN_PROGRESS: SubscriptionMetadata(
        "1", events.EventChannelCharityCampaignProgress
    ),
    _S.CHANNEL_CHARITY_CAMPAIGN_STOP: SubscriptionMetadata(
        "1", events.EventChannelCharityCampaignStop
    ),
    _S.CHANNEL_SHIELD_MODE_BEGIN: SubscriptionMetadata("1", events.EventChannelShieldModeBegin),
    _S.CHANNEL_SHIELD_MODE_END: SubscriptionMetadata("1", events.EventChannelShieldModeEnd),
    _S.CHANNEL_SHOUTOUT_CREATE: SubscriptionMetadata("1", events.EventChannelShoutoutCreate),
    _S.CHANNEL_SHOUTOUT_RECEIVE: SubscriptionMetadata("1", events.EventChannelShoutoutReceive),
    _S.CHANNEL_MODERATE: SubscriptionMetadata("2", chat.EventChannelModerate),
    _S.AUTOMOD_MESSAGE_HOLD: SubscriptionMetadata("1", chat.EventAutomodMessageHold),
    _S.AUTOMOD_MESSAGE_UPDATE: SubscriptionMetadata("1", chat.EventAutomodMessageUpdate),
    _S.AUTOMOD_SETTINGS_UPDATE: SubscriptionMetadata("1", chat.EventAutomodSettingsUpdate),
    _S.AUTOMOD_TERMS_UPDATE: SubscriptionMetadata("1", chat.EventAutomodTermsUpdate),
    _S.CHANNEL_CHAT_USER_MESSAGE_HOLD: SubscriptionMetadata(
        "1", chat.EventChannelChatUserMessageHold
    ),
    _S.CHANNEL_CHAT_USER_MESSAGE_UPDATE: SubscriptionMetadata(
        "1", chat.EventChannelChatUserMessageUpdate
    ),
    _S.CHANNEL_CHAT_CLEAR: SubscriptionMetadata("1", chat.EventChannelChatClear),
    _S.CHANNEL_CHAT_CLEAR_USER_MESSAGES: SubscriptionMetadata(
        "1", chat.EventChannelChatClearUserMessages
    ),
    _S.CHANNEL_CHAT_MESSAGE: SubscriptionMetadata("1", chat.EventChannelChatMessage),
    _S.CHANNEL_CHAT_MESSAGE_DELETE: SubscriptionMetadata(
        "1", chat.EventChannelChatMessageDelete
    ),
    _S.CHANNEL_CHAT_NOTIFICATION: SubscriptionMetadata("1", chat.EventChannelChatNotification),
    _S.CHANNEL_CHAT_SETTINGS_UPDATE: SubscriptionMetadata(
        "1", chat.EventChannelChatSettingsUpdate
    ),
    _S.CHANNEL_SUSPICIOUS_USER_MESSAGE: SubscriptionMetadata(
        "1", chat.EventChannelSuspiciousUserMessage
    ),
    _S.CHANNEL_SUSPICIOUS_USER_UPDATE: SubscriptionMetadata(
        "1", chat.EventChannelSuspiciousUserUpdate
    ),
    _S.CHANNEL_SHARED_CHAT_BEGIN: SubscriptionMetadata("1", events.EventChannelSharedChatBegin),
    _S.CHANNEL_SHARED_CHAT_UPDATE: SubscriptionMetadata(
        "1", events.EventChannelSharedChatUpdate
    ),
    _S.CHANNEL_SHARED_CHAT_END: SubscriptionMetadata("1", events.EventChannelSharedChatEnd),
    _S.USER_WHISPER_MESSAGE: SubscriptionMetadata("1", events.EventUserWhisperMessage),
    _S.CHANNEL_AD_BREAK_BEGIN: SubscriptionMetadata("1", events.EventChannelAdBreakBegin),
    _S.CHANNEL_WARNING_ACKNOWLEDGE: SubscriptionMetadata(
        "1", events.EventChannelWarningAcknowledge
    ),
    _S.CHANNEL_WARNING_SEND: SubscriptionMetadata("1", events.EventChannelWarningSend),
    _S.CHANNEL_UNBAN_REQUEST_CREATE: SubscriptionMetadata(
        "1", events.EventChannelUnbanRequestCreate
    ),
    _S.CHANNEL_UNBAN_REQUEST_RESOLVE: SubscriptionMetadata(
        "1", events.EventChannelUnbanRequestResolve
    ),
    _S.CONDUIT_SHARD_DISABLED: SubscriptionMetadata("1", events.EventConduitShardDisabled),
}


def sub_metadata() -> dict[EventSubscription, SubscriptionMetadata]:
    """Return a copy of the metadata table for every known subscription type."""
    return dict(_SUB_METADATA)


def _event_name(event: Union[EventSubscription, str]) -> str:
    return event.value if isinstance(event, EventSubscription) else str(event)


@dataclass
class SubscribeRequest:
    """What is needed to subscribe a websocket session to one event type."""

    session_id: str = ""
    client_id: str = ""
    access_token: str = ""
    version_override: str = ""
    event: Union[EventSubscription, str] = ""
    condition: Optional[dict[str, str]] = None


@dataclass
class SubscribeResponse(Model):
    data: list[PayloadSubscription] = None  # type: ignore[assignment]
    total: int = 0
    total_cost: int = 0
    max_total_cost: int = 0

    def __post_init__(self) -> None:
        if self.data is None:
            self.data = []


def subscribe_event(
    request: SubscribeRequest, url: str = TWITCH_EVENTSUB_URL
) -> SubscribeResponse:
    """Ask the API to send an event type to a websocket session.

    Raises ConnectionError if the request cannot be sent, httpx.HTTPStatusError
    if the API does not answer 202, and ValueError if the answer is not valid.
    """
    name = _event_name(request.event)
    metadata = _SUB_METADATA.get(name)  # type: ignore[call-overload]
    version = request.version_override or (metadata.version if metadata else "")

    body = SubscriptionRequest(
        type=name,
        version=version,
        condition=request.condition,  # type: ignore[arg-type]
        transport=SubscriptionTransport(method="websocket", session_id=request.session_id),
    ).to_json()

    headers = {
        "Client-Id": request.client_id,
        "Authorization": f"Bearer {request.access_token}",
        "Content-Type": "application/json",
    }

    try:
        response = httpx.post(url, content=body.encode("utf-8"), headers=headers)
    except httpx.HTTPError as exc:
        raise ConnectionError(f"could not subscribe to event: {exc}") from exc

    if response.status_code != 202:
        raise httpx.HTTPStatusError(
            f"could not subscribe to event: {response.status_code} "
            f"{response.reason_phrase}: {response.text}",
            request=response.request,
            response=response,
        )

    try:
        return SubscribeResponse.from_json(response.content)
    except ValueError as exc:
        raise ValueError(f"could not unmarshal subscription response: {exc}") from exc