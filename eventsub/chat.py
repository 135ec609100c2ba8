"""Chat, moderation and automod event payloads."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from eventsub.events import Broadcaster, Chatter, Moderator, SourceBroadcaster, Target, User
from eventsub.types import ZERO_TIME, Model


@dataclass
class Ban(User):
    reason: str = ""


@dataclass
class Timeout(Ban):
    expires_at: datetime = ZERO_TIME


@dataclass
class Raid(User):
    viewer_count: int = 0


@dataclass
class DeletedMessage(User):
    message_id: str = ""
    message_body: str = ""


@dataclass
class AutomodTerms(Model):
    action: str = ""
    list: "list[str]" = field(default_factory=list)
    terms: "list[str]" = field(default_factory=list)
    from_automod: bool = False


@dataclass
class UnbanRequest(User):
    is_approved: bool = False
    moderator_message: str = ""


@dataclass
class Followers(Model):
    follow_duration_minutes: int = 0


@dataclass
class SlowMode(Model):
    wait_time_seconds: int = 0


@dataclass
class ChatWarning(User):
    reason: str = ""
    chat_rules_cited: list[str] = field(default_factory=list)


@dataclass
class EventChannelModerate(Broadcaster, SourceBroadcaster, Moderator):
    action: str = ""
    followers: Optional[Followers] = None
    slow: Optional[SlowMode] = None
    vip: Optional[User] = None
    unvip: Optional[User] = None
    mod: Optional[User] = None
    unmod: Optional[User] = None
    ban: Optional[Ban] = None
    unban: Optional[User] = None
    timeout: Optional[Timeout] = None
    untimeout: Optional[User] = None
    raid: Optional[Raid] = None
    unraid: Optional[User] = None
    delete: Optional[DeletedMessage] = None
    automod_terms: Optional[AutomodTerms] = None
    unban_request: Optional[UnbanRequest] = None
    warn: Optional[ChatWarning] = None
    shared_chat_ban: Optional[Ban] = None
    shared_chat_unban: Optional[User] = None
    shared_chat_timeout: Optional[Timeout] = None
    shared_chat_untimeout: Optional[User] = None
    shared_chat_delete: Optional[DeletedMessage] = None


@dataclass
class ChatMessageFragmentCheermote(Model):
    prefix: str = ""
    bits: int = 0
    tier: int = 0


@dataclass
class ChatMessageFragmentEmote(Model):
    id: str = ""
    emote_set_id: str = ""
    owner_id: str = ""
    format: list[str] = field(default_factory=list)


class ChatMessageFragmentMention(User):
    """A user mentioned in a chat message fragment."""


@dataclass
class ChatMessageFragment(Model):
    type: str = ""
    text: str = ""
    cheermote: Optional[ChatMessageFragmentCheermote] = None
    emote: Optional[ChatMessageFragmentEmote] = None
    mention: Optional[ChatMessageFragmentMention] = None


@dataclass
class ChatMessage(Model):
    text: str = ""
    fragments: list[ChatMessageFragment] = field(default_factory=list)


@dataclass
class EventAutomodMessageHold(Broadcaster, User):
    message_id: str = ""
    message: ChatMessage = field(default_factory=ChatMessage)
    level: int = 0
    category: str = ""
    held_at: datetime = ZERO_TIME


@dataclass
class EventAutomodMessageUpdate(Broadcaster, User, Moderator):
    message_id: str = ""
    message: ChatMessage = field(default_factory=ChatMessage)
    level: int = 0
    category: str = ""
    status: str = ""
    held_at: datetime = ZERO_TIME


@dataclass
class EventAutomodSettingsUpdate(Broadcaster, Moderator):
    overall_level: Optional[int] = None
    disability: int = 0
    aggression: int = 0
    sexuality_sex_or_gender: int = 0
    misogyny: int = 0
    bullying: int = 0
    swearing: int = 0
    race_ethnicity_or_religion: int = 0
    sex_based_terms: int = 0


@dataclass
class EventAutomodTermsUpdate(Broadcaster, Moderator):
    action: str = ""
    from_automod: bool = False
    terms: list[str] = field(default_factory=list)


@dataclass
class EventChannelChatUserMessageHold(Broadcaster, User):
    message_id: str = ""
    message: ChatMessage = field(default_factory=ChatMessage)


@dataclass
class EventChannelChatUserMessageUpdate(Broadcaster, User):
    status: str = ""
    message_id: str = ""
    message: ChatMessage = field(default_factory=ChatMessage)


class EventChannelChatClear(Broadcaster):
    """All chat messages in a channel were cleared."""


@dataclass
class EventChannelChatClearUserMessages(Broadcaster, Target):
    pass


@dataclass
class ChatMessageUserBadge(Model):
    set_id: str = ""
    id: str = ""
    info: str = ""


@dataclass
class ChatMessageCheer(Model):
    bits: int = 0


@dataclass
class ChatMessageReply(Model):
    parent_message_id: str = ""
    parent_message_body: str = ""
    parent_user_id: str = ""
    parent_user_name: str = ""
    parent_user_login: str = ""
    thread_message_id: str = ""
    thread_user_id: str = ""
    thread_user_name: str = ""
    thread_user_login: str = ""


@dataclass
class EventChannelChatMessage(Broadcaster, SourceBroadcaster, Chatter):
    message_id: str = ""
    source_message_id: str = ""
    message: ChatMessage = field(default_factory=ChatMessage)
    color: str = ""
    badges: list[ChatMessageUserBadge] = field(default_factory=list)
    source_badges: list[ChatMessageUserBadge] = field(default_factory=list)
    message_type: str = ""
    cheer: Optional[ChatMessageCheer] = None
    reply: Optional[ChatMessageReply] = None
    channel_points_custom_reward_id: str = ""


@dataclass
class EventChannelChatMessageDelete(Broadcaster, Target):
    message_id: str = ""


@dataclass
class ChatNotificationSub(Model):
    sub_tier: str = ""
    is_prime: bool = False
    duration_months: int = 0


@dataclass
class ChatNotificationResub(Model):
    cumulative_months: int = 0
    duration_months: int = 0
    streak_months: int = 0
    sub_tier: str = ""
    is_prime: bool = False
    is_gift: bool = False
    gifter_is_anonymous: bool = False
    gifter_user_id: str = ""
    gifter_user_name: str = ""
    gifter_user_login: str = ""


@dataclass
class ChatNotificationSubGift(Model):
    duration_months: int = 0
    cumulative_total: int = 0
    recipient_user_id: str = ""
    recipient_user_name: str = ""
    recipient_user_login: str = ""
    sub_tier: str = ""
    community_gift_id: str = ""


@dataclass
class ChatNotificationCommunitySubGift(Model):
    id: str = ""
    total: int = 0
    sub_tier: str = ""
    cumulative_total: int = 0


@dataclass
class ChatNotificationGiftPaidUpgrade(Model):
    gifter_is_anonymous: bool = False
    gifter_user_id: str = ""
    gifter_user_name: str = ""


@dataclass
class ChatNotificationPrimePaidUpgrade(Model):
    sub_tier: str = ""


@dataclass
class ChatNotificationPayItForward(Model):
    gifter_is_anonymous: bool = False
    gifter_user_id: str = ""
    gifter_user_name: str = ""
    gifter_user_login: str = ""


@dataclass
class ChatNotificationRaid(User):
    viewer_count: str = ""
    profile_image_url: str = ""


@dataclass
class ChatNotificationUnraid(Model):
    pass


@dataclass
class ChatNotificationAnnouncement(Model):
    color: str = ""


@dataclass
class ChatNotificationBitsBadgeTier(Model):
    tier: int = 0


@dataclass
class ChatNotificationCharityDonationAmount(Model):
    value: int = 0
    decimal_place: int = 0
    currency: str = ""


@dataclass
class ChatNotificationCharityDonation(Model):
    charity_name: str = ""
    amount: ChatNotificationCharityDonationAmount = field(
        default_factory=ChatNotificationCharityDonationAmount
    )


@dataclass
class EventChannelChatNotification(Broadcaster, SourceBroadcaster, Chatter):
    chatter_is_anonymous: bool = False
    color: str = ""
    badges: list[ChatMessageUserBadge] = field(default_factory=list)
    source_badges: list[ChatMessageUserBadge] = field(default_factory=list)
    system_message: str = ""
    message_id: str = ""
    source_message_id: str = ""
    message: ChatMessage = field(default_factory=ChatMessage)

    notice_type: str = ""
    sub: Optional[ChatNotificationSub] = None
    resub: Optional[ChatNotificationResub] = None
    sub_gift: Optional[ChatNotificationSubGift] = None
    community_sub_gift: Optional[ChatNotificationCommunitySubGift] = None
    gift_paid_upgrade: Optional[ChatNotificationGiftPaidUpgrade] = None
    prime_paid_upgrade: Optional[ChatNotificationPrimePaidUpgrade] = None
    pay_it_forward: Optional[ChatNotificationPayItForward] = None
    raid: Optional[ChatNotificationRaid] = None
    unraid: Optional[ChatNotificationUnraid] = None
    announcement: Optional[ChatNotificationAnnouncement] = None
    bits_badge_tier: Optional[ChatNotificationBitsBadgeTier] = None
    charity_donation: Optional[ChatNotificationCharityDonation] = None

    shared_chat_sub: Optional[ChatNotificationSub] = None
    shared_chat_resub: Optional[ChatNotificationResub] = None
    shared_chat_sub_gift: Optional[ChatNotificationSubGift] = None
    shared_chat_community_sub_gift: Optional[ChatNotificationCommunitySubGift] = None
    shared_chat_gift_paid_upgrade: Optional[ChatNotificationGiftPaidUpgrade] = None
    shared_chat_prime_paid_upgrade: Optional[ChatNotificationPrimePaidUpgrade] = None
    shared_chat_pay_it_forward: Optional[ChatNotificationPayItForward] = None
    shared_chat_raid: Optional[ChatNotificationRaid] = None
    shared_chat_announcement: Optional[ChatNotificationAnnouncement] = None


@dataclass
class EventChannelChatSettingsUpdate(Broadcaster):
    emote_mode: bool = False
    follower_mode: bool = False
    follower_mode_duration_minutes: int = 0
    slow_mode: bool = False
    slow_mode_wait_time_seconds: int = 0
    subscriber_mode: bool = False
    unique_chat_mode: bool = False


@dataclass
class SuspiciousUserChatMessage(ChatMessage):
    message_id: str = ""


@dataclass
class EventChannelSuspiciousUserMessage(Broadcaster, User):
    low_trust_status: str = ""
    shared_ban_channel_ids: list[str] = field(default_factory=list)
    types: list[str] = field(default_factory=list)
    ban_evasion_evaluation: str = ""
    message: SuspiciousUserChatMessage = field(default_factory=SuspiciousUserChatMessage)


@dataclass
class EventChannelSuspiciousUserUpdate(Broadcaster, User, Moderator):
    low_trust_status: str = ""