"""Event payloads delivered in notification messages."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from eventsub.types import ZERO_TIME, Model


@dataclass
class User(Model):
    user_id: str = ""
    user_login: str = ""
    user_name: str = ""


@dataclass
class Broadcaster(Model):
    broadcaster_user_id: str = ""
    broadcaster_user_login: str = ""
    broadcaster_user_name: str = ""


@dataclass
class Moderator(Model):
    moderator_user_id: str = ""
    moderator_user_login: str = ""
    moderator_user_name: str = ""


@dataclass
class Target(Model):
    target_user_id: str = ""
    target_user_login: str = ""
    target_user_name: str = ""


@dataclass
class SourceBroadcaster(Model):
    source_broadcaster_user_id: str = ""
    source_broadcaster_user_login: str = ""
    source_broadcaster_user_name: str = ""


@dataclass
class FromBroadcaster(Model):
    from_broadcaster_user_id: str = ""
    from_broadcaster_user_login: str = ""
    from_broadcaster_user_name: str = ""


@dataclass
class ToBroadcaster(Model):
    to_broadcaster_user_id: str = ""
    to_broadcaster_user_login: str = ""
    to_broadcaster_user_name: str = ""


@dataclass
class Chatter(Model):
    chatter_user_id: str = ""
    chatter_user_login: str = ""
    chatter_user_name: str = ""


@dataclass
class HostBroadcaster(Model):
    host_broadcaster_user_id: str = ""
    host_broadcaster_user_login: str = ""
    host_broadcaster_user_name: str = ""


@dataclass
class EventChannelUpdate(Broadcaster):
    title: str = ""
    language: str = ""
    category_id: str = ""
    category_name: str = ""
    content_classification_labels: list[str] = field(default_factory=list)


@dataclass
class EventChannelFollow(User, Broadcaster):
    followed_at: datetime = ZERO_TIME


@dataclass
class EventChannelSubscribe(User, Broadcaster):
    tier: str = ""
    is_gift: bool = False


@dataclass
class EventChannelSubscriptionEnd(User, Broadcaster):
    tier: str = ""
    is_gift: bool = False


@dataclass
class EventChannelSubscriptionGift(User, Broadcaster):
    total: int = 0
    tier: str = ""
    cumulative_total: int = 0
    is_anonymous: bool = False


@dataclass
class Emote(Model):
    id: str = ""
    begin: int = 0
    end: int = 0


@dataclass
class Message(Model):
    text: str = ""
    emotes: list[Emote] = field(default_factory=list)


@dataclass
class EventChannelSubscriptionMessage(User, Broadcaster):
    tier: str = ""
    message: Message = field(default_factory=Message)
    cumulative_months: int = 0
    streak_months: int = 0
    duration_months: int = 0


@dataclass
class EventChannelCheer(User, Broadcaster):
    message: str = ""
    bits: int = 0
    is_anonymous: bool = False


@dataclass
class EventChannelRaid(FromBroadcaster, ToBroadcaster):
    viewers: int = 0


@dataclass
class EventChannelBan(User, Broadcaster, Moderator):
    reason: str = ""
    banned_at: datetime = ZERO_TIME
    ends_at: Optional[datetime] = None
    is_permanent: bool = False


@dataclass
class EventChannelUnban(User, Broadcaster, Moderator):
    pass


@dataclass
class EventChannelModeratorAdd(Broadcaster, User):
    pass


@dataclass
class EventChannelModeratorRemove(Broadcaster, User):
    pass


@dataclass
class EventChannelVIPAdd(Broadcaster, User):
    pass


@dataclass
class EventChannelVIPRemove(Broadcaster, User):
    pass


@dataclass
class MaxChannelPointsPerStream(Model):
    is_enabled: bool = False
    value: int = 0


@dataclass
class Image(Model):
    url_1x: str = ""
    url_2x: str = ""
    url_4x: str = ""


@dataclass
class GlobalCooldown(Model):
    is_enabled: bool = False
    seconds: int = 0


@dataclass
class EventChannelChannelPointsCustomRewardAdd(Broadcaster):
    id: str = ""
    is_enabled: bool = False
    is_paused: bool = False
    is_in_stock: bool = False
    title: str = ""
    cost: int = 0
    prompt: str = ""
    is_user_input_required: bool = False
    should_redemptions_skip_request_queue: bool = False
    max_per_stream: MaxChannelPointsPerStream = field(default_factory=MaxChannelPointsPerStream)
    max_per_user_per_stream: MaxChannelPointsPerStream = field(
        default_factory=MaxChannelPointsPerStream
    )
    background_color: str = ""
    image: Optional[Image] = None
    default_image: Image = field(default_factory=Image)
    global_cooldown: GlobalCooldown = field(default_factory=GlobalCooldown)
    cooldown_expires_at: Optional[datetime] = None
    redemptions_redeemed_current_stream: Optional[int] = None


class EventChannelChannelPointsCustomRewardUpdate(EventChannelChannelPointsCustomRewardAdd):
    """A custom reward was updated."""


class EventChannelChannelPointsCustomRewardRemove(EventChannelChannelPointsCustomRewardAdd):
    """A custom reward was removed."""


@dataclass
class CustomChannelPointReward(Model):
    id: str = ""
    title: str = ""
    cost: int = 0
    prompt: str = ""


@dataclass
class EventChannelChannelPointsCustomRewardRedemptionAdd(Broadcaster, User):
    id: str = ""
    user_input: str = ""
    status: str = ""
    reward: CustomChannelPointReward = field(default_factory=CustomChannelPointReward)
    redeemed_at: datetime = ZERO_TIME


class EventChannelChannelPointsCustomRewardRedemptionUpdate(
    EventChannelChannelPointsCustomRewardRedemptionAdd
):
    """A custom reward redemption was updated."""


@dataclass
class AutomaticChannelPointRewardUnlockedEmote(Model):
    id: str = ""
    name: str = ""


@dataclass
class AutomaticChannelPointReward(Model):
    type: str = ""
    cost: int = 0
    unlocked_emote: Optional[AutomaticChannelPointRewardUnlockedEmote] = None


@dataclass
class EventChannelChannelPointsAutomaticRewardRedemptionAdd(Broadcaster, User):
    id: str = ""
    reward: AutomaticChannelPointReward = field(default_factory=AutomaticChannelPointReward)
    message: Message = field(default_factory=Message)
    user_input: str = ""
    redeemed_at: datetime = ZERO_TIME


@dataclass
class PollChoice(Model):
    id: str = ""
    title: str = ""
    bits_votes: int = 0
    channel_points_votes: int = 0
    votes: int = 0


@dataclass
class PollVoting(Model):
    is_enabled: bool = False
    amount_per_vote: int = 0


@dataclass
class EventChannelPollBegin(Broadcaster):
    id: str = ""
    title: str = ""
    choices: list[PollChoice] = field(default_factory=list)
    bits_voting: PollVoting = field(default_factory=PollVoting)
    channel_points_voting: PollVoting = field(default_factory=PollVoting)
    started_at: datetime = ZERO_TIME
    ends_at: datetime = ZERO_TIME


class EventChannelPollProgress(EventChannelPollBegin):
    """Votes were cast in a running poll."""


@dataclass
class EventChannelPollEnd(EventChannelPollBegin):
    status: str = ""


@dataclass
class TopPredictor(User):
    channel_points_won: Optional[int] = None
    channel_points_used: int = 0


@dataclass
class PredictionOutcome(Model):
    id: str = ""
    title: str = ""
    color: str = ""
    users: int = 0
    channel_points: int = 0
    top_predictors: list[TopPredictor] = field(default_factory=list)


@dataclass
class EventChannelPredictionBegin(Broadcaster):
    id: str = ""
    title: str = ""
    outcomes: list[PredictionOutcome] = field(default_factory=list)
    started_at: datetime = ZERO_TIME
    locks_at: datetime = ZERO_TIME


class EventChannelPredictionProgress(EventChannelPredictionBegin):
    """Predictions were made in a running prediction."""


class EventChannelPredictionLock(EventChannelPredictionBegin):
    """A prediction was locked."""


@dataclass
class EventChannelPredictionEnd(Broadcaster):
    id: str = ""
    title: str = ""
    winning_outcome_id: str = ""
    outcomes: list[PredictionOutcome] = field(default_factory=list)
    status: str = ""
    started_at: datetime = ZERO_TIME
    ended_at: datetime = ZERO_TIME


@dataclass
class DropEntitlement(User):
    organization_id: str = ""
    category_id: str = ""
    category_name: str = ""
    campaign_id: str = ""
    entitlement_id: str = ""
    benefit_id: str = ""
    created_at: datetime = ZERO_TIME


@dataclass
class EventDropEntitlementGrant(Model):
    id: str = ""
    data: DropEntitlement = field(default_factory=DropEntitlement)


@dataclass
class ExtensionProduct(Model):
    name: str = ""
    bits: int = 0
    sku: str = ""
    in_development: bool = False


@dataclass
class EventExtensionBitsTransactionCreate(Broadcaster, User):
    id: str = ""
    extension_client_id: str = ""
    product: ExtensionProduct = field(default_factory=ExtensionProduct)


@dataclass
class EventChannelGoalBegin(Broadcaster):
    id: str = ""
    type: str = ""
    description: str = ""
    current_amount: int = 0
    target_amount: int = 0
    started_at: datetime = ZERO_TIME


class EventChannelGoalProgress(EventChannelGoalBegin):
    """A creator goal made progress."""


@dataclass
class EventChannelGoalEnd(EventChannelGoalBegin):
    is_achieved: bool = False
    ended_at: datetime = ZERO_TIME


@dataclass
class HypeTrainContribution(User):
    type: str = ""
    total: int = 0


@dataclass
class EventChannelHypeTrainBegin(Broadcaster):
    id: str = ""
    total: int = 0
    progress: int = 0
    goal: int = 0
    top_contributions: list[HypeTrainContribution] = field(default_factory=list)
    last_contribution: HypeTrainContribution = field(default_factory=HypeTrainContribution)
    level: int = 0
    started_at: datetime = ZERO_TIME
    expires_at: datetime = ZERO_TIME


@dataclass
class EventChannelHypeTrainProgress(EventChannelHypeTrainBegin):
    level: int = 0


@dataclass
class EventChannelHypeTrainEnd(Broadcaster):
    id: str = ""
    level: int = 0
    total: int = 0
    top_contributions: list[HypeTrainContribution] = field(default_factory=list)
    started_at: datetime = ZERO_TIME
    expires_at: datetime = ZERO_TIME
    cooldown_ends_at: datetime = ZERO_TIME


@dataclass
class EventStreamOnline(Broadcaster):
    id: str = ""
    type: str = ""
    started_at: datetime = ZERO_TIME


class EventStreamOffline(Broadcaster):
    """A stream went offline."""


@dataclass
class EventUserAuthorizationGrant(User):
    client_id: str = ""


class EventUserAuthorizationRevoke(EventUserAuthorizationGrant):
    """A user revoked authorization for a client."""


@dataclass
class EventUserUpdate(User):
    email: str = ""
    email_verified: bool = False
    description: str = ""


@dataclass
class GoalAmount(Model):
    value: int = 0
    decimal_places: int = 0
    currency: str = ""

    def amount(self) -> float:
        """The monetary value with the decimal places applied."""
        places = self.decimal_places
        try:
            scale = 10.0**places if places >= 0 else 1 / 10.0 ** (-places)
        except OverflowError:
            scale = float("inf") if places > 0 else 0.0
        return self.value / scale


@dataclass
class BaseCharity(Broadcaster, User):
    campaign_id: str = ""
    charity_name: str = ""
    charity_description: str = ""
    charity_logo: str = ""
    charity_website: str = ""


@dataclass
class EventChannelCharityCampaignDonate(BaseCharity):
    amount: GoalAmount = field(default_factory=GoalAmount)


@dataclass
class EventChannelCharityCampaignProgress(BaseCharity):
    current_amount: GoalAmount = field(default_factory=GoalAmount)
    target_amount: GoalAmount = field(default_factory=GoalAmount)


@dataclass
class EventChannelCharityCampaignStart(EventChannelCharityCampaignProgress):
    started_at: datetime = ZERO_TIME


@dataclass
class EventChannelCharityCampaignStop(EventChannelCharityCampaignProgress):
    stopped_at: datetime = ZERO_TIME


@dataclass
class EventChannelShieldModeBegin(Broadcaster, Moderator):
    started_at: datetime = ZERO_TIME


@dataclass
class EventChannelShieldModeEnd(Broadcaster, Moderator):
    stopped_at: datetime = ZERO_TIME


@dataclass
class EventChannelShoutoutCreate(Broadcaster, Moderator, ToBroadcaster):
    viewer_count: int = 0
    started_at: datetime = ZERO_TIME
    cooldown_ends_at: datetime = ZERO_TIME
    target_cooldown_ends_at: datetime = ZERO_TIME


@dataclass
class EventChannelShoutoutReceive(Broadcaster, FromBroadcaster):
    viewer_count: int = 0
    started_at: datetime = ZERO_TIME


@dataclass
class EventChannelAdBreakBegin(Broadcaster):
    duration_seconds: int = 0
    started_at: datetime = ZERO_TIME
    is_automatic: bool = False
    requester_user_id: str = ""
    requester_user_login: str = ""
    requester_user_name: str = ""


@dataclass
class EventChannelWarningAcknowledge(Broadcaster, User):
    pass


@dataclass
class EventChannelWarningSend(Broadcaster, Moderator, User):
    reason: str = ""
    chat_rules_cited: list[str] = field(default_factory=list)


@dataclass
class EventChannelUnbanRequestCreate(Broadcaster, User):
    id: str = ""
    text: str = ""
    created_at: datetime = ZERO_TIME


@dataclass
class EventChannelUnbanRequestResolve(Broadcaster, Moderator, User):
    id: str = ""
    resolution_text: str = ""
    status: str = ""


@dataclass
class EventChannelSharedChatBegin(Broadcaster, HostBroadcaster):
    session_id: str = ""
    participants: list[Broadcaster] = field(default_factory=list)


class EventChannelSharedChatUpdate(EventChannelSharedChatBegin):
    """The participants of a shared chat session changed."""


@dataclass
class EventChannelSharedChatEnd(Broadcaster, HostBroadcaster):
    session_id: str = ""


@dataclass
class UserWhisper(Model):
    text: str = ""


@dataclass
class EventUserWhisperMessage(Model):
    from_user_id: str = ""
    from_user_login: str = ""
    from_user_name: str = ""
    to_user_id: str = ""
    to_user_login: str = ""
    to_user_name: str = ""
    whisper_id: str = ""
    whisper: UserWhisper = field(default_factory=UserWhisper)


@dataclass
class ConduitTransport(Model):
    method: str = ""
    session_id: str = ""
    connected_at: Optional[datetime] = None
    disconnected_at: Optional[datetime] = None


@dataclass
class EventConduitShardDisabled(Model):
    conduit_id: str = ""
    shard_id: str = ""
    status: str = ""
    transport: ConduitTransport = field(default_factory=ConduitTransport)