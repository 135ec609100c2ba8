# eventsub

A client for Twitch EventSub over WebSocket. It connects to the EventSub
WebSocket endpoint, decodes every session message into a typed model, turns
notification payloads into typed event objects and hands them to the callbacks
you register. It can also create subscriptions through the Helix HTTP API.

## Installation

```
pip install eventsub
```

With the test dependencies:

```
pip install "eventsub[test]"
```

## Modules

- `eventsub.types`: the session messages `WelcomeMessage`, `KeepAliveMessage`,
  `NotificationMessage`, `ReconnectMessage` and `RevokeMessage`, their parts
  (`MessageMetadata`, `PayloadSession`, `SubscriptionRequest`,
  `SubscriptionTransport`, `PayloadSubscription`, ...), and the `Model` base
  class that every payload class derives from.
- `eventsub.events`: event payloads such as `EventChannelFollow`,
  `EventStreamOnline`, `EventChannelRaid`, `EventChannelPollBegin` or
  `EventChannelCharityCampaignDonate`, and the shared pieces they are built
  from (`User`, `Broadcaster`, `Moderator`, `GoalAmount`, ...).
- `eventsub.chat`: chat, moderation and automod payloads such as
  `EventChannelChatMessage`, `EventChannelChatNotification`,
  `EventChannelModerate` and `EventAutomodMessageHold`.
- `eventsub.subscriptions`: the `EventSubscription` enum of subscription
  types, `SubscriptionMetadata` (default version and event class of a type),
  `sub_metadata()`, and `subscribe_event` with `SubscribeRequest` and
  `SubscribeResponse`.
- `eventsub.dispatch`: decoding without a connection: `MessageType`,
  `parse_base_message`, `decode_message` and `decode_event`.
- `eventsub.client`: `Client`, which owns the WebSocket connection, and the
  `NilOnWelcomeError` it raises.

## Example

```python
from eventsub.client import Client
from eventsub.subscriptions import EventSubscription, SubscribeRequest, subscribe_event

client = Client()


def welcome(message):
    subscribe_event(
        SubscribeRequest(
            session_id=message.payload.session.id,
            client_id="placeholder",
            access_token="token",
            event=EventSubscription.STREAM_ONLINE,
            condition={"broadcaster_user_id": "1234"},
        )
    )


def online(event, message):
    print(event.broadcaster_user_name, "went live at", event.started_at)


client.on_welcome(welcome)
client.on_event(EventSubscription.STREAM_ONLINE, online)
client.connect()
client.wait()
```

## The client

`Client(address)` defaults to the Twitch EventSub WebSocket URL; an
`http://` or `https://` address is dialled as `ws://` or `wss://`.

- `on_welcome(callback)` must be set before `connect()`, which otherwise
  raises `NilOnWelcomeError`. The welcome message carries the session id that
  subscriptions are created for.
- `on_event(subscription, callback)` registers a callback for one
  subscription type, given as an `EventSubscription` or its string value. The
  callback receives the decoded event and the `NotificationMessage` it came
  in. Passing `None` removes the callback; an unknown type raises
  `ValueError`.
- `on_raw_event(callback)` receives the event as compact JSON text, the
  message metadata and the subscription, before the event is decoded.
- `on_keep_alive`, `on_notification`, `on_reconnect`, `on_revoke` receive the
  matching session messages.
- `on_error(callback)` receives errors from decoding and handling messages.
  Without one, errors are printed as `ERROR: ...`.

Message and event callbacks each run in a new thread; the error and raw event
callbacks run on the reading thread.

`connect(on_read_error=None)` dials the server and starts a background reading
thread. A read failure other than a normal close goes to `on_read_error`, or to
the error callback when that is not given, and ends the reading. `wait()`
blocks until the reading thread stops, `close()` closes the connection with a
normal closure, and the `connected` property tells whether a session is open.
`Client` is also a context manager that closes on exit.

When a `session_reconnect` message arrives, the client sets `address` to the
reconnect URL, dials it, waits for its `session_welcome` message and then
swaps connections; reading carries on with the same callbacks.

## Subscriptions

`sub_metadata()` returns a copy of the table of `SubscriptionMetadata` for
every `EventSubscription`. `channel.update`, `channel.follow` and
`channel.moderate` default to version `"2"`, the rest to `"1"`. A non-empty
`version_override` on a `SubscribeRequest` takes precedence.

`subscribe_event(request, url=...)` posts the request with the `websocket`
transport method and returns the parsed `SubscribeResponse`. It raises
`ConnectionError` if the request cannot be sent, `httpx.HTTPStatusError` for
any status other than 202 (with the status and response body in the message),
and `ValueError` for a response that cannot be decoded.

## Decoding messages yourself

```python
from eventsub.dispatch import decode_event, decode_message

message = decode_message(raw_text)  # WelcomeMessage, NotificationMessage, ...
event = decode_event(message)       # the typed event of a NotificationMessage
```

`decode_message` raises `ValueError` for invalid JSON, an unknown message type
or a payload that does not fit its model; `decode_event` raises `ValueError`
for an unknown subscription type or an event that does not fit. Drop
entitlement grants decode into a list of `EventDropEntitlementGrant`.

## Models

Every payload class has `from_dict`, `from_json`, `to_dict` and `to_json`.
Missing keys and nulls leave a field at its zero value (empty string, `0`,
`False`, empty list, or a zero time of year 1 UTC); unknown keys are ignored;
keys match exactly or, failing that, case-insensitively. Optional fields are
`None` when absent and are left out when encoding. Times are read and written
as RFC 3339 strings.

`GoalAmount.amount()` applies the decimal places: a value of `550` with `2`
decimal places is `5.5`.

## What it does not do

Only the WebSocket transport is supported: there is no webhook or conduit
transport, no command-line tool, and no calls to list or delete subscriptions.
Tokens are not obtained or refreshed; `subscribe_event` sends whatever client
id and access token it is given.