"""Twitch EventSub over WebSocket: typed messages and events, subscriptions and a client."""

__version__ = "0.1.0"

__all__ = ["chat", "client", "dispatch", "events", "subscriptions", "types"]