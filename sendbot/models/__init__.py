"""Data models for sendbot."""

from sendbot.models.messages import (
    DEFAULT_CHANNEL,
    MessageLike,
    NotifierConfig,
    OutboundMessage,
    normalize_message,
)

__all__ = [
    "DEFAULT_CHANNEL",
    "MessageLike",
    "NotifierConfig",
    "OutboundMessage",
    "normalize_message",
]
