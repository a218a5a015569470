"""Notifier configuration and outbound message records."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import quote, urlencode

from sendbot.errors import InvalidConfiguration, InvalidMessage

# Channel used when neither the caller nor the message names one
DEFAULT_CHANNEL = "#general"

WEBHOOK_DOMAIN = "slack.com"
WEBHOOK_PATH = "/services/hooks/incoming-webhook"


def _require_string(
    field: str,
    value: Any,
    label: Optional[str] = None,
    redact: bool = False,
) -> str:
    """Return value if it is a non-empty string, else raise InvalidConfiguration.

    With ``redact`` the error names only the type of a bad value.
    """
    if not isinstance(value, str) or not value:
        shown = type(value).__name__ if redact else repr(value)
        raise InvalidConfiguration(field, f"Invalid {label or field}: {shown}")
    return value


@dataclass(frozen=True)
class NotifierConfig:
    """Immutable identity and credentials of a webhook bot."""

    team_name: str
    bot_name: str
    webhook_token: str
    default_channel: str = DEFAULT_CHANNEL

    def __post_init__(self) -> None:
        _require_string("teamname", self.team_name)
        _require_string("botname", self.bot_name)
        _require_string(
            "incomingHookToken", self.webhook_token, "incoming webhook token", redact=True
        )
        _require_string("channel", self.default_channel)

    @classmethod
    def from_options(cls, options: Any) -> "NotifierConfig":
        """Build a config from an options mapping.

        Recognized keys are ``teamname``, ``botname``, ``incomingHookToken``
        (or ``webhookToken``) and the optional ``channel``. Fields are checked
        in that order and the first bad one is reported.

        Raises:
            InvalidConfiguration: If options is not a mapping or a field is
                missing, empty or not a string.
        """
        if not isinstance(options, Mapping):
            raise InvalidConfiguration("options", f"Invalid options: {options!r}")

        team_name = _require_string("teamname", options.get("teamname"))
        bot_name = _require_string("botname", options.get("botname"))

        token = options.get("incomingHookToken", options.get("webhookToken"))
        webhook_token = _require_string(
            "incomingHookToken", token, "incoming webhook token", redact=True
        )

        channel = options.get("channel")
        if channel is not None and not isinstance(channel, str):
            raise InvalidConfiguration("channel", f"Invalid channel: {channel!r}")

        return cls(
            team_name=team_name,
            bot_name=bot_name,
            webhook_token=webhook_token,
            default_channel=channel or DEFAULT_CHANNEL,
        )

    def incoming_hook_uri(self) -> str:
        """Incoming webhook endpoint for this team."""
        host = f"{quote(self.team_name, safe='')}.{WEBHOOK_DOMAIN}"
        query = urlencode({"token": self.webhook_token}, quote_via=quote)
        return f"https://{host}{WEBHOOK_PATH}?{query}"


@dataclass
class OutboundMessage:
    """A single chat message to post through the webhook."""

    text: str
    channel: Optional[str] = None
    username: Optional[str] = None  # display name override
    icon_emoji: Optional[str] = None
    icon_url: Optional[str] = None

    def to_payload(self) -> dict[str, Any]:
        """Message record with unset optional fields left out."""
        payload: dict[str, Any] = {"text": self.text}
        for key in ("channel", "username", "icon_emoji", "icon_url"):
            value = getattr(self, key)
            if value is not None:
                payload[key] = value
        return payload


MessageLike = Union[str, OutboundMessage, Mapping[str, Any]]


def normalize_message(message: MessageLike) -> dict[str, Any]:
    """Turn a send argument into the record that gets posted.

    Strings become ``{"text": message}``. Mappings are copied, so the caller's
    object is left alone and unknown keys pass through. A record without a
    ``channel`` key is sent to ``#general``; the notifier's configured default
    channel does not apply here.

    Raises:
        InvalidMessage: If the input is not message-shaped or has no
            non-empty string ``text``.
    """
    if isinstance(message, str):
        record: dict[str, Any] = {"text": message}
    elif isinstance(message, OutboundMessage):
        record = message.to_payload()
    elif isinstance(message, Mapping):
        record = dict(message)
    else:
        raise InvalidMessage(
            f"Invalid message: {message!r}",
            details={"type": type(message).__name__},
        )

    if "channel" not in record:
        record["channel"] = DEFAULT_CHANNEL

    text = record.get("text")
    if not isinstance(text, str) or not text:
        raise InvalidMessage(
            f"Invalid message text: {text!r}",
            details={"field": "text"},
        )

    return record
