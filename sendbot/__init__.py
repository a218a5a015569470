"""sendbot - post chat messages through a Slack incoming webhook."""

import logging

from sendbot.errors import InvalidConfiguration, InvalidMessage, SendBotError, TransportError
from sendbot.models import DEFAULT_CHANNEL, NotifierConfig, OutboundMessage
from sendbot.notifiers import SendBot

__version__ = "0.1.0"

# Silent unless the host application configures logging
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_CHANNEL",
    "InvalidConfiguration",
    "InvalidMessage",
    "NotifierConfig",
    "OutboundMessage",
    "SendBot",
    "SendBotError",
    "TransportError",
]
