"""Notifiers package for posting messages to external services."""

from sendbot.notifiers.slack import SendBot, SendCallback

__all__ = ["SendBot", "SendCallback"]
