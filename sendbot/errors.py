"""Error types raised by sendbot."""

from typing import Any, Optional

import httpx

# Failures of the webhook POST itself (connection errors, timeouts, non-2xx
# responses) are httpx's own exceptions, handed to the caller untouched.
TransportError = httpx.HTTPError


class SendBotError(Exception):
    """Base exception for sendbot."""

    def __init__(
        self,
        message: str,
        code: str = "SENDBOT_ERROR",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)


class InvalidConfiguration(SendBotError):
    """Raised when notifier options are missing or mistyped."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message, code="INVALID_CONFIGURATION", details={"field": field})


class InvalidMessage(SendBotError):
    """Raised when an outbound message fails shape validation."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None) -> None:
        super().__init__(message, code="INVALID_MESSAGE", details=details)
