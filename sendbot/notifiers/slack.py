"""Slack incoming-webhook notifier."""

import asyncio
import json
import logging
from collections.abc import Callable, Mapping
from typing import Any, Optional, Union

import httpx

from sendbot.errors import InvalidMessage
from sendbot.models import MessageLike, NotifierConfig, normalize_message

# Called once per send with (error, response); exactly one of them is None.
# A cancelled send reports an asyncio.CancelledError.
SendCallback = Callable[[Optional[BaseException], Optional[httpx.Response]], None]


class SendBot:
    """Async notifier that posts messages to a Slack incoming webhook.

    Each call to :meth:`send` validates the message right away and schedules
    a single POST on the running event loop. Transport failures never raise
    from ``send``; they surface through the returned task and the optional
    callback.
    """

    def __init__(
        self,
        config: Union[NotifierConfig, Mapping[str, Any]],
        *,
        client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
        timeout: float = 10.0,
    ) -> None:
        if not isinstance(config, NotifierConfig):
            config = NotifierConfig.from_options(config)
        self.config = config
        self.timeout = timeout
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._client = client
        self._owns_client = client is None
        self._pending: set[asyncio.Task] = set()

    @property
    def team_name(self) -> str:
        return self.config.team_name

    @property
    def bot_name(self) -> str:
        return self.config.bot_name

    @property
    def channel(self) -> str:
        return self.config.default_channel

    @property
    def incoming_hook_uri(self) -> str:
        """Webhook URI derived from the team name and token."""
        return self.config.incoming_hook_uri()

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        return self._client

    def send(
        self,
        message: MessageLike,
        callback: Optional[SendCallback] = None,
    ) -> "asyncio.Task[httpx.Response]":
        """Post a message to the webhook.

        Args:
            message: Message text, a mapping with at least ``text``, or an
                OutboundMessage. Messages without a channel go to #general.
            callback: Optional ``callback(error, response)`` invoked exactly
                once when the POST completes, fails or is cancelled.

        Returns:
            Task resolving to the httpx response, or raising the transport
            error if the POST failed or returned a non-2xx status.

        Raises:
            InvalidMessage: If the message fails validation. Nothing is sent.
            RuntimeError: If called outside a running asyncio event loop.
        """
        msg = normalize_message(message)
        try:
            form = {"payload": json.dumps(msg)}
        except (TypeError, ValueError) as e:
            raise InvalidMessage(f"Message is not JSON serializable: {e}") from e

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError as e:
            raise RuntimeError("SendBot.send() must be called from a running event loop") from e

        task = loop.create_task(self._post(self.incoming_hook_uri, form))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        if callback is not None:
            task.add_done_callback(lambda t: self._complete(t, callback))

        self._log.debug(f"Send a message: {msg}")
        return task

    say = send

    async def post(self, message: MessageLike) -> httpx.Response:
        """Send a message and wait for the webhook response."""
        return await self.send(message)

    async def _post(self, url: str, form: dict[str, str]) -> httpx.Response:
        client = self._get_client()
        resp = await client.post(url, data=form)
        resp.raise_for_status()
        return resp

    def _complete(self, task: "asyncio.Task[httpx.Response]", callback: SendCallback) -> None:
        if task.cancelled():
            callback(asyncio.CancelledError(), None)
            return
        error = task.exception()
        if error is None:
            callback(None, task.result())
        else:
            callback(error, None)

    def start(self) -> None:
        """No-op; a webhook bot has no connection to open."""

    def stop(self) -> None:
        """No-op; see :meth:`close` for releasing the HTTP client."""

    async def close(self) -> None:
        """Wait for in-flight sends, then close the HTTP client if we own it."""
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        if self._owns_client and self._client and not self._client.is_closed:
            await self._client.aclose()

    async def __aenter__(self) -> "SendBot":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
