"""Command-line interface for sendbot."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import httpx
from rich.console import Console

from sendbot.config import find_config_file, load_config, merge_cli_options
from sendbot.errors import InvalidConfiguration, InvalidMessage, TransportError
from sendbot.models import DEFAULT_CHANNEL, OutboundMessage
from sendbot.notifiers import SendBot

console = Console()


def _build_bot(ctx: click.Context) -> SendBot:
    """Create the notifier from the loaded config, exiting on bad settings."""
    cfg = ctx.obj["config"]
    try:
        return SendBot(cfg.to_options(), timeout=cfg.http_timeout)
    except InvalidConfiguration as e:
        console.print(f"[red]Invalid configuration ({e.field}): {e.message}[/red]")
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to config file (default: searches standard locations)",
)
@click.option("--team", type=str, default=None, help="Slack team name (sub domain)")
@click.option("--bot", type=str, default=None, help="Bot name")
@click.option("--token", type=str, default=None, help="Incoming webhook token")
@click.option("--timeout", type=float, default=None, help="HTTP timeout in seconds")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(
    ctx: click.Context,
    config: Optional[Path],
    team: Optional[str],
    bot: Optional[str],
    token: Optional[str],
    timeout: Optional[float],
    verbose: bool,
) -> None:
    """sendbot - post messages through a Slack incoming webhook."""
    ctx.ensure_object(dict)

    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    cfg = load_config(config)
    merge_cli_options(cfg, team=team, bot=bot, token=token, timeout=timeout)
    ctx.obj["config"] = cfg

    config_path = config or find_config_file()
    if config_path:
        ctx.obj["config_path"] = config_path


@main.command()
@click.argument("text")
@click.option("--channel", type=str, default=None, help="Channel to post to (default: #general)")
@click.option("--username", type=str, default=None, help="Display name override")
@click.option("--icon-emoji", type=str, default=None, help="Icon emoji, e.g. :robot_face:")
@click.option("--icon-url", type=str, default=None, help="Icon image URL")
@click.pass_context
def say(
    ctx: click.Context,
    text: str,
    channel: Optional[str],
    username: Optional[str],
    icon_emoji: Optional[str],
    icon_url: Optional[str],
) -> None:
    """Post TEXT to the webhook."""
    bot = _build_bot(ctx)
    message = OutboundMessage(
        text=text,
        channel=channel,
        username=username,
        icon_emoji=icon_emoji,
        icon_url=icon_url,
    )

    async def run() -> httpx.Response:
        async with bot:
            return await bot.post(message)

    try:
        resp = asyncio.run(run())
    except InvalidMessage as e:
        console.print(f"[red]Invalid message: {e.message}[/red]")
        sys.exit(1)
    except TransportError as e:
        console.print(f"[red]Webhook request failed: {e}[/red]")
        sys.exit(1)

    target = channel or DEFAULT_CHANNEL
    console.print(f"[green]Sent to {target} ({resp.status_code})[/green]")


@main.command("webhook-uri")
@click.option("--show-token", is_flag=True, help="Print the token instead of masking it")
@click.pass_context
def webhook_uri(ctx: click.Context, show_token: bool) -> None:
    """Show the incoming webhook URI for the configured team."""
    bot = _build_bot(ctx)
    uri = bot.incoming_hook_uri
    if not show_token:
        base, _, _ = uri.partition("?")
        uri = f"{base}?token=********"

    if "config_path" in ctx.obj:
        console.print(f"[dim]Config: {ctx.obj['config_path']}[/dim]")
    console.print(uri, soft_wrap=True, highlight=False, markup=False)


if __name__ == "__main__":
    main()
