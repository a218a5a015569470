"""Configuration loading for sendbot.

Loads webhook settings from a TOML config file with CLI override support.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import tomli

from sendbot.models import DEFAULT_CHANNEL

logger = logging.getLogger(__name__)


def get_config_search_paths() -> list[Path]:
    """Get list of paths to search for config file."""
    return [
        Path("sendbot.toml"),  # Current directory
        Path.home() / ".config" / "sendbot" / "sendbot.toml",
        Path("/etc/sendbot/sendbot.toml"),
    ]


def find_config_file() -> Optional[Path]:
    """Find the first existing config file."""
    for path in get_config_search_paths():
        if path.exists():
            return path
    return None


@dataclass
class Config:
    """Loaded configuration with all sections."""

    # Slack
    teamname: Optional[str] = None
    botname: Optional[str] = None
    incoming_hook_token: Optional[str] = None
    channel: str = DEFAULT_CHANNEL

    # HTTP
    http_timeout: float = 10.0

    def to_options(self) -> dict[str, Any]:
        """Options mapping accepted by SendBot / NotifierConfig.from_options."""
        return {
            "teamname": self.teamname,
            "botname": self.botname,
            "incomingHookToken": self.incoming_hook_token,
            "channel": self.channel,
        }


def load_config(config_path: Optional[Path] = None) -> Config:
    """Load configuration from TOML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Config object with loaded values
    """
    config = Config()

    if config_path is None:
        config_path = find_config_file()

    if config_path is None or not config_path.exists():
        logger.debug("No config file found, using defaults")
        return config

    logger.info(f"Loading config from {config_path}")

    try:
        with open(config_path, "rb") as f:
            data = tomli.load(f)
    except (OSError, tomli.TOMLDecodeError) as e:
        logger.warning(f"Failed to load config file: {e}")
        return config

    # Slack section
    if "slack" in data:
        slack = data["slack"]
        if "teamname" in slack:
            config.teamname = slack["teamname"]
        if "botname" in slack:
            config.botname = slack["botname"]
        if "incoming_hook_token" in slack:
            config.incoming_hook_token = slack["incoming_hook_token"]
        if "channel" in slack:
            config.channel = slack["channel"]

    # HTTP section
    if "http" in data:
        http = data["http"]
        if "timeout" in http:
            try:
                config.http_timeout = float(http["timeout"])
            except (TypeError, ValueError):
                logger.warning(
                    f"Invalid http timeout {http['timeout']!r}, using {config.http_timeout}"
                )

    return config


def merge_cli_options(config: Config, **cli_options: Any) -> Config:
    """Merge CLI options into config (CLI takes precedence).

    Args:
        config: Base config from file
        **cli_options: CLI option overrides (None values are ignored)

    Returns:
        Config with CLI overrides applied
    """
    mappings = {
        "team": "teamname",
        "bot": "botname",
        "token": "incoming_hook_token",
        "timeout": "http_timeout",
    }

    for cli_name, config_name in mappings.items():
        value = cli_options.get(cli_name)
        # Only override if CLI value is meaningful
        if value is not None and value != "":
            setattr(config, config_name, value)

    return config
