"""Tests for the sendbot command line."""

import json
from pathlib import Path
from typing import Any
from urllib.parse import parse_qs

import httpx
import pytest
from click.testing import CliRunner

from sendbot.cli import main


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    path = tmp_path / "sendbot.toml"
    path.write_text(
        "[slack]\n"
        'teamname = "acme"\n'
        'botname = "deploybot"\n'
        'incoming_hook_token = "tok123"\n'
    )
    return path


@pytest.fixture()
def webhook(monkeypatch: pytest.MonkeyPatch) -> list[httpx.Request]:
    """Route every AsyncClient the CLI creates to a recording mock transport."""
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if b"fail" in request.content:
            return httpx.Response(404, text="no_service")
        return httpx.Response(200, text="ok")

    real_client = httpx.AsyncClient
    transport = httpx.MockTransport(handler)

    def make_client(**kwargs: Any) -> httpx.AsyncClient:
        return real_client(transport=transport, **kwargs)

    monkeypatch.setattr(httpx, "AsyncClient", make_client)
    return requests


def _payload(request: httpx.Request) -> dict[str, Any]:
    return json.loads(parse_qs(request.content.decode())["payload"][0])


class TestSay:
    def test_posts_message(self, config_file: Path, webhook: list[httpx.Request]) -> None:
        result = CliRunner().invoke(
            main,
            ["-c", str(config_file), "say", "hello", "--channel", "#ops", "--icon-emoji", ":robot_face:"],
        )

        assert result.exit_code == 0, result.output
        assert "Sent to #ops" in result.output
        assert len(webhook) == 1
        assert str(webhook[0].url).startswith("https://acme.slack.com/services/hooks/incoming-webhook")
        assert _payload(webhook[0]) == {
            "text": "hello",
            "channel": "#ops",
            "icon_emoji": ":robot_face:",
        }

    def test_default_channel(self, config_file: Path, webhook: list[httpx.Request]) -> None:
        result = CliRunner().invoke(main, ["-c", str(config_file), "say", "hello"])

        assert result.exit_code == 0, result.output
        assert _payload(webhook[0])["channel"] == "#general"

    def test_cli_overrides_team(self, config_file: Path, webhook: list[httpx.Request]) -> None:
        result = CliRunner().invoke(main, ["-c", str(config_file), "--team", "other", "say", "hi"])

        assert result.exit_code == 0, result.output
        assert webhook[0].url.host == "other.slack.com"

    def test_transport_failure(self, config_file: Path, webhook: list[httpx.Request]) -> None:
        result = CliRunner().invoke(main, ["-c", str(config_file), "say", "fail"])

        assert result.exit_code == 1
        assert "Webhook request failed" in result.output
        assert len(webhook) == 1

    def test_invalid_configuration(self, tmp_path: Path, webhook: list[httpx.Request]) -> None:
        path = tmp_path / "sendbot.toml"
        path.write_text('[slack]\nbotname = "deploybot"\nincoming_hook_token = "tok"\n')

        result = CliRunner().invoke(main, ["-c", str(path), "say", "hello"])

        assert result.exit_code == 1
        assert "Invalid configuration (teamname)" in result.output
        assert webhook == []

    def test_empty_text(self, config_file: Path, webhook: list[httpx.Request]) -> None:
        result = CliRunner().invoke(main, ["-c", str(config_file), "say", ""])

        assert result.exit_code == 1
        assert "Invalid message" in result.output
        assert webhook == []


class TestWebhookUri:
    def test_token_masked(self, config_file: Path) -> None:
        result = CliRunner().invoke(main, ["-c", str(config_file), "webhook-uri"])

        assert result.exit_code == 0, result.output
        assert "https://acme.slack.com/services/hooks/incoming-webhook?token=********" in result.output
        assert "tok123" not in result.output

    def test_show_token(self, config_file: Path) -> None:
        result = CliRunner().invoke(main, ["-c", str(config_file), "webhook-uri", "--show-token"])

        assert result.exit_code == 0, result.output
        assert "https://acme.slack.com/services/hooks/incoming-webhook?token=tok123" in result.output
