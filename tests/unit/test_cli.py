"""Tests for the tg-admin CLI."""

from __future__ import annotations

import json
from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from src.cli import cli
from tests.conftest import make_bot_info

ENV = {
    "TELEGRAM_BOT_TOKEN": "123456:SECRETTOKEN",
    "DOMAIN_NAME": "bot.example.com",
}


def test_check_config_prints_masked_summary() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["check-config"], env=ENV)
    assert result.exit_code == 0
    summary = json.loads(result.output)
    assert summary["telegram"]["domain"] == "bot.example.com"
    assert summary["telegram"]["bot_token"] == "***OKEN"
    assert summary["port"] == 8080
    assert "SECRETTOKEN" not in result.output


def test_check_config_reports_missing_token() -> None:
    runner = CliRunner()
    result = runner.invoke(cli, ["check-config"], env={"TELEGRAM_BOT_TOKEN": "", "DOMAIN_NAME": "x.com"})
    assert result.exit_code == 1
    assert "TELEGRAM_BOT_TOKEN" in result.output


def test_register_webhook_success() -> None:
    runner = CliRunner()
    with patch("src.cli._register", new=AsyncMock(return_value=True)):
        result = runner.invoke(cli, ["register-webhook"], env=ENV)
    assert result.exit_code == 0
    assert "https://bot.example.com/webhook" in result.output


def test_register_webhook_failure_exits_nonzero() -> None:
    runner = CliRunner()
    with patch("src.cli._register", new=AsyncMock(return_value=False)):
        result = runner.invoke(cli, ["register-webhook"], env=ENV)
    assert result.exit_code == 1
    assert "Webhook registration failed" in result.output


def test_bot_info_prints_identity() -> None:
    runner = CliRunner()
    with patch("src.cli._bot_info", new=AsyncMock(return_value=make_bot_info())):
        result = runner.invoke(cli, ["bot-info"], env=ENV)
    assert result.exit_code == 0
    assert json.loads(result.output)["username"] == "moderator_bot"


def test_bot_info_failure_exits_nonzero() -> None:
    runner = CliRunner()
    with patch("src.cli._bot_info", new=AsyncMock(return_value=None)):
        result = runner.invoke(cli, ["bot-info"], env=ENV)
    assert result.exit_code == 1
    assert "Bot API connection failed" in result.output


def test_serve_runs_uvicorn_with_overrides() -> None:
    runner = CliRunner()
    with patch("src.cli.uvicorn.run") as mock_run, \
         patch("src.cli.configure_logging"), \
         patch("src.cli.create_app") as mock_create_app:
        result = runner.invoke(
            cli, ["serve", "--port", "9090", "--no-register"], env={**ENV, "HOST": "127.0.0.1"},
        )
    assert result.exit_code == 0, result.output
    config = mock_create_app.call_args[0][0]
    assert config.register_webhook is False
    mock_run.assert_called_once_with(
        mock_create_app.return_value, host="127.0.0.1", port=9090, log_config=None,
    )


def test_unknown_log_level_rejected_before_running() -> None:
    runner = CliRunner()
    with patch("src.cli._register", new=AsyncMock(return_value=True)) as mock_register:
        result = runner.invoke(cli, ["register-webhook"], env={**ENV, "LOG_LEVEL": "VERBOSE"})
    assert result.exit_code == 1
    assert "LOG_LEVEL" in result.output
    mock_register.assert_not_called()


def test_serve_passes_explicit_port_zero() -> None:
    runner = CliRunner()
    with patch("src.cli.uvicorn.run") as mock_run, \
         patch("src.cli.configure_logging"), \
         patch("src.cli.create_app"):
        result = runner.invoke(cli, ["serve", "--port", "0"], env={**ENV, "PORT": "9000"})
    assert result.exit_code == 0, result.output
    assert mock_run.call_args.kwargs["port"] == 0
