"""Click CLI for running and operating the moderation bot."""

from __future__ import annotations

import asyncio
import json
from dataclasses import replace

import click
import uvicorn

from src.config import AppConfig, ConfigurationError
from src.logging_setup import configure_logging
from src.server.app import create_app
from src.telegram.client import TelegramBotClient
from src.telegram.models import BotInfo


def _load_config() -> AppConfig:
    try:
        return AppConfig.from_env()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e


async def _register(config: AppConfig) -> bool:
    client = TelegramBotClient(config.telegram.bot_token, api_base=config.telegram.api_base)
    try:
        return await client.register_webhook(
            config.telegram.domain, config.telegram.webhook_secret,
        )
    finally:
        await client.aclose()


async def _bot_info(config: AppConfig) -> BotInfo | None:
    client = TelegramBotClient(config.telegram.bot_token, api_base=config.telegram.api_base)
    try:
        return await client.get_bot_info()
    finally:
        await client.aclose()


@click.group()
def cli() -> None:
    """Telegram moderation bot: deletes join/leave service messages."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: HOST or 0.0.0.0).")
@click.option("--port", type=int, default=None, help="Listen port (default: PORT or 8080).")
@click.option("--no-register", is_flag=True, help="Skip webhook registration at startup.")
def serve(host: str | None, port: int | None, no_register: bool) -> None:
    """Run the webhook server."""
    config = _load_config()
    configure_logging(config.log_level)
    if no_register:
        config = replace(config, register_webhook=False)
    uvicorn.run(
        create_app(config),
        host=config.host if host is None else host,
        port=config.port if port is None else port,
        log_config=None,
    )


@cli.command("register-webhook")
def register_webhook() -> None:
    """Register https://DOMAIN_NAME/webhook with Telegram."""
    config = _load_config()
    configure_logging(config.log_level)
    if not asyncio.run(_register(config)):
        raise click.ClickException("Webhook registration failed")
    url = TelegramBotClient.webhook_url(config.telegram.domain)
    click.echo(f"Webhook registered: {url}")


@cli.command("bot-info")
def bot_info() -> None:
    """Print the bot identity reported by getMe."""
    config = _load_config()
    configure_logging(config.log_level)
    info = asyncio.run(_bot_info(config))
    if info is None:
        raise click.ClickException("Bot API connection failed")
    click.echo(info.model_dump_json(indent=2))


@cli.command("check-config")
def check_config() -> None:
    """Validate configuration from the environment."""
    config = _load_config()
    summary = {
        "telegram": config.telegram.masked(),
        "host": config.host,
        "port": config.port,
        "register_webhook": config.register_webhook,
        "log_level": config.log_level,
        "version_file": config.version_file,
    }
    click.echo(json.dumps(summary, indent=2))


if __name__ == "__main__":
    cli()
