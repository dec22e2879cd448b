"""Service configuration loaded once from environment variables."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from dataclasses import dataclass, field

_DOMAIN_PATTERN = re.compile(r"^[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}

DEFAULT_API_BASE = "https://api.telegram.org"
DEFAULT_PORT = 8080


class ConfigurationError(ValueError):
    """Raised when required configuration is missing or malformed."""


def _mask(value: str | None) -> str:
    if not value:
        return "<unset>"
    return f"***{value[-4:]}" if len(value) > 8 else "***"


@dataclass(frozen=True)
class TelegramConfig:
    """Bot token, public domain and webhook options."""

    bot_token: str = field(repr=False)
    domain: str
    webhook_secret: str | None = field(default=None, repr=False)
    api_base: str = DEFAULT_API_BASE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> TelegramConfig:
        env = os.environ if environ is None else environ
        bot_token = env.get("TELEGRAM_BOT_TOKEN", "").strip()
        domain = env.get("DOMAIN_NAME", "").strip()

        if not bot_token:
            raise ConfigurationError("TELEGRAM_BOT_TOKEN environment variable is required")
        if not domain:
            raise ConfigurationError("DOMAIN_NAME environment variable is required")

        return cls(
            bot_token=bot_token,
            domain=domain,
            webhook_secret=env.get("TELEGRAM_WEBHOOK_SECRET", "").strip() or None,
            api_base=env.get("TELEGRAM_API_BASE", "").strip() or DEFAULT_API_BASE,
        )

    def validate(self) -> bool:
        return (
            bool(self.bot_token.strip())
            and bool(self.domain.strip())
            and _DOMAIN_PATTERN.match(self.domain) is not None
        )

    def masked(self) -> dict[str, str]:
        """Summary safe to print or log."""
        return {
            "bot_token": _mask(self.bot_token),
            "domain": self.domain,
            "webhook_secret": _mask(self.webhook_secret),
            "api_base": self.api_base,
        }


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration: Telegram settings plus server options."""

    telegram: TelegramConfig
    host: str = "0.0.0.0"  # noqa: S104
    port: int = DEFAULT_PORT
    register_webhook: bool = True
    log_level: str = "INFO"
    version_file: str = "version.properties"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Read and validate configuration; raises ConfigurationError."""
        env = os.environ if environ is None else environ
        telegram = TelegramConfig.from_env(env)

        raw_port = env.get("PORT", "").strip()
        try:
            port = int(raw_port) if raw_port else DEFAULT_PORT
        except ValueError as exc:
            raise ConfigurationError(f"PORT must be an integer, got {raw_port!r}") from exc

        config = cls(
            telegram=telegram,
            host=env.get("HOST", "").strip() or "0.0.0.0",  # noqa: S104
            port=port,
            register_webhook=_parse_bool(env.get("REGISTER_WEBHOOK"), default=True),
            log_level=_parse_log_level(env.get("LOG_LEVEL")),
            version_file=env.get("VERSION_FILE", "").strip() or "version.properties",
        )
        if not telegram.validate():
            raise ConfigurationError(
                f"DOMAIN_NAME {telegram.domain!r} is not a valid hostname",
            )
        if not config.validate():
            raise ConfigurationError(f"PORT must be between 1 and 65535, got {port}")
        return config

    def validate(self) -> bool:
        return self.telegram.validate() and 1 <= self.port <= 65535


def _parse_bool(raw: str | None, *, default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Expected a boolean value, got {raw!r}")


def _parse_log_level(raw: str | None) -> str:
    level = (raw or "").strip().upper() or "INFO"
    if level not in logging.getLevelNamesMapping():
        raise ConfigurationError(f"LOG_LEVEL must be a logging level name, got {raw!r}")
    return level
