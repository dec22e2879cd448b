"""Build metadata for the /version and / endpoints."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from pathlib import Path

APP_NAME = "Telegram Admin Bot"
SERVICE_NAME = "Telegram Moderation Bot"
DISTRIBUTION = "tg-admin"


def service_version() -> str:
    try:
        return version(DISTRIBUTION)
    except PackageNotFoundError:
        return "unknown"


def parse_properties(text: str) -> dict[str, str]:
    """Parse Java-style ``key=value`` / ``key: value`` properties.

    Blank lines and lines starting with ``#`` or ``!`` are skipped. Lines
    without a separator map the key to an empty string.
    """
    props: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", "!")):
            continue
        positions = [p for p in (line.find("="), line.find(":")) if p != -1]
        if not positions:
            props[line] = ""
            continue
        sep = min(positions)
        props[line[:sep].strip()] = line[sep + 1:].strip()
    return props


def load_build_info(path: str | Path) -> dict[str, str] | None:
    """Return build metadata from ``path``, or None if the file is absent."""
    file = Path(path)
    if not file.is_file():
        return None
    return parse_properties(file.read_text(encoding="utf-8"))


def fallback_build_info() -> dict[str, str]:
    return {
        "app.name": APP_NAME,
        "app.version": service_version(),
        "error": "Version information not available",
    }
