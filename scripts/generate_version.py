#!/usr/bin/env python3
"""Generate version.properties with build and git metadata.

The file is served by GET /version.

Version selection:
    - a git tag like v1.2.3 (or 1.2.3) on HEAD wins, without the "v"
    - otherwise "<base>-<short sha>" in CI (GITHUB_ACTIONS set)
    - otherwise "<base>-SNAPSHOT"

Usage:
    python scripts/generate_version.py [--output version.properties] [--base-version 0.0.1]
"""

from __future__ import annotations

import argparse
import os
import re
import subprocess
import sys
from datetime import UTC, datetime
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

APP_NAME = "Telegram Admin Bot"
APP_GROUP = "su.dunkan"
BASE_VERSION = "0.0.1"

_SEMVER_TAG = re.compile(r"^v?\d+\.\d+\.\d+.*")


def _git(*args: str) -> str:
    """Run a git command; any failure yields "unknown"."""
    try:
        result = subprocess.run(  # noqa: S603
            ["git", *args], capture_output=True, text=True, cwd=PROJECT_ROOT,
        )
    except OSError:
        return "unknown"
    if result.returncode != 0:
        return "unknown"
    return result.stdout.strip() or "unknown"


def resolve_version(base: str, tag: str, short_sha: str, is_ci: bool) -> str:
    if _SEMVER_TAG.match(tag):
        return tag.removeprefix("v")
    if is_ci:
        return f"{base}-{short_sha}"
    return f"{base}-SNAPSHOT"


def build_properties(base: str, is_ci: bool) -> dict[str, str]:
    commit = _git("rev-parse", "HEAD")
    short_sha = _git("rev-parse", "--short", "HEAD")
    branch = _git("rev-parse", "--abbrev-ref", "HEAD")
    tag = _git("describe", "--tags", "--exact-match")
    return {
        "app.name": APP_NAME,
        "app.group": APP_GROUP,
        "app.version": resolve_version(base, tag, short_sha, is_ci),
        "build.timestamp": datetime.now(UTC).isoformat(),
        "git.commit": commit,
        "git.commit.short": short_sha,
        "git.branch": branch,
        "git.tag": tag if _SEMVER_TAG.match(tag) else "none",
        "build.environment": "ci" if is_ci else "local",
    }


def render(props: dict[str, str]) -> str:
    lines = [
        "# Application Version Information",
        "# Generated at build time",
        "",
    ]
    lines += [f"{key}={value}" for key, value in props.items()]
    return "\n".join(lines) + "\n"


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument(
        "--output", default=str(PROJECT_ROOT / "version.properties"),
        help="Where to write the properties file.",
    )
    parser.add_argument("--base-version", default=BASE_VERSION)
    args = parser.parse_args(argv)

    is_ci = os.environ.get("GITHUB_ACTIONS") is not None
    props = build_properties(args.base_version, is_ci)
    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render(props), encoding="utf-8")
    print(f"Wrote {output} (version {props['app.version']})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
