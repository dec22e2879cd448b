"""Tests for the version.properties generator script."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import sys
sys.path.insert(0, str(Path(__file__).resolve().parent.parent.parent / "scripts"))

from generate_version import build_properties, main, render, resolve_version  # noqa: E402
from src.version import parse_properties


def test_semver_tag_wins():
    assert resolve_version("0.0.1", "v1.4.0", "abc1234", is_ci=True) == "1.4.0"
    assert resolve_version("0.0.1", "2.0.0-rc1", "abc1234", is_ci=False) == "2.0.0-rc1"


def test_ci_without_tag_uses_short_sha():
    assert resolve_version("0.0.1", "unknown", "abc1234", is_ci=True) == "0.0.1-abc1234"


def test_local_without_tag_is_snapshot():
    assert resolve_version("0.0.1", "unknown", "abc1234", is_ci=False) == "0.0.1-SNAPSHOT"


def test_build_properties_without_git():
    with patch("generate_version._git", return_value="unknown"):
        props = build_properties("0.0.1", is_ci=False)
    assert props["app.version"] == "0.0.1-SNAPSHOT"
    assert props["git.commit"] == "unknown"
    assert props["git.tag"] == "none"
    assert props["build.environment"] == "local"


def test_rendered_file_parses_back():
    props = {"app.name": "Telegram Admin Bot", "app.version": "1.0.0"}
    assert parse_properties(render(props)) == props


def test_main_writes_file(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("GITHUB_ACTIONS", raising=False)
    output = tmp_path / "out" / "version.properties"
    with patch("generate_version._git", return_value="unknown"):
        assert main(["--output", str(output), "--base-version", "3.1.0"]) == 0
    props = parse_properties(output.read_text())
    assert props["app.version"] == "3.1.0-SNAPSHOT"
    assert props["app.name"] == "Telegram Admin Bot"
