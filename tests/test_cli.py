"""Tests for CLI commands.

Uses typer.testing.CliRunner; HTTP goes to an httpx.MockTransport.
"""

import json
from functools import partial

import httpx
import pytest
import structlog
from typer.testing import CliRunner

from conftest import FakeDiscord
from discord_purger.cli import commands
from discord_purger.cli.commands import app
from discord_purger.config import settings
from discord_purger.purger.client import DiscordClient
from discord_purger.utils.logging import remove_handler


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


@pytest.fixture
def split_runner() -> CliRunner:
    """CLI runner that keeps stdout and stderr apart."""
    try:
        return CliRunner(mix_stderr=False)
    except TypeError:
        # Click 8.2+ always keeps them apart
        return CliRunner()


@pytest.fixture(autouse=True)
def restore_logging():
    """Drop the handler bound to the runner's streams after each test."""
    yield
    remove_handler()
    structlog.reset_defaults()


def _json_lines(text: str) -> list[dict]:
    records = []
    for line in text.splitlines():
        try:
            value = json.loads(line)
        except ValueError:
            continue
        if isinstance(value, dict):
            records.append(value)
    return records


@pytest.fixture
def fake_discord(monkeypatch) -> FakeDiscord:
    """Point the CLI at a fake API with no pauses."""
    fake = FakeDiscord()
    monkeypatch.setattr(
        commands,
        "DiscordClient",
        partial(DiscordClient, transport=httpx.MockTransport(fake)),
    )
    monkeypatch.setattr(settings, "discord_token", "test-token")
    monkeypatch.setattr(settings, "exclude_targets", "")
    monkeypatch.setattr(settings, "prioritized_targets", "")
    monkeypatch.setattr(settings, "delete_delay_ms", 0)
    monkeypatch.setattr(settings, "target_delay_ms", 0)
    return fake


class TestVersion:
    def test_version(self, runner: CliRunner):
        from discord_purger import __version__

        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestPurgeCommand:
    """Tests for purge command."""

    def test_missing_token_exits_before_any_request(self, runner: CliRunner, monkeypatch):
        monkeypatch.setattr(settings, "discord_token", None)

        def fail(*args, **kwargs):
            raise AssertionError("client must not be built")

        monkeypatch.setattr(commands, "DiscordClient", fail)

        result = runner.invoke(app, ["purge"])

        assert result.exit_code == 1
        assert "Missing DISCORD_TOKEN" in result.output

    def test_purge_runs_to_completion(self, runner: CliRunner, fake_discord: FakeDiscord):
        result = runner.invoke(app, ["purge", "--exclude", "g2"])

        assert result.exit_code == 0
        assert "Complete!" in result.output
        assert "Messages deleted: 2" in result.output
        assert "Started:" in result.output
        assert fake_discord.searched() == ["g1", "g1", "d1"]

    def test_auth_failure_exits_non_zero(self, runner: CliRunner, fake_discord: FakeDiscord):
        fake_discord.me_status = 401

        result = runner.invoke(app, ["purge"])

        assert result.exit_code == 1
        assert "Failed to log in" in result.output
        assert fake_discord.searched() == []


class TestTargetsCommand:
    """Tests for targets command."""

    def test_lists_targets_without_deleting(self, runner: CliRunner, fake_discord: FakeDiscord):
        result = runner.invoke(app, ["targets", "--prioritize", "d1"])

        assert result.exit_code == 0
        assert "Logged in as" in result.output
        assert "Targets (3)" in result.output
        assert fake_discord.searched() == []
        assert fake_discord.deleted() == []


class TestJsonLogs:
    """Tests for --json-logs output separation."""

    def test_stdout_has_no_log_lines(self, split_runner: CliRunner, fake_discord: FakeDiscord):
        result = split_runner.invoke(app, ["purge", "--json-logs"])

        assert result.exit_code == 0
        assert "Complete!" in result.stdout
        assert _json_lines(result.stdout) == []
        for line in result.stderr.splitlines():
            if line.startswith("{"):
                assert isinstance(json.loads(line), dict)
