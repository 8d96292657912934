"""Pytest fixtures for Discord Purger tests."""

from typing import AsyncIterator, Callable

import httpx
import pytest
import pytest_asyncio

from discord_purger.models.target import Target, TargetKind
from discord_purger.purger.client import DiscordClient
from discord_purger.utils.pacing import Pacer

BASE_URL = "https://discord.test/api/v9"


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested seconds."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class ScriptedHandler:
    """MockTransport handler replaying a fixed script of responses.

    Script entries are httpx.Response objects or exceptions to raise.
    The last entry repeats once the script runs out.
    """

    def __init__(self, script: list):
        self.script = list(script)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests) - 1, len(self.script) - 1)
        entry = self.script[index]
        if isinstance(entry, Exception):
            raise entry
        return entry


def make_message(message_id: str, channel_id: str = "c1", content: str = "hello") -> dict:
    return {"id": message_id, "channel_id": channel_id, "content": content}


def search_page(total_results: int, messages: list[dict]) -> httpx.Response:
    """200 search response; each message wrapped in its own list."""
    return httpx.Response(
        200,
        json={"total_results": total_results, "messages": [[m] for m in messages]},
    )


@pytest.fixture
def guild_target() -> Target:
    return Target(id="g1", name="Test Guild", kind=TargetKind.GUILD)


@pytest.fixture
def dm_target() -> Target:
    return Target(id="d1", name="alice", kind=TargetKind.DM)


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def pacer(sleeper) -> Pacer:
    return Pacer(sleep=sleeper)


@pytest_asyncio.fixture
async def make_client() -> AsyncIterator[Callable[[Callable], DiscordClient]]:
    """Build DiscordClients whose requests go to ``handler``; closed on teardown."""
    clients: list[DiscordClient] = []

    def _make(handler) -> DiscordClient:
        client = DiscordClient(
            token="test-token",
            base_url=BASE_URL,
            transport=httpx.MockTransport(handler),
        )
        clients.append(client)
        return client

    yield _make

    for client in clients:
        await client.stop()


class FakeDiscord:
    """Routes requests the way the Discord API would answer them."""

    def __init__(self, me_status: int = 200, guilds_status: int = 200):
        self.me_status = me_status
        self.guilds_status = guilds_status
        self.requests: list[httpx.Request] = []
        self.g1_pages = [
            search_page(2, [make_message("m1", "c10"), make_message("m2", "c11")]),
            search_page(2, []),
        ]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.removeprefix("/api/v9")

        if path == "/users/@me":
            return httpx.Response(self.me_status, json={"id": "42", "username": "me"})
        if path == "/users/@me/guilds":
            return httpx.Response(
                self.guilds_status,
                json=[{"id": "g1", "name": "One"}, {"id": "g2", "name": "Two"}],
            )
        if path == "/users/@me/channels":
            return httpx.Response(
                200, json=[{"id": "d1", "recipients": [{"id": "7", "username": "bob"}]}]
            )
        if path == "/guilds/g1/messages/search":
            return self.g1_pages.pop(0)
        if path == "/guilds/g2/messages/search":
            return httpx.Response(403, json={"message": "Missing Access"})
        if path == "/channels/d1/messages/search":
            return search_page(0, [])
        if request.method == "DELETE":
            return httpx.Response(204)
        raise AssertionError(f"unexpected request {request.method} {request.url}")

    def searched(self) -> list[str]:
        return [r.url.path.split("/")[4] for r in self.requests if r.url.path.endswith("/search")]

    def deleted(self) -> list[str]:
        return [r.url.path for r in self.requests if r.method == "DELETE"]
