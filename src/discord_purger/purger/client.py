"""Authenticated httpx client for the Discord v9 REST API."""

import asyncio
from typing import Any

import httpx
import structlog

from ..models.target import Target

logger = structlog.get_logger()

DEFAULT_BASE_URL = "https://discord.com/api/v9"


class DiscordClient:
    """Thin transport adapter: one shared httpx.AsyncClient per run.

    Methods return the raw ``httpx.Response``; interpreting status codes and
    bodies is left to the callers. Transport failures propagate as
    ``httpx.TransportError``.
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            token: User token, sent verbatim as the Authorization header
            base_url: API root, e.g. https://discord.com/api/v9
            timeout: Request timeout in seconds; None disables it
            transport: Optional httpx transport (tests pass a MockTransport)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._headers = {"Authorization": token}
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._lock = asyncio.Lock()

    async def start(self) -> None:
        """Open the underlying connection pool."""
        async with self._lock:
            if self._client is not None:
                return

            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=self.timeout,
                transport=self._transport,
            )
            logger.debug("client_started", base_url=self.base_url)

    async def stop(self) -> None:
        """Close the connection pool."""
        async with self._lock:
            if self._client:
                await self._client.aclose()
                self._client = None
                logger.debug("client_stopped")

    async def request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
    ) -> httpx.Response:
        """Send one authenticated request.

        Args:
            method: HTTP method
            path: Path relative to the API root, starting with "/"
            params: Query parameters

        Returns:
            The response, whatever its status
        """
        if self._client is None:
            await self.start()

        return await self._client.request(method, path, params=params)

    async def get_current_user(self) -> httpx.Response:
        return await self.request("GET", "/users/@me")

    async def get_guilds(self) -> httpx.Response:
        return await self.request("GET", "/users/@me/guilds")

    async def get_dm_channels(self) -> httpx.Response:
        return await self.request("GET", "/users/@me/channels")

    async def search_messages(
        self, target: Target, author_id: str, offset: int
    ) -> httpx.Response:
        """Query the guild- or channel-scoped search endpoint at ``offset``."""
        path = f"/{target.kind.search_scope}/{target.id}/messages/search"
        params = {
            "author_id": author_id,
            "include_nsfw": "true",
            "offset": offset,
        }
        return await self.request("GET", path, params=params)

    async def delete_message(self, channel_id: str, message_id: str) -> httpx.Response:
        return await self.request(
            "DELETE", f"/channels/{channel_id}/messages/{message_id}"
        )

    async def __aenter__(self) -> "DiscordClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.stop()
