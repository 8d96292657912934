"""Enumerate guild and DM targets and put them in processing order."""

from typing import Iterable

import httpx
import structlog
from pydantic import BaseModel, TypeAdapter, ValidationError

from ..exceptions import EnumerationError
from ..models.account import DMChannel, Guild
from ..models.target import Target, TargetKind
from .client import DiscordClient

logger = structlog.get_logger()

_guilds_adapter = TypeAdapter(list[Guild])
_dm_channels_adapter = TypeAdapter(list[DMChannel])


def exclude_targets(targets: list[Target], exclude_ids: Iterable[str]) -> list[Target]:
    """Drop targets whose id is in ``exclude_ids``."""
    excluded = set(exclude_ids)
    if not excluded:
        return list(targets)
    return [t for t in targets if t.id not in excluded]


def prioritize_targets(targets: list[Target], prioritized_ids: Iterable[str]) -> list[Target]:
    """Move prioritized targets to the front.

    A stable two-way partition: prioritized targets keep their relative
    order, as do the rest. Order within ``prioritized_ids`` is not a rank.
    """
    prioritized = set(prioritized_ids)
    if not prioritized:
        return list(targets)
    first = [t for t in targets if t.id in prioritized]
    rest = [t for t in targets if t.id not in prioritized]
    return first + rest


def order_targets(
    targets: list[Target],
    exclude_ids: Iterable[str] = (),
    prioritized_ids: Iterable[str] = (),
) -> list[Target]:
    """Apply exclusion, then prioritization."""
    return prioritize_targets(exclude_targets(targets, exclude_ids), prioritized_ids)


def count_kinds(targets: list[Target]) -> tuple[int, int]:
    """Return (guild count, DM count)."""
    guilds = sum(1 for t in targets if t.kind is TargetKind.GUILD)
    return guilds, len(targets) - guilds


class TargetEnumerator:
    """Lists every conversation the account belongs to."""

    def __init__(self, client: DiscordClient):
        self.client = client

    async def list_targets(self) -> list[Target]:
        """Guild targets followed by DM targets.

        Raises:
            EnumerationError: If either listing fails; there is no partial mode
        """
        guilds = await self._fetch("/users/@me/guilds", self.client.get_guilds, _guilds_adapter)
        channels = await self._fetch(
            "/users/@me/channels", self.client.get_dm_channels, _dm_channels_adapter
        )

        targets = [Target.from_guild(g) for g in guilds]
        targets.extend(Target.from_dm_channel(c) for c in channels)

        logger.info(
            "targets_enumerated",
            total=len(targets),
            guilds=len(guilds),
            dms=len(channels),
        )
        return targets

    async def _fetch(self, endpoint: str, call, adapter: TypeAdapter) -> list[BaseModel]:
        try:
            response = await call()
        except httpx.TransportError as e:
            logger.error("enumeration_failed", endpoint=endpoint, error=str(e))
            raise EnumerationError(
                "Failed to list targets", str(e), endpoint=endpoint
            ) from e

        if not response.is_success:
            logger.error("enumeration_failed", endpoint=endpoint, status=response.status_code)
            raise EnumerationError(
                "Failed to list targets",
                f"GET {endpoint} returned {response.status_code}",
                endpoint=endpoint,
                status_code=response.status_code,
            )

        try:
            return adapter.validate_python(response.json())
        except (ValueError, ValidationError) as e:
            logger.error("enumeration_failed", endpoint=endpoint, error=str(e))
            raise EnumerationError(
                "Failed to list targets",
                f"unexpected body from {endpoint}",
                endpoint=endpoint,
                status_code=response.status_code,
            ) from e
