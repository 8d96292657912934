"""Conversation descriptor used across search and delete."""

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .account import DMChannel, Guild

DM_FALLBACK_NAME = "Direct Message Channel"


class TargetKind(str, Enum):
    """Which search endpoint family a target belongs to."""

    GUILD = "Guild"
    DM = "DM"

    @property
    def search_scope(self) -> str:
        """Path segment of the search endpoint for this kind."""
        return "guilds" if self is TargetKind.GUILD else "channels"


class Target(BaseModel):
    """A conversation to search and purge. Immutable once enumerated."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    kind: TargetKind

    @classmethod
    def from_guild(cls, guild: Guild) -> "Target":
        return cls(id=guild.id, name=guild.name, kind=TargetKind.GUILD)

    @classmethod
    def from_dm_channel(cls, channel: DMChannel) -> "Target":
        # Display only; the id is what the API cares about
        name = ", ".join(r.username for r in channel.recipients) or DM_FALLBACK_NAME
        return cls(id=channel.id, name=name, kind=TargetKind.DM)
