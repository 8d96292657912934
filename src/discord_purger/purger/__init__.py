"""Search-and-delete components for Discord Purger."""

from .client import DiscordClient
from .delete_drainer import DeleteDrainer
from .identity import resolve_identity
from .runner import PurgeRunner
from .search_paginator import SearchPaginator
from .targets import TargetEnumerator, exclude_targets, prioritize_targets

__all__ = [
    "DiscordClient",
    "DeleteDrainer",
    "resolve_identity",
    "PurgeRunner",
    "SearchPaginator",
    "TargetEnumerator",
    "exclude_targets",
    "prioritize_targets",
]
