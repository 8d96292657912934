"""Pydantic models for Discord data structures."""

from .account import Account, DMChannel, Guild
from .target import Target, TargetKind
from .message import Message, MessageMatch, RetryAfterPayload, SearchPage
from .search_result import (
    DrainResult,
    RunSummary,
    SearchResult,
    StopReason,
    TargetReport,
)

__all__ = [
    "Account",
    "DMChannel",
    "Guild",
    "Target",
    "TargetKind",
    "Message",
    "MessageMatch",
    "RetryAfterPayload",
    "SearchPage",
    "DrainResult",
    "RunSummary",
    "SearchResult",
    "StopReason",
    "TargetReport",
]
