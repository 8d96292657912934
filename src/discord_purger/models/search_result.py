"""Per-target and per-run result models."""

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, Field

from .account import Account
from .message import MessageMatch
from .target import Target


class StopReason(str, Enum):
    """Why pagination ended for a target."""

    NO_RESULTS = "no_results"
    EXHAUSTED = "exhausted"
    END_REACHED = "end_reached"
    CAP_REACHED = "cap_reached"
    HTTP_ERROR = "http_error"
    DECODE_ERROR = "decode_error"
    RETRY_LIMIT = "retry_limit"


class SearchResult(BaseModel):
    """Everything one search session accumulated for a target."""

    target: Target
    total_results: int = 0
    messages: list[MessageMatch] = []
    stop_reason: StopReason
    status_code: int | None = None
    requests: int = 0
    duration_seconds: float = 0.0


class DrainResult(BaseModel):
    """Counts from one delete session."""

    target: Target
    attempted: int = 0
    deleted: int = 0
    failed: int = 0


class TargetReport(BaseModel):
    """Search and delete outcome for one target."""

    target: Target
    search: SearchResult
    drain: DrainResult


class RunSummary(BaseModel):
    """Aggregate counts for a whole run."""

    account: Account
    targets: int = 0
    guilds: int = 0
    dms: int = 0
    reports: list[TargetReport] = []
    started_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    duration_seconds: float = 0.0
    waited_seconds: float = 0.0

    @property
    def messages_found(self) -> int:
        return sum(len(r.search.messages) for r in self.reports)

    @property
    def messages_deleted(self) -> int:
        return sum(r.drain.deleted for r in self.reports)

    @property
    def messages_failed(self) -> int:
        return sum(r.drain.failed for r in self.reports)
