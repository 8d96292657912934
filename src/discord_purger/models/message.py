"""Wire models for the message search endpoint.

The search API wraps every hit in a single-element list::

    {"total_results": 2, "messages": [[{...message...}], [{...message...}]]}

That nesting is part of the wire contract and is kept as-is: a search page
holds ``MessageMatch`` values and consumers read element 0.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """A matched message. Only id, channel_id and content are used."""

    model_config = ConfigDict(extra="allow")

    id: str
    channel_id: str
    content: str = ""


# One search hit: a list whose element 0 is the matched message
MessageMatch = Annotated[list[Message], Field(min_length=1)]


def matched_message(match: list[Message]) -> Message:
    """Return the message a search hit refers to."""
    return match[0]


class SearchPage(BaseModel):
    """Body of a 200 response from the search endpoint."""

    model_config = ConfigDict(extra="allow")

    total_results: int
    messages: list[MessageMatch] = []


class RetryAfterPayload(BaseModel):
    """Body of a 202 (index not ready) or 429 (rate limited) response."""

    model_config = ConfigDict(extra="allow")

    retry_after: float = Field(..., ge=0)
    message: str | None = None
    code: int | None = None
