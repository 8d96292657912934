"""Offset-paginated message search with server-directed backoff."""

import time

import httpx
import structlog
from pydantic import ValidationError

from ..models.message import MessageMatch, RetryAfterPayload, SearchPage
from ..models.search_result import SearchResult, StopReason
from ..models.target import Target
from ..utils.pacing import Pacer
from .client import DiscordClient

logger = structlog.get_logger()

# 202: search index still being built, 429: rate limited
RETRY_LATER_STATUSES = frozenset({202, 429})


class SearchPaginator:
    """Walks the search endpoint for one target and accumulates matches.

    States: querying, waiting on a 202/429 (same offset, after a delay),
    and done. Pagination only advances on a 200 response.
    """

    def __init__(
        self,
        client: DiscordClient,
        pacer: Pacer | None = None,
        search_cap: int = 100,
        retry_after_multiplier_ms: int = 2000,
        transport_retry_limit: int | None = None,
    ):
        """Initialize search paginator.

        Args:
            client: Discord client
            pacer: Pacer used for retry-after waits
            search_cap: Stop once strictly more than this many matches are held
            retry_after_multiplier_ms: Milliseconds slept per retry_after second
            transport_retry_limit: Consecutive transport failures tolerated
                before giving up on a target; None retries forever
        """
        self.client = client
        self.pacer = pacer or Pacer()
        self.search_cap = search_cap
        self.retry_after_multiplier_ms = retry_after_multiplier_ms
        self.transport_retry_limit = transport_retry_limit

    async def search(self, target: Target, author_id: str) -> SearchResult:
        """Collect messages authored by ``author_id`` in ``target``.

        Never raises for HTTP or decode problems: any unexpected status ends
        the session and returns what was accumulated so far.

        Args:
            target: Guild or DM target
            author_id: Id of the account whose messages are wanted

        Returns:
            SearchResult with the accumulated matches and the stop reason
        """
        start_time = time.time()
        log = logger.bind(target_id=target.id, target=target.name)

        offset = 0
        total_results = 0
        accumulated: list[MessageMatch] = []
        requests = 0
        transport_failures = 0
        status_code: int | None = None

        while True:
            requests += 1
            try:
                response = await self.client.search_messages(target, author_id, offset)
            except httpx.TransportError as e:
                transport_failures += 1
                log.warning(
                    "search_transport_error",
                    offset=offset,
                    attempt=transport_failures,
                    error=str(e),
                )
                if (
                    self.transport_retry_limit is not None
                    and transport_failures >= self.transport_retry_limit
                ):
                    stop_reason = StopReason.RETRY_LIMIT
                    break
                continue

            transport_failures = 0
            status_code = response.status_code

            if status_code == 200:
                try:
                    page = SearchPage.model_validate(response.json())
                except (ValueError, ValidationError) as e:
                    log.error("search_decode_failed", offset=offset, error=str(e))
                    stop_reason = StopReason.DECODE_ERROR
                    break

                total_results = page.total_results
                accumulated.extend(page.messages)
                log.info(
                    "search_page",
                    received=len(page.messages),
                    accumulated=len(accumulated),
                    total_results=total_results,
                    offset=offset,
                )

                stop_reason = self._termination(
                    total_results, len(page.messages), offset, len(accumulated)
                )
                if stop_reason is not None:
                    break

                offset += len(page.messages)

            elif status_code in RETRY_LATER_STATUSES:
                try:
                    payload = RetryAfterPayload.model_validate(response.json())
                except (ValueError, ValidationError) as e:
                    log.error("search_decode_failed", status=status_code, error=str(e))
                    stop_reason = StopReason.DECODE_ERROR
                    break

                delay_ms = payload.retry_after * self.retry_after_multiplier_ms
                log.info(
                    "search_retry_after",
                    status=status_code,
                    retry_after=payload.retry_after,
                    delay_ms=delay_ms,
                    offset=offset,
                )
                await self.pacer.pause(delay_ms, "retry_after", target_id=target.id)

            else:
                log.warning("search_http_error", status=status_code, offset=offset)
                stop_reason = StopReason.HTTP_ERROR
                break

        duration = time.time() - start_time
        log.info(
            "search_stopped",
            reason=stop_reason.value,
            found=len(accumulated),
            total_results=total_results,
            requests=requests,
        )

        return SearchResult(
            target=target,
            total_results=total_results,
            messages=accumulated,
            stop_reason=stop_reason,
            status_code=status_code,
            requests=requests,
            duration_seconds=round(duration, 2),
        )

    def _termination(
        self,
        total_results: int,
        page_size: int,
        offset: int,
        accumulated: int,
    ) -> StopReason | None:
        """First matching stop guard after a 200, or None to keep going."""
        if total_results == 0:
            return StopReason.NO_RESULTS
        if page_size == 0:
            return StopReason.EXHAUSTED
        if offset >= total_results:
            return StopReason.END_REACHED
        # Batch bound, not the end of the results; may overshoot the cap
        if accumulated > self.search_cap:
            return StopReason.CAP_REACHED
        return None
