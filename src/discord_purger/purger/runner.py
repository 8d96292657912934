"""Run orchestration: identity, targets, then search and delete per target."""

import time

import structlog

from ..models.search_result import RunSummary, TargetReport
from ..models.target import Target
from ..utils.pacing import Pacer
from .client import DiscordClient
from .delete_drainer import DeleteDrainer
from .identity import resolve_identity
from .search_paginator import SearchPaginator
from .targets import TargetEnumerator, count_kinds, order_targets

logger = structlog.get_logger()


class PurgeRunner:
    """Sequences a whole purge, one target at a time.

    Setup failures (identity, enumeration) propagate and abort the run.
    Failures inside a target's search or delete loop stay with that target.
    """

    def __init__(
        self,
        client: DiscordClient,
        paginator: SearchPaginator | None = None,
        drainer: DeleteDrainer | None = None,
        enumerator: TargetEnumerator | None = None,
        pacer: Pacer | None = None,
        exclude_ids: list[str] | None = None,
        prioritized_ids: list[str] | None = None,
        target_delay_ms: int = 2000,
    ):
        """Initialize runner.

        Args:
            client: Discord client shared by every component
            paginator: Search paginator
            drainer: Delete drainer
            enumerator: Target enumerator
            pacer: Pacer used for the pause between targets
            exclude_ids: Target ids to skip
            prioritized_ids: Target ids to process first
            target_delay_ms: Pause after each target in milliseconds
        """
        self.client = client
        self.pacer = pacer or Pacer()
        self.paginator = paginator or SearchPaginator(client, pacer=self.pacer)
        self.drainer = drainer or DeleteDrainer(client, pacer=self.pacer)
        self.enumerator = enumerator or TargetEnumerator(client)
        self.exclude_ids = exclude_ids or []
        self.prioritized_ids = prioritized_ids or []
        self.target_delay_ms = target_delay_ms

    async def collect_targets(self) -> list[Target]:
        """Enumerate targets and apply exclusion and prioritization."""
        targets = await self.enumerator.list_targets()
        return order_targets(targets, self.exclude_ids, self.prioritized_ids)

    async def run(self, on_target_done=None) -> RunSummary:
        """Purge every target.

        Args:
            on_target_done: Optional callback receiving each TargetReport

        Returns:
            RunSummary with per-target reports

        Raises:
            AuthError: If the account cannot be resolved
            EnumerationError: If targets cannot be listed
        """
        start_time = time.time()
        self.pacer.reset()

        account = await resolve_identity(self.client)
        targets = await self.collect_targets()
        guilds, dms = count_kinds(targets)

        summary = RunSummary(account=account, targets=len(targets), guilds=guilds, dms=dms)
        logger.info("run_started", targets=len(targets), guilds=guilds, dms=dms)

        for index, target in enumerate(targets, start=1):
            logger.info(
                "target_started",
                kind=target.kind.value,
                target=target.name,
                target_id=target.id,
                position=f"{index}/{len(targets)}",
            )

            search = await self.paginator.search(target, account.id)
            logger.info("target_messages_found", target_id=target.id, total=search.total_results)

            drain = await self.drainer.drain(search.messages, target)

            report = TargetReport(target=target, search=search, drain=drain)
            summary.reports.append(report)
            logger.info(
                "target_complete",
                target_id=target.id,
                deleted=drain.deleted,
                failed=drain.failed,
            )
            if on_target_done is not None:
                on_target_done(report)

            await self.pacer.pause(self.target_delay_ms, "next_target", target_id=target.id)

        summary.duration_seconds = round(time.time() - start_time, 2)
        summary.waited_seconds = round(self.pacer.total_waited_ms / 1000, 2)
        logger.info(
            "run_complete",
            targets=summary.targets,
            found=summary.messages_found,
            deleted=summary.messages_deleted,
            failed=summary.messages_failed,
            duration=f"{summary.duration_seconds:.2f}s",
            waited=f"{summary.waited_seconds:.2f}s",
        )
        return summary
