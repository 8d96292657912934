"""Sequential, fixed-pace deletion of accumulated search matches."""

import httpx
import structlog

from ..models.message import MessageMatch, matched_message
from ..models.search_result import DrainResult
from ..models.target import Target
from ..utils.pacing import Pacer
from .client import DiscordClient

logger = structlog.get_logger()


class DeleteDrainer:
    """Issues one DELETE per match, in order, pausing after each.

    Delete responses never change control flow: failures are logged and
    counted, never retried. The fixed pause is the only throttle on the
    delete endpoint.
    """

    def __init__(
        self,
        client: DiscordClient,
        pacer: Pacer | None = None,
        delay_ms: int = 2000,
    ):
        """Initialize delete drainer.

        Args:
            client: Discord client
            pacer: Pacer used for the pause after each delete
            delay_ms: Pause after each delete in milliseconds
        """
        self.client = client
        self.pacer = pacer or Pacer()
        self.delay_ms = delay_ms

    async def drain(self, messages: list[MessageMatch], target: Target) -> DrainResult:
        """Delete every matched message.

        Args:
            messages: Search matches, each a single-element list
            target: Target the matches came from (for logging)

        Returns:
            DrainResult with attempted/deleted/failed counts
        """
        result = DrainResult(target=target)
        log = logger.bind(target_id=target.id, target=target.name)

        for match in list(messages):
            message = matched_message(match)
            result.attempted += 1

            try:
                response = await self.client.delete_message(message.channel_id, message.id)
            except httpx.TransportError as e:
                response = None
                log.warning(
                    "message_delete_failed",
                    message_id=message.id,
                    error=str(e),
                    content=message.content,
                )

            await self.pacer.pause(self.delay_ms, "delete", message_id=message.id)

            if response is not None and response.is_success:
                result.deleted += 1
                log.info("message_deleted", message_id=message.id, content=message.content)
            else:
                result.failed += 1
                if response is not None:
                    log.warning(
                        "message_delete_failed",
                        message_id=message.id,
                        status=response.status_code,
                        content=message.content,
                    )

        return result
