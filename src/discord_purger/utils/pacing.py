"""Fixed and server-directed delays between Discord requests."""

import asyncio
from typing import Awaitable, Callable

import structlog

logger = structlog.get_logger()

SleepFunc = Callable[[float], Awaitable[None]]


class Pacer:
    """Owns every deliberate pause of a run.

    Delete pacing, the pause between targets and the waits requested by
    202/429 responses all go through ``pause`` so they can be observed
    (and replaced) in one place.
    """

    def __init__(self, sleep: SleepFunc | None = None):
        """Initialize pacer.

        Args:
            sleep: Coroutine function taking seconds; defaults to asyncio.sleep
        """
        self._sleep = sleep or asyncio.sleep
        self.total_waited_ms = 0.0
        self.pauses = 0

    async def pause(self, delay_ms: float, reason: str, **context) -> None:
        """Suspend for ``delay_ms`` milliseconds.

        Args:
            delay_ms: Delay in milliseconds; non-positive values return at once
            reason: Short event label for the debug log
            **context: Extra key/values for the log line
        """
        if delay_ms <= 0:
            return

        logger.debug("pause", reason=reason, delay_ms=round(delay_ms, 2), **context)
        await self._sleep(delay_ms / 1000)

        self.total_waited_ms += delay_ms
        self.pauses += 1

    def reset(self) -> None:
        """Clear the wait counters."""
        self.total_waited_ms = 0.0
        self.pauses = 0
