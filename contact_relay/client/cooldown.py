"""
Cooldown timer for the contact form.

The countdown runs as an asyncio task that the timer owns: it is acquired
by start(), released by release() or when it reaches zero, and released on
teardown when used as an async context manager.
"""

import asyncio
from typing import Optional

import structlog

logger = structlog.get_logger(__name__)

DEFAULT_COOLDOWN_SECONDS = 30


class CooldownTimer:
    def __init__(self, tick_interval: float = 1.0):
        """
        Args:
            tick_interval: Seconds between decrements (1.0 in production)
        """
        self.tick_interval = tick_interval
        self.remaining = 0
        self._task: Optional[asyncio.Task] = None

    @property
    def active(self) -> bool:
        return self.remaining > 0

    def start(self, seconds: int = DEFAULT_COOLDOWN_SECONDS) -> None:
        """Restart the countdown at ``seconds``. Must be called inside a running loop."""
        self.release()
        if seconds <= 0:
            return
        self.remaining = seconds
        self._task = asyncio.get_running_loop().create_task(self._countdown())
        logger.debug("cooldown_started", seconds=seconds)

    async def _countdown(self) -> None:
        try:
            while self.remaining > 0:
                await asyncio.sleep(self.tick_interval)
                self.remaining -= 1
            logger.debug("cooldown_finished")
        finally:
            # A restart may already have installed a newer task.
            if self._task is asyncio.current_task():
                self._task = None

    def release(self) -> None:
        """Stop the countdown and drop the task handle."""
        task, self._task = self._task, None
        if task is not None and not task.done():
            task.cancel()
        self.remaining = 0

    async def wait(self) -> None:
        """Wait until the running countdown reaches zero."""
        if self._task is not None:
            await asyncio.shield(self._task)

    async def __aenter__(self) -> "CooldownTimer":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.release()
