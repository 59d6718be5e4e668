import asyncio
import time
from tools.logger import get_logger

logger = get_logger("Waits")

class Waiter:
    """Cooperative waits used in place of fixed sleeps.

    Every suspension in the bot goes through one of these two methods so tests
    can swap in a waiter that returns immediately.
    """

    def __init__(self, poll_interval=0.25, clock=time.monotonic):
        self.poll_interval = poll_interval
        self._clock = clock

    async def sleep(self, seconds):
        await asyncio.sleep(seconds)

    async def until(self, condition, timeout, label="condition"):
        """Polls an async condition until it is truthy or the timeout runs out.

        Returns True when the condition was met, False on timeout. Errors raised
        by the condition count as "not ready yet".
        """
        deadline = self._clock() + timeout
        while True:
            try:
                if await condition():
                    return True
            except Exception as e:
                logger.debug(f"{label} not ready: {e}")
            remaining = deadline - self._clock()
            if remaining <= 0:
                logger.debug(f"Timed out after {timeout}s waiting for {label}")
                return False
            await self.sleep(min(self.poll_interval, remaining))
