import random
from tools.logger import get_logger

logger = get_logger("HumanActions")

class PacingScheduler:
    """Randomized gap between consecutive application attempts.

    Every call draws independently from [min_ms, max_ms); nothing is remembered
    between calls.
    """

    def __init__(self, min_ms=3000, max_ms=5000, rng=None):
        if min_ms < 0 or max_ms <= min_ms:
            raise ValueError(f"Invalid pacing window [{min_ms}, {max_ms})")
        self.min_ms = min_ms
        self.max_ms = max_ms
        self._rng = rng or random.Random()

    def next_delay_ms(self) -> float:
        delay = self.min_ms + self._rng.random() * (self.max_ms - self.min_ms)
        # float rounding can land exactly on the upper bound
        if delay >= self.max_ms:
            delay = self.min_ms
        return delay

    async def pause(self, waiter):
        """Sleeps for one freshly drawn delay through the given waiter."""
        delay = self.next_delay_ms()
        logger.debug(f"Pacing pause of {delay:.0f} ms")
        await waiter.sleep(delay / 1000)
        return delay

def keystroke_delay_ms(min_ms=50, max_ms=200, rng=None):
    """Per-keystroke delay for human-like typing."""
    return (rng or random).uniform(min_ms, max_ms)

async def type_human_like(driver, selector, text, min_ms=50, max_ms=200, rng=None):
    """Types text into a field, drawing a fresh delay for every keystroke."""
    text = text or ""
    delays = [keystroke_delay_ms(min_ms, max_ms, rng) for _ in text]
    await driver.type_into(selector, text, delays_ms=delays)
    logger.debug(f"Typed {len(text)} characters into {selector}")
