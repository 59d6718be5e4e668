from enum import Enum

from naukri_bot.errors import ListingNotFoundError
from naukri_bot.models import ApplicationOutcome, ListingCandidate
from naukri_bot.resilience import with_retry
from tools.logger import get_logger

logger = get_logger("Executor")

_FIND_JS = r"""
const find = ({selector, index, id}) => {
    let el = id ? document.getElementById(id) : null;
    if (!el && selector) {
        const elements = document.querySelectorAll(selector);
        el = elements[index] || elements[0] || null;
    }
    return el;
};
"""

LOCATE_SCRIPT = "(fingerprint) => {" + _FIND_JS + "return find(fingerprint) !== null; }"

CLICK_LISTING_SCRIPT = "(fingerprint) => {" + _FIND_JS + r"""
    const el = find(fingerprint);
    if (!el) {
        throw new Error('Could not find the job element to click');
    }
    el.click();
    return true;
}"""

# Buttons and links whose text or class mentions the apply marker
APPLY_SCRIPT = r"""(marker) => {
    const needle = marker.toLowerCase();
    const controls = Array.from(document.querySelectorAll('button, a'));
    const apply = controls.find(el => {
        const text = (el.textContent || '').toLowerCase();
        const classes = (el.getAttribute('class') || '').toLowerCase();
        return text.includes(needle) || classes.includes(needle);
    });
    if (apply) {
        apply.click();
        return true;
    }
    return false;
}"""


class ApplyStage(Enum):
    IDLE = "idle"
    LOCATED = "located"
    NAVIGATED_INTO_LISTING = "navigated_into_listing"
    APPLY_ATTEMPTED = "apply_attempted"
    RETURNED = "returned"


class ApplicationExecutor:
    """
    Attempts one application for one candidate.

    Locate -> click into listing -> look for an apply control -> go back. The
    four steps form a single retried unit: a failure anywhere restarts from
    locate. Errors that survive every retry propagate to the caller.
    """

    def __init__(self, driver, config, sleep=None):
        self.driver = driver
        self.config = config
        self._sleep = sleep
        self.stage = ApplyStage.IDLE

    async def apply(self, candidate: ListingCandidate, index: int = 0) -> ApplicationOutcome:
        label = f"job {index + 1}"

        async def attempt():
            self.stage = ApplyStage.IDLE
            logger.info(f"Attempting to apply for {label} ({candidate.describe()})")

            if not await self.driver.evaluate(LOCATE_SCRIPT, candidate.fingerprint):
                raise ListingNotFoundError(candidate)
            self.stage = ApplyStage.LOCATED

            await self.driver.evaluate_and_wait_for_navigation(CLICK_LISTING_SCRIPT, candidate.fingerprint)
            self.stage = ApplyStage.NAVIGATED_INTO_LISTING

            clicked = await self.driver.evaluate(APPLY_SCRIPT, self.config.apply_marker)
            self.stage = ApplyStage.APPLY_ATTEMPTED
            if clicked:
                logger.info(f"✅ Applied to {label}")
                outcome = ApplicationOutcome.applied(candidate)
            else:
                logger.info(f"⚠️ Could not find apply button for {label}")
                outcome = ApplicationOutcome.apply_control_not_found(candidate)

            await self.driver.go_back()
            self.stage = ApplyStage.RETURNED
            return outcome

        kwargs = {"sleep": self._sleep} if self._sleep else {}
        return await with_retry(attempt, max_attempts=self.config.max_retries,
                                delay_ms=self.config.retry_delay_ms, label=label, **kwargs)
