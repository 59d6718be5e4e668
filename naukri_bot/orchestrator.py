from naukri_bot.discovery import ListingDiscovery, build_classifier
from naukri_bot.executor import ApplicationExecutor
from naukri_bot.models import ApplicationOutcome, BatchResult, RunReport
from naukri_bot.search import SearchIssuer
from naukri_bot.session import SessionController
from tools.human_actions import PacingScheduler
from tools.logger import get_logger
from tools.waits import Waiter

logger = get_logger("Orchestrator")


class BatchOrchestrator:
    """
    Login -> search -> discover -> apply to up to ``config.applications`` listings.

    Login or search failing after all retries ends the run with a FATAL report.
    A listing that fails is recorded as a FAILED outcome and the batch moves on.
    Collaborators default to the real implementations built from the config;
    pass them explicitly to swap strategies or to test.
    """

    def __init__(self, config, driver, waiter=None, session=None, searcher=None,
                 discovery=None, executor=None, pacing=None):
        self.config = config
        self.driver = driver
        self.waiter = waiter or Waiter()
        sleep = self.waiter.sleep
        self.session = session or SessionController(driver, config, sleep=sleep)
        self.searcher = searcher or SearchIssuer(driver, config, sleep=sleep)
        self.discovery = discovery or ListingDiscovery(
            driver, build_classifier(config), self.waiter,
            settle_timeout_ms=config.settle_timeout_ms,
            diagnostic_length=config.diagnostic_length,
        )
        self.executor = executor or ApplicationExecutor(driver, config, sleep=sleep)
        self.pacing = pacing or PacingScheduler(config.pacing_min_ms, config.pacing_max_ms)

    async def run(self, credentials) -> RunReport:
        try:
            await self.session.login(credentials)
        except Exception as e:
            logger.error(f"❌ Login failed after {self.config.max_retries} attempts: {e}")
            return RunReport.fatal("login", e)

        try:
            await self.searcher.search(self.config.job_title)
        except Exception as e:
            logger.error(f"❌ Job search failed after {self.config.max_retries} attempts: {e}")
            return RunReport.fatal("search", e)

        try:
            candidates = await self.discovery.discover()
        except Exception as e:
            logger.error(f"❌ Could not evaluate the results page: {e}")
            return RunReport.fatal("discovery", e)

        batch = await self.apply_to_candidates(candidates)
        return RunReport.completed(batch, candidates_found=len(candidates))

    async def apply_to_candidates(self, candidates) -> BatchResult:
        batch = BatchResult()
        target = min(max(self.config.applications, 0), len(candidates))
        if not candidates:
            logger.warning("No candidates to apply to; nothing to do")

        for i in range(target):
            if i > 0:
                await self.pacing.pause(self.waiter)
            candidate = candidates[i]
            try:
                outcome = await self.executor.apply(candidate, i)
            except Exception as e:
                logger.error(f"Error applying to job {i + 1}: {e}")
                outcome = ApplicationOutcome.failed(str(e) or type(e).__name__, candidate)
            batch.add(outcome)

        summary = batch.summary()
        logger.info(
            f"Batch done: {summary['applied']} applied, "
            f"{summary['apply_control_not_found']} without apply button, "
            f"{summary['failed']} failed (of {summary['attempted']} attempted)"
        )
        return batch
