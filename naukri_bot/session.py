from naukri_bot.resilience import with_retry
from tools.human_actions import type_human_like
from tools.logger import get_logger

logger = get_logger("Session")


class SessionController:
    """Logs into the portal. The whole login sequence is one retried unit."""

    def __init__(self, driver, config, sleep=None):
        self.driver = driver
        self.config = config
        self._sleep = sleep

    async def login(self, credentials):
        # read once; retries reuse the same values
        username = credentials.username
        password = credentials.password

        async def attempt():
            await self.driver.navigate(self.config.login_url)
            await type_human_like(self.driver, self.config.username_selector, username,
                                  self.config.typing_delay_min_ms, self.config.typing_delay_max_ms)
            await type_human_like(self.driver, self.config.password_selector, password,
                                  self.config.typing_delay_min_ms, self.config.typing_delay_max_ms)
            await self.driver.click_and_wait_for_navigation(self.config.submit_selector)

        kwargs = {"sleep": self._sleep} if self._sleep else {}
        await with_retry(attempt, max_attempts=self.config.max_retries,
                         delay_ms=self.config.retry_delay_ms, label="login", **kwargs)
        logger.info("✅ Logged in successfully")
