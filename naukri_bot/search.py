import re

from naukri_bot.resilience import with_retry
from tools.logger import get_logger

logger = get_logger("Search")


def slugify_title(job_title: str) -> str:
    """'Frontend  Developer' -> 'frontend-developer' (Naukri's search path shape)."""
    return re.sub(r"\s+", "-", job_title.strip()).lower()


class SearchIssuer:
    def __init__(self, driver, config, sleep=None):
        self.driver = driver
        self.config = config
        self._sleep = sleep

    def build_search_url(self, job_title: str) -> str:
        return self.config.search_url_template.format(slug=slugify_title(job_title))

    async def search(self, job_title: str) -> str:
        """Navigates to the results page for a job title, retried as a unit."""
        url = self.build_search_url(job_title)

        async def attempt():
            await self.driver.navigate(url)

        kwargs = {"sleep": self._sleep} if self._sleep else {}
        await with_retry(attempt, max_attempts=self.config.max_retries,
                         delay_ms=self.config.retry_delay_ms, label="search", **kwargs)
        logger.info(f"🔍 Searched for {job_title} jobs ({url})")
        return url
