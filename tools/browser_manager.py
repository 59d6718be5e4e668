import random
from playwright.async_api import async_playwright

from naukri_bot.driver import PageDriver
from tools.logger import get_logger

logger = get_logger("BrowserManager")

# Human-like User Agents
USER_AGENTS = [
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
]

LAUNCH_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--disable-notifications",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--start-maximized",
]

# Request URLs containing any of these are aborted when tracker blocking is on
BLOCKED_URL_MARKERS = [
    "securepubads",
    "google-analytics",
    "doubleclick",
    "google-adservices",
    "analytics",
    "tracking",
    "pubads_impl",
]

STEALTH_INIT_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
window.navigator.chrome = { runtime: {} };
Object.defineProperty(navigator, 'languages', { get: () => ['en-US', 'en'] });
"""

def is_blocked_url(url):
    return any(marker in url for marker in BLOCKED_URL_MARKERS)

class BrowserManager:
    """Owns the Chromium process for one run.

    Use as ``async with BrowserManager(config) as driver:``; the browser and the
    Playwright connection are released on every exit path, exceptions included.
    """

    def __init__(self, config):
        self.config = config
        self._playwright = None
        self._browser = None
        self._context = None

    async def __aenter__(self) -> PageDriver:
        try:
            return await self._launch()
        except BaseException:
            await self.close()
            raise

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()
        return False

    async def _launch(self):
        self._playwright = await async_playwright().start()
        logger.info(f"Launching Chromium (headless={self.config.headless})...")
        self._browser = await self._playwright.chromium.launch(
            headless=self.config.headless,
            args=LAUNCH_ARGS,
        )

        user_agent = random.choice(USER_AGENTS)
        self._context = await self._browser.new_context(
            user_agent=user_agent,
            locale="en-US",
            viewport={"width": 1366, "height": 768},
        )
        await self._context.add_init_script(STEALTH_INIT_SCRIPT)
        self._context.set_default_navigation_timeout(self.config.navigation_timeout_ms)

        if self.config.block_trackers:
            await self._context.route("**/*", self._route_request)

        page = await self._context.new_page()
        page.on("dialog", self._dismiss_dialog)

        logger.info("Browser launched")
        return PageDriver(page, wait_until=self.config.wait_until,
                          timeout_ms=self.config.navigation_timeout_ms)

    async def _route_request(self, route):
        if is_blocked_url(route.request.url):
            await route.abort()
        else:
            await route.continue_()

    async def _dismiss_dialog(self, dialog):
        logger.debug(f"Dismissing {dialog.type} dialog")
        await dialog.dismiss()

    async def close(self):
        """Closes the browser and stops Playwright; safe to call twice."""
        if self._browser is not None:
            try:
                await self._browser.close()
                logger.info("Browser closed")
            except Exception as e:
                logger.warning(f"Error while closing browser: {e}")
            self._browser = None
            self._context = None
        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.warning(f"Error while stopping Playwright: {e}")
            self._playwright = None
