"""
Thin async facade over a Playwright page.

The core only talks to the browser through these primitives, which keeps it
testable with a mocked driver.
"""

from typing import Any, Optional, Sequence


class PageDriver:
    """Browser primitives consumed by the bot: navigate, type, click, evaluate, go back."""

    def __init__(self, page, wait_until: str = "networkidle", timeout_ms: Optional[float] = None):
        self.page = page
        self.wait_until = wait_until
        self.timeout_ms = timeout_ms

    async def navigate(self, url: str):
        return await self.page.goto(url, wait_until=self.wait_until, timeout=self.timeout_ms)

    async def type_into(self, selector: str, text: str, delays_ms: Sequence[float] = ()):
        """Types one key at a time, waiting delays_ms[i] after key i (missing delays are 0)."""
        locator = self.page.locator(selector)
        for i, char in enumerate(text):
            await locator.press_sequentially(char)
            if i < len(delays_ms) and delays_ms[i] > 0:
                await self.page.wait_for_timeout(delays_ms[i])

    async def click(self, selector: str):
        await self.page.click(selector)

    async def click_and_wait_for_navigation(self, selector: str):
        """Clicks and suspends until the navigation it triggers has settled."""
        async with self.page.expect_navigation(wait_until=self.wait_until, timeout=self.timeout_ms):
            await self.page.click(selector)

    async def evaluate(self, script: str, arg: Any = None) -> Any:
        return await self.page.evaluate(script, arg)

    async def evaluate_and_wait_for_navigation(self, script: str, arg: Any = None) -> Any:
        """Runs an in-page script that is expected to navigate (e.g. an element.click())."""
        async with self.page.expect_navigation(wait_until=self.wait_until, timeout=self.timeout_ms):
            result = await self.page.evaluate(script, arg)
        return result

    async def go_back(self):
        return await self.page.go_back(wait_until=self.wait_until, timeout=self.timeout_ms)

    async def current_url(self) -> str:
        return self.page.url

    async def content(self) -> str:
        return await self.page.content()

    async def screenshot(self, path: str):
        await self.page.screenshot(path=path, full_page=True)
