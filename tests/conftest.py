from unittest.mock import AsyncMock

import pytest

from naukri_bot.config import RunConfig
from naukri_bot.driver import PageDriver
from tools.waits import Waiter


class InstantWaiter(Waiter):
    """Records requested waits instead of sleeping; readiness is immediate."""

    def __init__(self):
        super().__init__()
        self.sleeps = []
        self.until_timeouts = []

    async def sleep(self, seconds):
        self.sleeps.append(seconds)

    async def until(self, condition, timeout, label="condition"):
        self.until_timeouts.append(timeout)
        return True


@pytest.fixture
def config():
    return RunConfig()


@pytest.fixture
def waiter():
    return InstantWaiter()


@pytest.fixture
def no_sleep():
    return AsyncMock()


@pytest.fixture
def driver():
    mock_driver = AsyncMock(spec=PageDriver)
    mock_driver.current_url.return_value = "https://www.naukri.com/frontend-developer-jobs"
    mock_driver.content.return_value = "<html><body>nothing here</body></html>"
    return mock_driver


def make_listing_record(text="Frontend Developer | Experience 2-5 Yrs | Location Pune",
                        classes="srp-jobtuple-wrapper", index=0, element_id="", matched=None):
    return {
        "text": text,
        "matched": matched if matched is not None else [k for k in ("Experience", "Salary", "Location") if k in text],
        "classes": classes,
        "selector": f'div[class="{classes}"]',
        "index": index,
        "id": element_id,
    }


@pytest.fixture
def listing_record():
    return make_listing_record
