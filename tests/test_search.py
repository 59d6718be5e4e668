import pytest

from naukri_bot.search import SearchIssuer, slugify_title


@pytest.mark.parametrize("title,slug", [
    ("Frontend Developer", "frontend-developer"),
    ("  Senior   React\tDeveloper ", "senior-react-developer"),
    ("Python", "python"),
    ("Full Stack Web Developer", "full-stack-web-developer"),
])
def test_slugify_title(title, slug):
    assert slugify_title(title) == slug


def test_build_search_url(driver, config):
    assert SearchIssuer(driver, config).build_search_url("Frontend Developer") == \
        "https://www.naukri.com/frontend-developer-jobs"


@pytest.mark.asyncio
async def test_search_navigates_to_slug_url(driver, config, no_sleep):
    url = await SearchIssuer(driver, config, sleep=no_sleep).search("Data Engineer")

    assert url == "https://www.naukri.com/data-engineer-jobs"
    driver.navigate.assert_awaited_once_with(url)


@pytest.mark.asyncio
async def test_search_retried_then_fatal(driver, config, no_sleep):
    driver.navigate.side_effect = TimeoutError("navigation timeout")

    with pytest.raises(TimeoutError):
        await SearchIssuer(driver, config, sleep=no_sleep).search("Data Engineer")

    assert driver.navigate.await_count == 3
    assert no_sleep.await_count == 2


@pytest.mark.asyncio
async def test_search_recovers_after_transient_failure(driver, config, no_sleep):
    driver.navigate.side_effect = [TimeoutError("slow"), None]

    await SearchIssuer(driver, config, sleep=no_sleep).search("Data Engineer")

    assert driver.navigate.await_count == 2
