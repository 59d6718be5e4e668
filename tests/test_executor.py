from dataclasses import replace

import pytest

from naukri_bot.errors import ListingNotFoundError
from naukri_bot.executor import (
    APPLY_SCRIPT,
    CLICK_LISTING_SCRIPT,
    LOCATE_SCRIPT,
    ApplicationExecutor,
    ApplyStage,
)
from naukri_bot.models import ListingCandidate, OutcomeStatus


@pytest.fixture
def candidate():
    return ListingCandidate(
        text="Frontend Developer | Experience 2-5 Yrs",
        classes="srp-jobtuple-wrapper",
        selector='div[class="srp-jobtuple-wrapper"]',
        index=2,
        matched_keywords=("Experience",),
    )


def page_scripts(located=True, apply_found=True):
    """evaluate() side effect that answers per script; values may be lists consumed in order."""
    answers = {LOCATE_SCRIPT: located, APPLY_SCRIPT: apply_found}

    async def evaluate(script, arg=None):
        answer = answers[script]
        if isinstance(answer, list):
            answer = answer.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer
    return evaluate


def count(driver, script):
    return sum(1 for call in driver.evaluate.await_args_list if call.args[0] == script)


@pytest.mark.asyncio
async def test_applied_path(driver, config, no_sleep, candidate):
    driver.evaluate.side_effect = page_scripts()
    executor = ApplicationExecutor(driver, config, sleep=no_sleep)

    outcome = await executor.apply(candidate, 0)

    assert outcome.status is OutcomeStatus.APPLIED
    assert outcome.candidate is candidate
    driver.evaluate.assert_any_await(LOCATE_SCRIPT, {"selector": candidate.selector, "index": 2, "id": ""})
    driver.evaluate_and_wait_for_navigation.assert_awaited_once_with(CLICK_LISTING_SCRIPT, candidate.fingerprint)
    driver.evaluate.assert_any_await(APPLY_SCRIPT, "apply")
    driver.go_back.assert_awaited_once()
    assert executor.stage is ApplyStage.RETURNED


@pytest.mark.asyncio
async def test_missing_apply_control_is_not_an_error(driver, config, no_sleep, candidate):
    driver.evaluate.side_effect = page_scripts(apply_found=False)

    outcome = await ApplicationExecutor(driver, config, sleep=no_sleep).apply(candidate, 0)

    assert outcome.status is OutcomeStatus.APPLY_CONTROL_NOT_FOUND
    # still returns to the results page
    driver.go_back.assert_awaited_once()
    assert count(driver, LOCATE_SCRIPT) == 1


@pytest.mark.asyncio
async def test_unmatched_fingerprint_fails_after_retries(driver, config, no_sleep, candidate):
    driver.evaluate.side_effect = page_scripts(located=False)
    executor = ApplicationExecutor(driver, config, sleep=no_sleep)

    with pytest.raises(ListingNotFoundError):
        await executor.apply(candidate, 0)

    assert count(driver, LOCATE_SCRIPT) == config.max_retries
    driver.evaluate_and_wait_for_navigation.assert_not_awaited()
    driver.go_back.assert_not_awaited()
    assert executor.stage is ApplyStage.IDLE


@pytest.mark.asyncio
async def test_rematch_can_succeed_on_a_later_attempt(driver, config, no_sleep, candidate):
    driver.evaluate.side_effect = page_scripts(located=[False, True])

    outcome = await ApplicationExecutor(driver, config, sleep=no_sleep).apply(candidate, 0)

    assert outcome.status is OutcomeStatus.APPLIED
    assert count(driver, LOCATE_SCRIPT) == 2


@pytest.mark.asyncio
async def test_late_failure_restarts_whole_sequence(driver, config, no_sleep, candidate):
    driver.evaluate.side_effect = page_scripts(apply_found=[True, True])
    driver.go_back.side_effect = [TimeoutError("back timed out"), None]

    outcome = await ApplicationExecutor(driver, config, sleep=no_sleep).apply(candidate, 0)

    assert outcome.status is OutcomeStatus.APPLIED
    assert count(driver, LOCATE_SCRIPT) == 2
    assert driver.evaluate_and_wait_for_navigation.await_count == 2
    assert driver.go_back.await_count == 2


@pytest.mark.asyncio
async def test_navigation_failure_leaves_stage_at_located(driver, config, no_sleep, candidate):
    driver.evaluate.side_effect = page_scripts()
    driver.evaluate_and_wait_for_navigation.side_effect = TimeoutError("no navigation")
    executor = ApplicationExecutor(driver, replace(config, max_retries=1), sleep=no_sleep)

    with pytest.raises(TimeoutError):
        await executor.apply(candidate, 0)

    assert executor.stage is ApplyStage.LOCATED


def test_element_id_takes_part_in_fingerprint():
    c = ListingCandidate(text="", classes="a", selector='div[class="a"]', element_id="job-42")
    assert c.fingerprint["id"] == "job-42"
    assert c.describe() == "#job-42"
