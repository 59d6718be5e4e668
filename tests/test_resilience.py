import logging
from unittest.mock import AsyncMock

import pytest

from naukri_bot.resilience import with_retry


@pytest.mark.asyncio
async def test_success_on_first_attempt_returns_immediately(no_sleep):
    operation = AsyncMock(return_value="done")

    result = await with_retry(operation, max_attempts=3, sleep=no_sleep)

    assert result == "done"
    assert operation.await_count == 1
    no_sleep.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("max_attempts", [1, 2, 3, 5])
async def test_always_failing_runs_exactly_n_times_and_raises_last_error(no_sleep, max_attempts):
    errors = [RuntimeError(f"failure {i}") for i in range(max_attempts)]
    operation = AsyncMock(side_effect=errors)

    with pytest.raises(RuntimeError) as exc_info:
        await with_retry(operation, max_attempts=max_attempts, sleep=no_sleep)

    assert operation.await_count == max_attempts
    assert exc_info.value is errors[-1]
    assert no_sleep.await_count == max_attempts - 1


@pytest.mark.asyncio
@pytest.mark.parametrize("k", [1, 2, 3])
async def test_success_on_attempt_k_stops_there(no_sleep, k):
    operation = AsyncMock(side_effect=[TimeoutError("slow")] * (k - 1) + ["ok"])

    result = await with_retry(operation, max_attempts=3, sleep=no_sleep)

    assert result == "ok"
    assert operation.await_count == k


@pytest.mark.asyncio
async def test_waits_fixed_delay_between_attempts(no_sleep):
    operation = AsyncMock(side_effect=[ValueError("a"), ValueError("b"), "ok"])

    await with_retry(operation, max_attempts=3, delay_ms=2000, sleep=no_sleep)

    assert [call.args[0] for call in no_sleep.await_args_list] == [2.0, 2.0]


@pytest.mark.asyncio
async def test_single_attempt_means_no_retry(no_sleep):
    operation = AsyncMock(side_effect=ValueError("boom"))

    with pytest.raises(ValueError, match="boom"):
        await with_retry(operation, max_attempts=1, sleep=no_sleep)

    assert operation.await_count == 1
    no_sleep.assert_not_awaited()


@pytest.mark.asyncio
async def test_rejects_zero_attempts(no_sleep):
    with pytest.raises(ValueError):
        await with_retry(AsyncMock(), max_attempts=0, sleep=no_sleep)


@pytest.mark.asyncio
async def test_intermediate_failures_are_logged_as_transient(no_sleep, caplog):
    operation = AsyncMock(side_effect=[RuntimeError("flaky"), "ok"])

    with caplog.at_level(logging.WARNING, logger="NaukriBot"):
        await with_retry(operation, max_attempts=3, label="login", sleep=no_sleep)

    assert "Retry 1/3 failed for login: flaky" in caplog.text
