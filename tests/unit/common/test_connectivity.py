from pytest_mock import MockerFixture

from task_manager.common.connectivity import ConnectionState, wait_for_storage
from task_manager.common.exceptions import StorageException
from task_manager.common.retry import FixedDelayRetryPolicy


async def test_ready_on_first_attempt(mocker: MockerFixture) -> None:
    probe = mocker.Mock(return_value=None)
    sleep = mocker.AsyncMock()

    state = await wait_for_storage(probe, FixedDelayRetryPolicy(), sleep=sleep)

    assert state == ConnectionState.READY
    probe.assert_called_once()
    sleep.assert_not_awaited()


async def test_ready_after_retries(mocker: MockerFixture) -> None:
    probe = mocker.Mock(
        side_effect=[StorageException("refused"), StorageException("refused"), None]
    )
    sleep = mocker.AsyncMock()

    state = await wait_for_storage(
        probe, FixedDelayRetryPolicy(max_attempts=5, delay=5.0), sleep=sleep
    )

    assert state == ConnectionState.READY
    assert probe.call_count == 3
    assert sleep.await_count == 2
    sleep.assert_awaited_with(5.0)


async def test_gives_up_after_max_attempts(mocker: MockerFixture) -> None:
    probe = mocker.Mock(side_effect=StorageException("refused"))
    sleep = mocker.AsyncMock()

    state = await wait_for_storage(
        probe, FixedDelayRetryPolicy(max_attempts=5, delay=5.0), sleep=sleep
    )

    assert state == ConnectionState.GAVE_UP
    assert probe.call_count == 5
    # No delay after the final attempt
    assert sleep.await_count == 4


async def test_single_attempt_policy_never_sleeps(mocker: MockerFixture) -> None:
    probe = mocker.Mock(side_effect=RuntimeError("driver missing"))
    sleep = mocker.AsyncMock()

    state = await wait_for_storage(
        probe, FixedDelayRetryPolicy(max_attempts=1), sleep=sleep
    )

    assert state == ConnectionState.GAVE_UP
    sleep.assert_not_awaited()
