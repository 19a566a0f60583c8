import asyncio
from enum import Enum
import logging
from typing import Awaitable, Callable

from task_manager.common.retry import RetryPolicy

logger = logging.getLogger(__name__)


class ConnectionState(str, Enum):
    ATTEMPTING = "attempting"
    READY = "ready"
    GAVE_UP = "gave_up"


async def wait_for_storage(
    probe: Callable[[], None],
    policy: RetryPolicy,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
) -> ConnectionState:
    """Probe storage until it answers or the retry policy is exhausted.

    Never raises on connection failure; the caller decides what to do with
    a ``GAVE_UP`` outcome.
    """
    attempt = 1

    while True:
        try:
            await asyncio.to_thread(probe)
        except Exception as e:
            logger.warning(
                f"Database connection attempt {attempt}/{policy.max_attempts} failed: {e}"
            )
            if attempt >= policy.max_attempts:
                logger.error(
                    f"Failed to connect to the database after {policy.max_attempts} attempts"
                )
                return ConnectionState.GAVE_UP

            delay = policy.delay_for(attempt)
            logger.info(f"Retrying database connection in {delay:.1f} seconds...")
            await sleep(delay)
            attempt += 1
        else:
            logger.info("Successfully connected to the database")
            return ConnectionState.READY
