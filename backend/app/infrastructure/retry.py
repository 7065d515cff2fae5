"""Retry Executor: bounded exponential backoff around any async operation.

Invariants:
    - The operation runs at most policy.max_attempts times
    - The last failure is re-raised unchanged (same object, same traceback)
    - on_retry fires before every sleep, never after the final attempt
    - Delay grows by backoff_multiplier and never exceeds max_delay_ms
    - Sleeping suspends only the awaiting task (asyncio.sleep)

Design Decisions:
    - Strategy object parametrized over the operation's return type, shared by
      every call site instead of a loop per client
    - No jitter: delays are part of the documented contract and asserted in tests
    - sleep is injectable so tests record delays without waiting
"""

import asyncio
import logging
from dataclasses import dataclass, replace
from typing import Awaitable, Callable, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

RetryObserver = Callable[[int, BaseException, int], None]
Sleeper = Callable[[float], Awaitable[None]]


@dataclass(frozen=True)
class RetryPolicy:
    """Backoff parameters. Delays in milliseconds."""
    max_attempts: int = 3
    initial_delay_ms: int = 1000
    backoff_multiplier: float = 2.0
    max_delay_ms: int = 10_000

    def __post_init__(self):
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        if self.initial_delay_ms < 0 or self.max_delay_ms < 0:
            raise ValueError("delays must be non-negative")

    def for_data_store(self, initial_delay_ms: int = 500) -> "RetryPolicy":
        """Same policy with the shorter first delay used for database calls."""
        return replace(self, initial_delay_ms=initial_delay_ms)

    def delays(self) -> list[int]:
        """Sleep schedule between attempts (max_attempts - 1 entries)."""
        out = []
        delay = self.initial_delay_ms
        for _ in range(self.max_attempts - 1):
            out.append(delay)
            delay = min(int(delay * self.backoff_multiplier), self.max_delay_ms)
        return out


def log_retry(attempt: int, error: BaseException, delay_ms: int) -> None:
    """Default observer: one warning per failed attempt that will be retried."""
    logger.warning(
        f"Retry attempt {attempt} failed, retrying in {delay_ms}ms: {error}",
        extra={"attempt": attempt, "delay_ms": delay_ms},
    )


class RetryExecutor:
    """Runs a fallible async operation under a RetryPolicy."""

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        sleep: Sleeper = asyncio.sleep,
    ):
        self.policy = policy or RetryPolicy()
        self._sleep = sleep

    async def execute(
        self,
        operation: Callable[[], Awaitable[T]],
        *,
        operation_name: str = "operation",
        on_retry: RetryObserver | None = None,
    ) -> T:
        """Await operation() until it succeeds or attempts run out."""
        observer = on_retry or log_retry
        schedule = self.policy.delays()

        for attempt in range(1, self.policy.max_attempts + 1):
            try:
                result = await operation()
            except Exception as e:
                if attempt >= self.policy.max_attempts:
                    logger.error(
                        f"All {self.policy.max_attempts} attempts of "
                        f"{operation_name} failed: {e}",
                        extra={"attempt": attempt, "operation": operation_name},
                    )
                    raise
                delay = schedule[attempt - 1]
                observer(attempt, e, delay)
                await self._sleep(delay / 1000)
                continue

            if attempt > 1:
                logger.info(
                    f"{operation_name} succeeded on attempt {attempt}",
                    extra={"attempt": attempt, "operation": operation_name},
                )
            return result

        raise AssertionError("unreachable: loop always returns or raises")


async def retry_database_query(
    operation: Callable[[], Awaitable[T]],
    query_name: str,
    policy: RetryPolicy | None = None,
    sleep: Sleeper = asyncio.sleep,
) -> T:
    """Retry a record store call with the data-store policy and query-named logs."""
    db_policy = policy or RetryPolicy().for_data_store()

    def _observe(attempt: int, error: BaseException, delay_ms: int) -> None:
        logger.warning(
            f"Retrying database query: {query_name}",
            extra={
                "attempt": attempt,
                "operation": query_name,
                "delay_ms": delay_ms,
                "error_type": type(error).__name__,
            },
        )

    executor = RetryExecutor(db_policy, sleep=sleep)
    return await executor.execute(
        operation, operation_name=query_name, on_retry=_observe,
    )
