"""Employee Status Service: cache-aside orchestration of the status pipeline.

Invariants:
    - Step order is fixed: validate key -> cache lookup -> fetch (with retry)
      -> active check -> history check -> salary shape check -> compute
      -> cache populate -> return
    - A cache hit returns the stored response untouched; the record store is
      not called and no business rule is re-evaluated
    - Only a fully computed response is ever written to the cache
    - Active and history checks run after a successful fetch and before any
      monetary computation
    - Record store failures become DataAccessError only after the retry budget
      is spent; the original exception is chained as __cause__
    - Every terminal failure is logged once, with its error_code

Design Decisions:
    - Request-scoped service: record store wraps the request's AsyncSession,
      nothing mutable is shared between requests except the cache client
    - Cache population can be deferred (BackgroundTasks.add_task) so the
      response is never held up by a slow Redis
    - StatusCacheAdmin is separate from the pipeline: invalidation never opens
      a database session
"""

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable

from app.core.domain_types import (
    EmployeeRecord, NationalKey, SalaryRecord,
)
from app.core.errors import (
    DataAccessError, EmpStatusError, EmployeeNotFoundError, ErrorContext, ErrorKind,
    InactiveEmployeeError, InsufficientDataError, InvalidInputError,
)
from app.core.repository_protocols import RecordStore, StatusCache
from app.core.salary_rules import compute_employee_status
from app.core.validate_input import (
    MIN_SALARY_HISTORY, has_minimum_history, is_active, normalize_key,
    validate_key_format, validate_salary_shape,
)
from app.infrastructure.cache import EMPLOYEE_KEY_PREFIX, employee_key
from app.infrastructure.retry import RetryPolicy, retry_database_query

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Deferrer = Callable[..., Any]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def canonical_key(national_key: str) -> NationalKey:
    """Validated, trimmed, upper-cased key. Raises InvalidInputError otherwise."""
    if not validate_key_format(national_key):
        logger.warning(
            "Invalid national number format",
            extra={
                "national_key": str(national_key),
                "error_code": ErrorKind.INVALID_INPUT.value,
            },
        )
        raise InvalidInputError(
            "Invalid NationalNumber format. Expected format: NAT1001",
            ErrorContext(national_key=str(national_key)),
        )
    return NationalKey(normalize_key(national_key))


class EmployeeStatusService:
    """Computes (or serves from cache) an employee's compensation status."""

    def __init__(
        self,
        record_store: RecordStore,
        cache: StatusCache,
        retry_policy: RetryPolicy | None = None,
        cache_ttl_seconds: int | None = None,
        clock: Clock = _utcnow,
        sleep: Callable[[float], Awaitable[None]] | None = None,
    ):
        self._store = record_store
        self._cache = cache
        self._retry_policy = retry_policy or RetryPolicy().for_data_store()
        self._cache_ttl_seconds = cache_ttl_seconds
        self._clock = clock
        self._sleep = sleep or asyncio.sleep

    async def get_employee_status(
        self, national_key: str, defer: Deferrer | None = None,
    ) -> dict:
        """Return the response shape for national_key, raising EmpStatusError on failure.

        When defer is given (e.g. BackgroundTasks.add_task) the cache write is
        handed to it instead of being awaited inline.
        """
        started = time.perf_counter()
        key = canonical_key(national_key)
        ctx = ErrorContext(national_key=key)
        logger.info("Processing employee status request", extra={"national_key": key})

        cache_key = employee_key(key)
        cached = await self._cache.get(cache_key)
        if cached is not None:
            logger.info(
                "Employee status served from cache",
                extra={
                    "national_key": key, "cache_hit": True,
                    "duration_ms": _elapsed_ms(started),
                },
            )
            return cached
        logger.debug("Cache miss", extra={"national_key": key, "cache_hit": False})

        employee, salaries = await self._fetch(key, ctx)
        self._check_business_rules(employee, salaries, ctx)

        status = compute_employee_status(employee, salaries, self._clock())
        response = status.to_response()

        if defer is not None:
            defer(self.populate_cache, cache_key, response)
        else:
            await self.populate_cache(cache_key, response)

        logger.info(
            "Employee status request completed",
            extra={
                "national_key": key, "status": status.status.value,
                "salary_count": len(salaries),
                "duration_ms": _elapsed_ms(started),
            },
        )
        return response

    async def populate_cache(self, cache_key: str, response: dict) -> None:
        """Best-effort cache write; never raises."""
        try:
            await self._cache.set(cache_key, response, self._cache_ttl_seconds)
        except Exception as e:
            # CACHE_FAILURE is never surfaced to the caller
            logger.warning(
                f"Cache population failed: {e}",
                extra={"cache_key": cache_key, "error_code": ErrorKind.CACHE_FAILURE.value},
            )

    # ─── Pipeline steps ─────────────────────────────────────────

    async def _fetch(
        self, key: NationalKey, ctx: ErrorContext,
    ) -> tuple[EmployeeRecord, list[SalaryRecord]]:
        operation = f"get_employee_with_salaries({key})"
        try:
            data = await retry_database_query(
                lambda: self._store.get_employee_with_salaries(key),
                operation,
                policy=self._retry_policy,
                sleep=self._sleep,
            )
        except EmpStatusError:
            raise
        except Exception as e:
            logger.error(
                f"Record store unavailable after retries: {e}",
                exc_info=True,
                extra={
                    "national_key": key, "operation": operation,
                    "error_code": ErrorKind.DATA_ACCESS_FAILURE.value,
                },
            )
            raise DataAccessError(operation, ctx) from e

        if data is None:
            logger.warning(
                "User not found",
                extra={"national_key": key, "error_code": ErrorKind.NOT_FOUND.value},
            )
            raise EmployeeNotFoundError(key, ctx)
        employee, salaries = data
        return employee, list(salaries)

    def _check_business_rules(
        self,
        employee: EmployeeRecord,
        salaries: list[SalaryRecord],
        ctx: ErrorContext,
    ) -> None:
        key = employee.national_key
        if not is_active(employee.is_active):
            logger.warning(
                "User is not active",
                extra={"national_key": key, "error_code": ErrorKind.INACTIVE.value},
            )
            raise InactiveEmployeeError(ctx)

        if not has_minimum_history(len(salaries)):
            logger.warning(
                "Insufficient salary data",
                extra={
                    "national_key": key, "salary_count": len(salaries),
                    "error_code": ErrorKind.INSUFFICIENT_DATA.value,
                },
            )
            raise InsufficientDataError(len(salaries), MIN_SALARY_HISTORY, ctx)

        shape_error = validate_salary_shape(salaries)
        if shape_error:
            logger.warning(
                shape_error["message"],
                extra={"national_key": key, "error_code": ErrorKind.INVALID_INPUT.value},
            )
            raise InvalidInputError(shape_error["message"], ctx)


class StatusCacheAdmin:
    """Explicit invalidation of cached statuses. Needs only the cache."""

    def __init__(self, cache: StatusCache):
        self._cache = cache

    async def invalidate_cache(self, national_key: str) -> NationalKey:
        key = canonical_key(national_key)
        await self._cache.delete(employee_key(key))
        logger.info("Cache invalidated", extra={"national_key": key})
        return key

    async def invalidate_all_caches(self) -> int:
        deleted = await self._cache.delete_by_prefix(EMPLOYEE_KEY_PREFIX)
        logger.info(f"All employee caches invalidated ({deleted} keys)")
        return deleted


def _elapsed_ms(started: float) -> int:
    return int((time.perf_counter() - started) * 1000)
