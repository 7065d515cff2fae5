"""Test doubles for the cache client, the record store and asyncio.sleep.

Invariants:
    - FakeRedis implements only the redis.asyncio calls CacheLayer makes
    - FakeRecordStore counts every get_employee_with_salaries call and can be
      scripted to fail a fixed number of times (failures=-1 fails forever)
"""

import fnmatch
from decimal import Decimal
from uuid import uuid4

from redis.exceptions import ConnectionError as RedisConnectionError

from app.core.domain_types import (
    EmployeeId, EmployeeRecord, NationalKey, SalaryRecord,
)


class FakeRedis:
    """In-memory stand-in for redis.asyncio.Redis (decode_responses=True)."""

    def __init__(
        self, fail_ping: bool = False, fail_ops: bool = False,
        op_error: Exception | None = None,
    ):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int] = {}
        self.fail_ping = fail_ping
        self.fail_ops = fail_ops
        self.op_error = op_error or RedisConnectionError("connection reset")
        self.closed = False
        self.factory_kwargs: dict = {}

    def _check(self):
        if self.fail_ops:
            raise self.op_error

    async def ping(self):
        if self.fail_ping:
            raise RedisConnectionError("Connection refused")
        return True

    async def get(self, key):
        self._check()
        return self.store.get(key)

    async def set(self, key, value, ex=None):
        self._check()
        self.store[key] = value
        self.ttls[key] = ex
        return True

    async def delete(self, *keys):
        self._check()
        count = 0
        for k in keys:
            if self.store.pop(k, None) is not None:
                self.ttls.pop(k, None)
                count += 1
        return count

    async def scan_iter(self, match="*"):
        self._check()
        for k in list(self.store):
            if fnmatch.fnmatchcase(k, match):
                yield k

    async def aclose(self):
        self.closed = True


def fake_client_factory(client: FakeRedis):
    """client_factory for CacheLayer that always hands back the given fake."""
    def _factory(url, **kwargs):
        client.factory_kwargs = {"url": url, **kwargs}
        return client
    return _factory


def make_employee(
    national_key: str = "NAT1001", is_active: bool = True,
) -> EmployeeRecord:
    return EmployeeRecord(
        id=EmployeeId(uuid4()),
        username="john_doe",
        national_key=NationalKey(national_key),
        email="john.doe@example.com",
        phone="+1234567890",
        is_active=is_active,
    )


def make_salaries(*amount_months: tuple[str, int], year: int = 2023) -> list[SalaryRecord]:
    return [
        SalaryRecord(amount=Decimal(a), month=m, year=year)
        for a, m in amount_months
    ]


def flat_year(amount: str = "6000.00", year: int = 2023) -> list[SalaryRecord]:
    """Twelve months of the same amount, newest first."""
    return [
        SalaryRecord(amount=Decimal(amount), month=m, year=year)
        for m in range(12, 0, -1)
    ]


class FakeRecordStore:
    """RecordStore double keyed by national key."""

    def __init__(self, records=None, failures: int = 0, error: Exception | None = None):
        self.records: dict[str, tuple[EmployeeRecord, list[SalaryRecord]]] = records or {}
        self.failures_left = failures
        self.error = error or OSError("database connection lost")
        self.calls: list[str] = []

    def add(self, employee: EmployeeRecord, salaries: list[SalaryRecord]):
        self.records[employee.national_key] = (employee, salaries)

    async def find_by_key(self, national_key):
        data = self.records.get(national_key)
        return data[0] if data else None

    async def list_salaries(self, employee_id):
        for employee, salaries in self.records.values():
            if employee.id == employee_id:
                return list(salaries)
        return []

    async def get_employee_with_salaries(self, national_key):
        self.calls.append(national_key)
        if self.failures_left != 0:
            if self.failures_left > 0:
                self.failures_left -= 1
            raise self.error
        return self.records.get(national_key)


class RecordingSleep:
    """Async sleep replacement that records requested durations (seconds)."""

    def __init__(self):
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)

    @property
    def calls_ms(self) -> list[int]:
        return [round(s * 1000) for s in self.calls]
