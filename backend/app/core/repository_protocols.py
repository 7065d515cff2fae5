"""Boundary Protocols: contracts between the status pipeline and its collaborators.

Invariants:
    - Core NEVER imports from infrastructure/ or services/
    - Record store methods may raise any exception; the retry executor treats
      every exception as retryable
    - Cache methods never raise (degraded mode turns them into no-ops)

Design Decisions:
    - Protocol over ABC: test fakes satisfy the contract structurally
"""

from typing import Protocol

from app.core.domain_types import (
    EmployeeId, EmployeeRecord, NationalKey, SalaryRecord,
)


class RecordStore(Protocol):
    """Contract for employee and salary persistence, implemented by infrastructure."""
    async def find_by_key(
        self, national_key: NationalKey,
    ) -> EmployeeRecord | None: ...

    async def list_salaries(
        self, employee_id: EmployeeId,
    ) -> list[SalaryRecord]: ...

    async def get_employee_with_salaries(
        self, national_key: NationalKey,
    ) -> tuple[EmployeeRecord, list[SalaryRecord]] | None: ...


class StatusCache(Protocol):
    """Contract for the cache-aside store. Safe to call when unavailable."""
    async def get(self, key: str) -> dict | None: ...
    async def set(self, key: str, value: dict, ttl_seconds: int | None = None) -> None: ...
    async def delete(self, key: str) -> None: ...
    async def delete_by_prefix(self, prefix: str) -> int: ...
    def is_available(self) -> bool: ...
