"""Employee Status Route: POST /api/GetEmpStatus.

Invariants:
    - Route holds no business logic: it builds a request-scoped service and delegates
    - EmpStatusError propagates to the global handler (status code chosen by ErrorKind)
    - Cache population runs as a background task after the response is sent

Design Decisions:
    - get_employee_status_service exported as a dependency so tests can
      override it with scripted record stores
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.infrastructure.cache import CacheLayer, get_cache
from app.infrastructure.database import get_db
from app.infrastructure.record_store import SqlRecordStore
from app.schemas.employee import EmpStatusRequest, EmpStatusResponse
from app.services.employee_status import EmployeeStatusService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["employees"])


def get_employee_status_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheLayer = Depends(get_cache),
) -> EmployeeStatusService:
    settings = get_settings()
    return EmployeeStatusService(
        SqlRecordStore(db),
        cache,
        retry_policy=settings.db_retry_policy(),
        cache_ttl_seconds=settings.cache_ttl_seconds,
    )


@router.post("/GetEmpStatus", response_model=EmpStatusResponse)
async def get_emp_status(
    body: EmpStatusRequest,
    background_tasks: BackgroundTasks,
    service: EmployeeStatusService = Depends(get_employee_status_service),
):
    """Compute (or serve from cache) the status for body.NationalNumber."""
    return await service.get_employee_status(
        body.national_number, defer=background_tasks.add_task,
    )
