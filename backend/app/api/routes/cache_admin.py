"""Cache Administration: explicit invalidation of cached employee statuses.

Invariants:
    - Both routes return 202 even when the cache is degraded (nothing to delete)
    - Malformed keys are rejected with INVALID_INPUT before touching Redis
    - Only the cache is needed: no database session is opened
"""

from fastapi import APIRouter, Depends, status

from app.infrastructure.cache import CacheLayer, get_cache
from app.schemas.employee import CacheInvalidationResponse
from app.services.employee_status import StatusCacheAdmin

router = APIRouter(prefix="/api/v1/cache", tags=["cache"])


def get_cache_admin(cache: CacheLayer = Depends(get_cache)) -> StatusCacheAdmin:
    return StatusCacheAdmin(cache)


@router.delete(
    "/employees/{national_key}",
    response_model=CacheInvalidationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def invalidate_employee(
    national_key: str,
    admin: StatusCacheAdmin = Depends(get_cache_admin),
):
    key = await admin.invalidate_cache(national_key)
    return CacheInvalidationResponse(scope=key)


@router.delete(
    "/employees",
    response_model=CacheInvalidationResponse,
    status_code=status.HTTP_202_ACCEPTED,
)
async def invalidate_all_employees(
    admin: StatusCacheAdmin = Depends(get_cache_admin),
):
    deleted = await admin.invalidate_all_caches()
    return CacheInvalidationResponse(scope="employee:*", deleted=deleted)
