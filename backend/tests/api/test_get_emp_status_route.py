"""POST /api/GetEmpStatus: end-to-end against the seeded demo database.

Tests:
    - Seeded employees map to 200 / 404 / 406 / 422 with the documented bodies
    - Malformed keys are INVALID_INPUT (400); a missing field is VALIDATION_ERROR (400)
    - The response is cached after the first call and served from cache after
    - Data access failures after retries surface as 500 DATA_ACCESS_FAILURE
    - Unexpected exceptions become a generic 500 without internal details
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.routes.employee_status import get_employee_status_service
from app.db.seed import seed_demo_data
from app.infrastructure.cache import CacheLayer
from app.infrastructure.retry import RetryPolicy
from app.main import app
from app.services.employee_status import EmployeeStatusService
from tests.fakes import FakeRecordStore, RecordingSleep

URL = "/api/GetEmpStatus"


@pytest.fixture
async def seeded(test_db):
    await seed_demo_data(test_db)


async def test_active_employee_green(client, seeded):
    resp = await client.post(URL, json={"NationalNumber": "NAT1001"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["NationalNumber"] == "NAT1001"
    assert body["Username"] == "john_doe"
    assert body["IsActive"] is True
    assert body["TotalSalary"] == 66904.0
    assert body["TaxAmount"] == pytest.approx(4683.28)
    assert body["AverageSalary"] == pytest.approx(5185.06)
    assert body["HighestSalary"] == 6028.0
    assert body["Status"] == "GREEN"
    assert len(body["Salaries"]) == 12
    assert body["Salaries"][0] == {"Amount": 6028.0, "Month": 12, "Year": 2023}


async def test_low_salary_red(client, seeded):
    resp = await client.post(URL, json={"NationalNumber": "NAT1009"})
    assert resp.status_code == 200
    assert resp.json()["Status"] == "RED"


async def test_camel_case_field_and_lowercase_key(client, seeded):
    resp = await client.post(URL, json={"nationalNumber": " nat1001 "})
    assert resp.status_code == 200
    assert resp.json()["NationalNumber"] == "NAT1001"


async def test_inactive_employee_406(client, seeded):
    resp = await client.post(URL, json={"NationalNumber": "NAT1003"})
    assert resp.status_code == 406
    error = resp.json()["error"]
    assert error["code"] == "INACTIVE"
    assert error["message"] == "User is not active"


async def test_insufficient_history_422(client, seeded):
    resp = await client.post(URL, json={"NationalNumber": "NAT1005"})
    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "INSUFFICIENT_DATA"


async def test_unknown_employee_404(client, seeded):
    resp = await client.post(URL, json={"NationalNumber": "ZZZ9999"})
    assert resp.status_code == 404
    error = resp.json()["error"]
    assert error["code"] == "NOT_FOUND"
    assert error["context"]["national_key"] == "ZZZ9999"


async def test_malformed_key_400(client, seeded):
    resp = await client.post(URL, json={"NationalNumber": "NOTFOUND9"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_INPUT"


async def test_missing_field_400(client):
    resp = await client.post(URL, json={})
    assert resp.status_code == 400
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    assert error["details"]


async def test_result_cached_then_served_from_cache(client, seeded, connected_cache, fake_redis):
    first = await client.post(URL, json={"NationalNumber": "NAT1001"})
    assert "employee:NAT1001" in fake_redis.store
    assert fake_redis.ttls["employee:NAT1001"] == 3600

    # a cached entry wins over the database from now on
    cached = first.json()
    cached["Status"] = "ORANGE"
    await connected_cache.set("employee:NAT1001", cached)

    second = await client.post(URL, json={"NationalNumber": "NAT1001"})
    assert second.status_code == 200
    assert second.json()["Status"] == "ORANGE"


async def test_failures_not_cached(client, seeded, connected_cache, fake_redis):
    resp = await client.post(URL, json={"NationalNumber": "NAT1003"})
    assert resp.status_code == 406
    assert fake_redis.store == {}


async def test_data_access_failure_500(client):
    def failing_service():
        return EmployeeStatusService(
            FakeRecordStore(failures=-1),
            CacheLayer(),
            retry_policy=RetryPolicy(max_attempts=3, initial_delay_ms=1),
            sleep=RecordingSleep(),
        )

    app.dependency_overrides[get_employee_status_service] = failing_service
    resp = await client.post(URL, json={"NationalNumber": "NAT1001"})

    assert resp.status_code == 500
    error = resp.json()["error"]
    assert error["code"] == "DATA_ACCESS_FAILURE"
    assert "database connection lost" not in resp.text


async def test_unexpected_error_is_generic_500():
    class BrokenService:
        async def get_employee_status(self, national_key, defer=None):
            raise RuntimeError("secret internals")

    app.dependency_overrides[get_employee_status_service] = lambda: BrokenService()
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as c:
            resp = await c.post(URL, json={"NationalNumber": "NAT1001"})
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json()["error"]["code"] == "INTERNAL_ERROR"
    assert "secret internals" not in resp.text
