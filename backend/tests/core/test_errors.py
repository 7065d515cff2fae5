"""Error Taxonomy: kind-to-status mapping and the REST error body.

Tests:
    - Every ErrorKind maps to its documented HTTP status
    - Subclasses fill in kind and message
    - to_response() carries code, category, severity and national_key only
"""

import pytest

from app.core.errors import (
    DataAccessError,
    EmployeeNotFoundError,
    EmpStatusError,
    ErrorCategory,
    ErrorContext,
    ErrorKind,
    ErrorSeverity,
    InactiveEmployeeError,
    InsufficientDataError,
    InvalidInputError,
)


@pytest.mark.parametrize("error, status", [
    (InvalidInputError("bad key"), 400),
    (EmployeeNotFoundError("NAT9999"), 404),
    (InactiveEmployeeError(), 406),
    (InsufficientDataError(2, 3), 422),
    (DataAccessError("find"), 500),
])
def test_http_status_per_kind(error, status):
    assert error.http_status == status


def test_client_and_server_errors():
    assert InvalidInputError("bad").is_client_error is True
    assert InactiveEmployeeError().is_client_error is True
    assert DataAccessError("find").is_client_error is False


def test_not_found_message_names_the_key():
    err = EmployeeNotFoundError("NAT9999")
    assert err.kind is ErrorKind.NOT_FOUND
    assert err.message == "User with NationalNumber 'NAT9999' not found"
    assert isinstance(err, EmpStatusError)


def test_inactive_message():
    err = InactiveEmployeeError()
    assert err.code == "INACTIVE"
    assert err.message == "User is not active"
    assert err.category is ErrorCategory.BUSINESS_RULE


def test_insufficient_data_keeps_count():
    err = InsufficientDataError(2, 3)
    assert err.count == 2
    assert "minimum 3" in err.message
    assert "found 2" in err.message


def test_data_access_error_records_operation():
    ctx = ErrorContext(national_key="NAT1001")
    err = DataAccessError("get_employee_with_salaries(NAT1001)", ctx)
    assert err.context.operation == "get_employee_with_salaries(NAT1001)"
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.http_status == 500


def test_to_response_shape():
    ctx = ErrorContext(national_key="NAT1001", operation="find(secret)")
    body = InactiveEmployeeError(ctx).to_response()
    error = body["error"]
    assert error["code"] == "INACTIVE"
    assert error["message"] == "User is not active"
    assert error["category"] == "business_rule"
    assert error["severity"] == "warning"
    assert error["context"] == {"national_key": "NAT1001"}
    assert "secret" not in str(body)
    assert error["timestamp"] == ctx.timestamp.isoformat()
