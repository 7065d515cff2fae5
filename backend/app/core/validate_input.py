"""Input Validation: pure predicates over national keys and raw salary tuples.

Invariants:
    - No function raises; callers decide which ErrorKind a rejection becomes
    - validate_salary_shape returns None when valid, else an error dict for the
      FIRST offending record only
    - is_active accepts only the literal True (1, "true", "yes" are rejected)
"""

import math
import re
from decimal import Decimal
from typing import Any, Iterable


MIN_SALARY_HISTORY: int = 3
MIN_SALARY_YEAR: int = 2000

_NATIONAL_KEY_RE = re.compile(r"[A-Za-z]{3}[0-9]{4}")


def validate_key_format(key: Any) -> bool:
    """True iff key is 3 letters followed by 4 digits after trimming."""
    if not isinstance(key, str):
        return False
    trimmed = key.strip()
    if not trimmed:
        return False
    return _NATIONAL_KEY_RE.fullmatch(trimmed) is not None


def normalize_key(key: str) -> str:
    """Canonical form used for cache keys and lookups."""
    return key.strip().upper()


def has_minimum_history(count: int) -> bool:
    return count >= MIN_SALARY_HISTORY


def is_active(flag: Any) -> bool:
    return flag is True


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, Decimal):
        return value.is_finite()
    if isinstance(value, (int, float)):
        return not (isinstance(value, float) and (math.isnan(value) or math.isinf(value)))
    return False


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _reject(index: int, error_code: str, message: str) -> dict:
    return {
        "status": "error",
        "error_code": error_code,
        "record_index": index,
        "message": message,
    }


def validate_salary_shape(records: Iterable[Any]) -> dict | None:
    """Check amount/month/year of every record. Short-circuits on first violation."""
    if records is None:
        return _reject(-1, "INVALID_SALARY_LIST", "Salaries must be a list")

    for index, record in enumerate(records):
        amount = getattr(record, "amount", None)
        month = getattr(record, "month", None)
        year = getattr(record, "year", None)

        if not _is_number(amount) or amount < 0:
            return _reject(
                index, "INVALID_SALARY_AMOUNT",
                f"Invalid salary amount at record {index}: {amount!r}",
            )
        if not _is_int(month) or not 1 <= month <= 12:
            return _reject(
                index, "INVALID_SALARY_MONTH",
                f"Invalid month value at record {index}: {month!r}",
            )
        if not _is_int(year) or year < MIN_SALARY_YEAR:
            return _reject(
                index, "INVALID_SALARY_YEAR",
                f"Invalid year value at record {index}: {year!r}",
            )

    return None
