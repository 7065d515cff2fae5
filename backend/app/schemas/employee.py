"""Employee Schemas: Pydantic models for the GetEmpStatus request and response.

Invariants:
    - Request accepts "NationalNumber" or "nationalNumber"; the format itself is
      checked by the service so a bad key maps to INVALID_INPUT, not VALIDATION_ERROR
    - Response field names are PascalCase exactly as published
"""

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class EmpStatusRequest(BaseModel):
    """Body of POST /api/GetEmpStatus."""
    model_config = ConfigDict(populate_by_name=True)

    national_number: str = Field(
        min_length=1,
        max_length=64,
        validation_alias=AliasChoices("NationalNumber", "nationalNumber"),
        serialization_alias="NationalNumber",
    )


class SalaryEntry(BaseModel):
    Amount: float
    Month: int
    Year: int


class EmpStatusResponse(BaseModel):
    """Computed status, as returned to clients and stored in the cache."""
    ID: str
    Username: str
    NationalNumber: str
    Email: str
    Phone: str
    IsActive: bool
    Salaries: list[SalaryEntry]
    TotalSalary: float
    AverageSalary: float
    HighestSalary: float
    TaxAmount: float
    Status: Literal["GREEN", "ORANGE", "RED"]
    LastUpdated: str


class CacheInvalidationResponse(BaseModel):
    status: Literal["accepted"] = "accepted"
    scope: str
    deleted: int | None = None
