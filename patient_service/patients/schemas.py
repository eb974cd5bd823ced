from __future__ import annotations

from typing import Any

from email_validator import EmailNotValidError, validate_email
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)
from pydantic_core import PydanticCustomError

from patient_service.patients.models import NAME_MAX_LENGTH


def _require_text(value: Any, *, message: str) -> Any:
    # Blank (whitespace-only) text counts as missing.
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("required", message)
    return value


class PatientRequest(BaseModel):
    """
    Create/update payload.

    Every field is required on both create and update: an update replaces the whole
    record except its id and registration date. `dateOfBirth` stays text here and is
    parsed by the mapper so malformed dates surface as `invalid_date_format`.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(
        description=f"Patient name (at most {NAME_MAX_LENGTH} characters).",
        examples=["Ana Souza"],
    )
    email: str = Field(
        description="Contact email. Must be unique across all patients.",
        examples=["ana@example.com"],
    )
    address: str = Field(
        description="Postal address (free form).",
        examples=["1 Main St"],
    )
    date_of_birth: str = Field(
        validation_alias=AliasChoices("dateOfBirth", "date_of_birth"),
        serialization_alias="dateOfBirth",
        description="Date of birth in ISO format (YYYY-MM-DD).",
        examples=["1990-01-01"],
    )

    @model_validator(mode="before")
    @classmethod
    def _fill_absent_fields(cls, data: Any) -> Any:
        # Absent keys become None so the field validators report "<Field> is required"
        # instead of pydantic's generic "Field required".
        if not isinstance(data, dict):
            return data
        filled = dict(data)
        for key in ("name", "email", "address"):
            filled.setdefault(key, None)
        if "dateOfBirth" not in filled and "date_of_birth" not in filled:
            filled["dateOfBirth"] = None
        return filled

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, value: Any) -> Any:
        value = _require_text(value, message="Name is required")
        if isinstance(value, str) and len(value) > NAME_MAX_LENGTH:
            raise PydanticCustomError(
                "too_long", f"Name cannot exceed {NAME_MAX_LENGTH} characters"
            )
        return value

    @field_validator("email", mode="before")
    @classmethod
    def _require_email(cls, value: Any) -> Any:
        return _require_text(value, message="Email is required")

    @field_validator("email")
    @classmethod
    def _validate_email_syntax(cls, value: str) -> str:
        try:
            validate_email(value, check_deliverability=False)
        except EmailNotValidError:
            raise PydanticCustomError("email", "Email should be valid") from None
        # Stored as submitted; uniqueness compares the exact text.
        return value

    @field_validator("address", mode="before")
    @classmethod
    def _require_address(cls, value: Any) -> Any:
        return _require_text(value, message="Address is required")

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _require_date_of_birth(cls, value: Any) -> Any:
        return _require_text(value, message="Date of birth is required")


class PatientResponse(BaseModel):
    """External view of a patient. The registration date is internal and not exposed."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Patient identifier (UUID).")
    name: str = Field(description="Patient name.")
    address: str = Field(description="Postal address.")
    email: str = Field(description="Contact email.")
    date_of_birth: str = Field(alias="dateOfBirth", description="Date of birth (YYYY-MM-DD).")
