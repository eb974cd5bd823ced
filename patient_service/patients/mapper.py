"""Translation between the external patient shapes and the persisted record.

Pure functions: no I/O, no session access.
"""

from __future__ import annotations

import re
from datetime import date

from patient_service.domain.exceptions import InvalidDateFormatError
from patient_service.patients.models import Patient
from patient_service.patients.schemas import PatientRequest, PatientResponse

# date.fromisoformat also accepts e.g. "19900101" on newer Pythons; only the
# extended calendar form is part of the contract.
_ISO_DATE_PATTERN = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")


def parse_date_of_birth(raw: str) -> date:
    if not _ISO_DATE_PATTERN.fullmatch(raw):
        raise InvalidDateFormatError("dateOfBirth must be an ISO-8601 date (YYYY-MM-DD).")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise InvalidDateFormatError(
            "dateOfBirth must be an ISO-8601 date (YYYY-MM-DD)."
        ) from None


def to_view(patient: Patient) -> PatientResponse:
    return PatientResponse(
        id=str(patient.id),
        name=patient.name,
        address=patient.address,
        email=patient.email,
        date_of_birth=patient.date_of_birth.isoformat(),
    )


def to_record(payload: PatientRequest) -> Patient:
    """Build an unsaved record; the store assigns `id` on insert."""
    return Patient(
        name=payload.name,
        address=payload.address,
        email=payload.email,
        date_of_birth=parse_date_of_birth(payload.date_of_birth),
        registered_date=date.today(),
    )
