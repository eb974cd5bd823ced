from __future__ import annotations

import logging
import uuid

from patient_service.domain.exceptions import EmailAlreadyExistsError, PatientNotFoundError
from patient_service.patients.mapper import parse_date_of_birth, to_record, to_view
from patient_service.patients.schemas import PatientRequest, PatientResponse
from patient_service.patients.store import PatientStore

# IMPORTANT: log patient ids only, never names, emails, addresses or dates of birth.
logger = logging.getLogger("patient_service.patients")

_EMAIL_IN_USE = "A patient with this email already exists"


class PatientService:
    """
    Business rules for patient records.

    Field-level validation happens at the boundary (`PatientRequest`); this service
    owns email uniqueness, existence checks and the mapping to stored records.
    Store errors propagate unchanged and nothing is retried.

    The email check is a fast path for a clean error. The store's unique index is the
    authoritative guard when two writes race.
    """

    def __init__(self, *, store: PatientStore):
        self._store = store

    async def list_patients(self) -> list[PatientResponse]:
        patients = await self._store.find_all()
        return [to_view(p) for p in patients]

    async def create_patient(self, *, payload: PatientRequest) -> PatientResponse:
        if await self._store.exists_by_email(payload.email):
            raise EmailAlreadyExistsError(_EMAIL_IN_USE)

        patient = await self._store.save(to_record(payload))
        logger.info("Patient created", extra={"patient_id": str(patient.id)})
        return to_view(patient)

    async def update_patient(
        self, *, patient_id: uuid.UUID, payload: PatientRequest
    ) -> PatientResponse:
        patient = await self._store.find_by_id(patient_id)
        if patient is None:
            raise PatientNotFoundError(f"Patient not found with ID: {patient_id}")

        # Keeping one's own email is not a conflict.
        if payload.email != patient.email and await self._store.exists_by_email(payload.email):
            raise EmailAlreadyExistsError(_EMAIL_IN_USE)

        # Parse before mutating so a bad date leaves the record untouched.
        date_of_birth = parse_date_of_birth(payload.date_of_birth)

        patient.name = payload.name
        patient.address = payload.address
        patient.email = payload.email
        patient.date_of_birth = date_of_birth

        updated = await self._store.save(patient)
        logger.info("Patient updated", extra={"patient_id": str(updated.id)})
        return to_view(updated)

    async def delete_patient(self, *, patient_id: uuid.UUID) -> None:
        if await self._store.find_by_id(patient_id) is None:
            raise PatientNotFoundError(f"Patient not found with ID: {patient_id}")

        await self._store.delete_by_id(patient_id)
        logger.info("Patient deleted", extra={"patient_id": str(patient_id)})
