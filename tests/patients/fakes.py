"""In-memory `PatientStore` doubles for service tests."""

from __future__ import annotations

import uuid

from patient_service.domain.exceptions import StoreUnavailableError
from patient_service.patients.models import Patient


class InMemoryPatientStore:
    def __init__(self) -> None:
        self.patients: dict[uuid.UUID, Patient] = {}
        self.save_calls = 0
        self.delete_calls = 0

    async def find_all(self) -> list[Patient]:
        return list(self.patients.values())

    async def find_by_id(self, patient_id: uuid.UUID) -> Patient | None:
        return self.patients.get(patient_id)

    async def exists_by_email(self, email: str) -> bool:
        return any(p.email == email for p in self.patients.values())

    async def save(self, patient: Patient) -> Patient:
        self.save_calls += 1
        if patient.id is None:
            patient.id = uuid.uuid4()
        self.patients[patient.id] = patient
        return patient

    async def delete_by_id(self, patient_id: uuid.UUID) -> None:
        self.delete_calls += 1
        self.patients.pop(patient_id, None)


class UnavailablePatientStore:
    async def find_all(self) -> list[Patient]:
        raise StoreUnavailableError()

    async def find_by_id(self, patient_id: uuid.UUID) -> Patient | None:
        raise StoreUnavailableError()

    async def exists_by_email(self, email: str) -> bool:
        raise StoreUnavailableError()

    async def save(self, patient: Patient) -> Patient:
        raise StoreUnavailableError()

    async def delete_by_id(self, patient_id: uuid.UUID) -> None:
        raise StoreUnavailableError()
