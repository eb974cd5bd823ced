from __future__ import annotations

import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Protocol

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.domain.exceptions import EmailAlreadyExistsError, StoreUnavailableError
from patient_service.patients.models import Patient


class PatientStore(Protocol):
    async def find_all(self) -> list[Patient]: ...

    async def find_by_id(self, patient_id: uuid.UUID) -> Patient | None: ...

    async def exists_by_email(self, email: str) -> bool: ...

    async def save(self, patient: Patient) -> Patient: ...

    async def delete_by_id(self, patient_id: uuid.UUID) -> None: ...


@contextmanager
def _store_errors() -> Iterator[None]:
    """Translate connectivity faults into `StoreUnavailableError`."""
    try:
        yield
    except (OperationalError, InterfaceError) as exc:
        raise StoreUnavailableError() from exc


def _is_email_conflict(exc: IntegrityError) -> bool:
    # PostgreSQL names the index; SQLite names the column ("UNIQUE constraint failed:
    # patients.email").
    message = str(exc.orig)
    return "uq_patients_email" in message or "patients.email" in message


class SqlAlchemyPatientStore:
    """
    `PatientStore` backed by an `AsyncSession`.

    Each write commits on its own; the database provides single-row atomicity and the
    email unique index.
    """

    def __init__(self, *, session: AsyncSession):
        self._session = session

    async def find_all(self) -> list[Patient]:
        with _store_errors():
            result = await self._session.execute(select(Patient))
            return list(result.scalars().all())

    async def find_by_id(self, patient_id: uuid.UUID) -> Patient | None:
        with _store_errors():
            return await self._session.get(Patient, patient_id)

    async def exists_by_email(self, email: str) -> bool:
        stmt = select(Patient.id).where(Patient.email == email).limit(1)
        with _store_errors():
            row = (await self._session.execute(stmt)).first()
        return row is not None

    async def save(self, patient: Patient) -> Patient:
        # `add` is a no-op for records already attached to this session (updates).
        self._session.add(patient)
        with _store_errors():
            try:
                await self._session.commit()
            except IntegrityError as exc:
                await self._session.rollback()
                if not _is_email_conflict(exc):
                    raise
                # Lost a race against a concurrent write with the same email.
                raise EmailAlreadyExistsError("A patient with this email already exists") from None
            await self._session.refresh(patient)
        return patient

    async def delete_by_id(self, patient_id: uuid.UUID) -> None:
        with _store_errors():
            await self._session.execute(delete(Patient).where(Patient.id == patient_id))
            await self._session.commit()
