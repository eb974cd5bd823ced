from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from patient_service.core.db import get_session
from patient_service.patients.service import PatientService
from patient_service.patients.store import PatientStore, SqlAlchemyPatientStore


def get_patient_store(session: AsyncSession = Depends(get_session)) -> PatientStore:
    """Dependency provider for the request-scoped patient store."""
    return SqlAlchemyPatientStore(session=session)


def get_patient_service(store: PatientStore = Depends(get_patient_store)) -> PatientService:
    return PatientService(store=store)
