from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, status

from patient_service.api.schemas import ErrorOut
from patient_service.patients.deps import get_patient_service
from patient_service.patients.schemas import PatientRequest, PatientResponse
from patient_service.patients.service import PatientService

router = APIRouter(prefix="/patients", tags=["patients"])

_STORE_UNAVAILABLE = {503: {"model": ErrorOut, "description": "Patient store unavailable"}}
_INVALID_INPUT = {400: {"model": ErrorOut, "description": "Invalid input data"}}
_NOT_FOUND = {404: {"model": ErrorOut, "description": "Patient not found"}}
_EMAIL_CONFLICT = {409: {"model": ErrorOut, "description": "Email already in use"}}


@router.get(
    "",
    response_model=list[PatientResponse],
    summary="Retrieve all patients",
    responses={**_STORE_UNAVAILABLE},
)
async def get_patients(
    service: PatientService = Depends(get_patient_service),
) -> list[PatientResponse]:
    return await service.list_patients()


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=PatientResponse,
    summary="Create a new patient record",
    responses={**_INVALID_INPUT, **_EMAIL_CONFLICT, **_STORE_UNAVAILABLE},
)
async def create_patient_route(
    payload: PatientRequest,
    service: PatientService = Depends(get_patient_service),
) -> PatientResponse:
    return await service.create_patient(payload=payload)


@router.put(
    "/{patient_id}",
    response_model=PatientResponse,
    summary="Update an existing patient record",
    responses={**_INVALID_INPUT, **_NOT_FOUND, **_EMAIL_CONFLICT, **_STORE_UNAVAILABLE},
)
async def update_patient_by_id(
    patient_id: uuid.UUID,
    payload: PatientRequest,
    service: PatientService = Depends(get_patient_service),
) -> PatientResponse:
    return await service.update_patient(patient_id=patient_id, payload=payload)


@router.delete(
    "/{patient_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_model=None,
    summary="Delete a patient record",
    responses={**_NOT_FOUND, **_STORE_UNAVAILABLE},
)
async def delete_patient_by_id(
    patient_id: uuid.UUID,
    service: PatientService = Depends(get_patient_service),
) -> None:
    await service.delete_patient(patient_id=patient_id)
    return None
