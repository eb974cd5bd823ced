"""Test helpers for the patients slice."""

from __future__ import annotations

from typing import Any

from starlette.testclient import TestClient


def patient_payload(
    *,
    name: str = "Ana Souza",
    email: str = "ana@example.com",
    address: str = "1 Main St",
    date_of_birth: str = "1990-01-01",
) -> dict[str, Any]:
    return {"name": name, "email": email, "address": address, "dateOfBirth": date_of_birth}


def create_patient(*, client: TestClient, **fields: str) -> dict[str, Any]:
    """Create a patient and return its view."""
    # Safety: never follow redirects on POST. A 307/308 would re-POST and can create duplicates.
    res = client.post("/patients", json=patient_payload(**fields), follow_redirects=False)
    assert res.status_code == 201, res.text
    return res.json()
