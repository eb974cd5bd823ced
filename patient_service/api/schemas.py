from __future__ import annotations

from pydantic import BaseModel, Field


class HealthOut(BaseModel):
    """Health check response."""

    status: str = Field(
        description="Service status indicator. `ok` means the API process is up and responding.",
        examples=["ok"],
    )


class ErrorOut(BaseModel):
    """Error response body shared by every non-2xx patient response."""

    detail: str = Field(description="Human-readable error message.")
    error: str = Field(
        description="Stable error code clients can branch on.",
        examples=["validation_failed", "email_already_exists", "patient_not_found"],
    )
    errors: dict[str, str] | None = Field(
        default=None,
        description="Per-field messages; present only for `validation_failed`.",
        examples=[{"name": "Name is required"}],
    )
