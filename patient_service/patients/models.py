from __future__ import annotations

import uuid
from datetime import date

from sqlalchemy import Date, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from patient_service.core.db import Base

NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 320


class Patient(Base):
    """
    Persisted patient record.

    Storage rules:
    - `email` is unique; the unique index is the authoritative guard against races
      between the service-level existence check and the write.
    - `registered_date` is set once at creation and never updated.
    """

    __tablename__ = "patients"
    __table_args__ = (Index("uq_patients_email", "email", unique=True),)

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    email: Mapped[str] = mapped_column(String(EMAIL_MAX_LENGTH), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    registered_date: Mapped[date] = mapped_column(Date, nullable=False)
