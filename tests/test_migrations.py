"""Migration tests: the revision enforces the storage-layer invariants."""

from __future__ import annotations

import importlib.util
from collections.abc import Iterator
from pathlib import Path
from types import ModuleType

import pytest
import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations

_VERSIONS_DIR = Path(__file__).resolve().parents[1] / "alembic" / "versions"


def _load_revision(filename: str) -> ModuleType:
    spec = importlib.util.spec_from_file_location(
        filename.removesuffix(".py"), _VERSIONS_DIR / filename
    )
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def engine(tmp_path) -> Iterator[sa.Engine]:
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'migrations.sqlite3'}")
    yield engine
    engine.dispose()


def _upgrade(engine: sa.Engine) -> None:
    revision = _load_revision("0001_create_patients.py")
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            revision.upgrade()


def _insert(conn: sa.Connection, *, patient_id: str, email: str) -> None:
    conn.execute(
        sa.text(
            "INSERT INTO patients (id, name, email, address, date_of_birth, registered_date) "
            "VALUES (:id, 'Ana', :email, '1 Main St', '1990-01-01', '2024-01-01')"
        ),
        {"id": patient_id, "email": email},
    )


def test_upgrade_creates_unique_email_index(engine: sa.Engine) -> None:
    _upgrade(engine)

    indexes = {ix["name"]: ix for ix in sa.inspect(engine).get_indexes("patients")}
    assert indexes["uq_patients_email"]["unique"]
    assert indexes["uq_patients_email"]["column_names"] == ["email"]

    with engine.begin() as conn:
        _insert(conn, patient_id="a" * 32, email="ana@x.com")
    with pytest.raises(sa.exc.IntegrityError):
        with engine.begin() as conn:
            _insert(conn, patient_id="b" * 32, email="ana@x.com")


def test_registered_date_is_immutable(engine: sa.Engine) -> None:
    _upgrade(engine)
    with engine.begin() as conn:
        _insert(conn, patient_id="a" * 32, email="ana@x.com")
        # Other columns stay writable.
        conn.execute(sa.text("UPDATE patients SET name = 'Ana Lima'"))

    with pytest.raises(sa.exc.DatabaseError, match="registered_date_immutable"):
        with engine.begin() as conn:
            conn.execute(sa.text("UPDATE patients SET registered_date = '2025-01-01'"))


def test_downgrade_drops_table(engine: sa.Engine) -> None:
    _upgrade(engine)
    revision = _load_revision("0001_create_patients.py")
    with engine.begin() as conn:
        with Operations.context(MigrationContext.configure(conn)):
            revision.downgrade()

    assert "patients" not in sa.inspect(engine).get_table_names()
