"""create patients table

Revision ID: 0001_create_patients
Revises:
Create Date: 2026-10-19

- `uq_patients_email` is the authoritative email uniqueness guard; the service-level
  existence check only produces a cleaner error before the write.
- `registered_date` is immutable once written (enforced with a DB trigger where possible).
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "0001_create_patients"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "patients",
        sa.Column("id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("date_of_birth", sa.Date(), nullable=False),
        sa.Column("registered_date", sa.Date(), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_patients")),
    )
    op.create_index("uq_patients_email", "patients", ["email"], unique=True)

    bind = op.get_bind()
    dialect = bind.dialect.name

    if dialect == "sqlite":
        op.execute(
            """
            CREATE TRIGGER IF NOT EXISTS patients_registered_date_immutable
            BEFORE UPDATE OF registered_date ON patients
            FOR EACH ROW
            WHEN NEW.registered_date != OLD.registered_date
            BEGIN
              SELECT RAISE(ABORT, 'registered_date_immutable');
            END;
            """
        )
    elif dialect == "postgresql":
        op.execute(
            """
            CREATE OR REPLACE FUNCTION patients_registered_date_immutable_fn()
            RETURNS trigger AS $$
            BEGIN
              IF NEW.registered_date IS DISTINCT FROM OLD.registered_date THEN
                RAISE EXCEPTION 'registered_date_immutable';
              END IF;
              RETURN NEW;
            END;
            $$ LANGUAGE plpgsql;
            """
        )
        op.execute(
            """
            CREATE TRIGGER patients_registered_date_immutable
            BEFORE UPDATE OF registered_date ON patients
            FOR EACH ROW
            EXECUTE FUNCTION patients_registered_date_immutable_fn();
            """
        )


def downgrade() -> None:
    bind = op.get_bind()
    dialect = bind.dialect.name

    if dialect == "sqlite":
        op.execute("DROP TRIGGER IF EXISTS patients_registered_date_immutable;")
    elif dialect == "postgresql":
        op.execute("DROP TRIGGER IF EXISTS patients_registered_date_immutable ON patients;")
        op.execute("DROP FUNCTION IF EXISTS patients_registered_date_immutable_fn();")

    op.drop_index("uq_patients_email", table_name="patients")
    op.drop_table("patients")
