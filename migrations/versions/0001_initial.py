"""initial schema: appointments, clinic configuration, users

Revision ID: 0001_initial
Revises:
Create Date: 2026-10-19 09:00:00
"""
from alembic import op
import sqlalchemy as sa

revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("patient_name", sa.String(255), nullable=False),
        sa.Column("contact_info", sa.String(255), nullable=False),
        sa.Column("date", sa.DateTime(), nullable=False),
        sa.Column("service_type", sa.String(64), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_appointments_id", "appointments", ["id"])
    op.create_index("ix_appointments_patient_name", "appointments", ["patient_name"])
    op.create_index("ix_appointments_date", "appointments", ["date"])
    op.create_index("ix_appointments_service_type", "appointments", ["service_type"])
    op.create_index("ix_appointments_created_at", "appointments", ["created_at"])

    op.create_table(
        "clinic_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("is_open", sa.Boolean(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )
    op.create_index("ix_clinic_settings_id", "clinic_settings", ["id"])

    op.create_table(
        "clinic_timings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("day", sa.String(10), nullable=False),
        sa.Column("open_hour", sa.Integer(), nullable=False),
        sa.Column("close_hour", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.CheckConstraint("open_hour >= 0 AND open_hour <= 23", name="ck_clinic_timings_open_hour"),
        sa.CheckConstraint("close_hour >= 0 AND close_hour <= 23", name="ck_clinic_timings_close_hour"),
        sa.CheckConstraint("open_hour < close_hour", name="ck_clinic_timings_order"),
    )
    op.create_index("ix_clinic_timings_id", "clinic_timings", ["id"])
    op.create_index("ix_clinic_timings_day", "clinic_timings", ["day"], unique=True)

    for table in ("user_profiles", "role_assignments"):
        extra = (
            [sa.Column("name", sa.String(255), nullable=False)]
            if table == "user_profiles"
            else [sa.Column("role", sa.String(20), nullable=False)]
        )
        op.create_table(
            table,
            sa.Column("id", sa.Integer(), primary_key=True),
            sa.Column("principal", sa.String(255), nullable=False),
            *extra,
            sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        )
        op.create_index(f"ix_{table}_id", table, ["id"])
        op.create_index(f"ix_{table}_principal", table, ["principal"], unique=True)
    op.create_index("ix_role_assignments_role", "role_assignments", ["role"])


def downgrade() -> None:
    op.drop_table("role_assignments")
    op.drop_table("user_profiles")
    op.drop_table("clinic_timings")
    op.drop_table("clinic_settings")
    op.drop_table("appointments")
