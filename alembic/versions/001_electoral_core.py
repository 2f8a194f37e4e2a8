"""
============================================================
CRC CARD (Class / Responsibilities / Collaborators)
============================================================
Class: 001_electoral_core (Alembic Migration)

Responsibilities:
  - Create the schema the electoral core reads and writes:
      user_roles, aspirant_positions, aspirant_applications,
      candidates, audit_logs.
  - Make audit_logs append-only at the database level.

Collaborators:
  - PostgreSQL 14+ (gen_random_uuid, identity columns)
  - infrastructure/repositories/postgres/* (use this schema as contract)

Policy:
  - Baseline migration. Downgrade drops everything it created.
  - Naming convention:
      pk_<table>, uq_<table>_<col>, ix_<table>_<col>,
      fk_<table>_<col>__<ref_table>, ck_<table>_<rule>
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_electoral_core"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_ROLES = ("admin", "aspirant", "voter")

_DEPARTMENTS = (
    "Nursing Sciences",
    "Medical Laboratory Sciences",
    "Community Medicine and Public Health",
    "Medicine and Surgery",
    "Human Anatomy",
    "Human Physiology",
    "Medical Biochemistry",
)

_STATUSES = ("submitted", "under_review", "screened", "promoted", "disqualified")


def _in_list(column: str, values: Sequence[str]) -> str:
    quoted = ", ".join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # =========================================================
    # 1) ROLE ASSIGNMENTS (read-only for the core)
    # =========================================================
    op.create_table(
        "user_roles",
        sa.Column(
            "id",
            postgresql.UUID(as_uuid=True),
            server_default=sa.text("gen_random_uuid()"),
            nullable=False,
        ),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("role", sa.String(50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_user_roles"),
        sa.UniqueConstraint("user_id", "role", name="uq_user_roles_user_id_role"),
        sa.CheckConstraint(_in_list("role", _ROLES), name="ck_user_roles_role"),
    )

    # =========================================================
    # 2) POSITIONS (reference data)
    # =========================================================
    op.create_table(
        "aspirant_positions",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("position_name", sa.String(255), nullable=False),
        sa.Column(
            "min_cgpa",
            sa.Numeric(3, 2),
            server_default=sa.text("0"),
            nullable=False,
        ),
        sa.Column(
            "is_active", sa.Boolean, server_default=sa.text("true"), nullable=False
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_aspirant_positions"),
        sa.UniqueConstraint("position_name", name="uq_aspirant_positions_position_name"),
        sa.CheckConstraint(
            "min_cgpa >= 0 AND min_cgpa <= 5", name="ck_aspirant_positions_min_cgpa"
        ),
    )

    # =========================================================
    # 3) ASPIRANT APPLICATIONS (lifecycle)
    # =========================================================
    op.create_table(
        "aspirant_applications",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("matric", sa.String(20), nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column("position_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("cgpa", sa.Numeric(3, 2), nullable=False),
        sa.Column(
            "status",
            sa.String(30),
            server_default=sa.text("'submitted'"),
            nullable=False,
        ),
        sa.Column(
            "is_public", sa.Boolean, server_default=sa.text("false"), nullable=False
        ),
        sa.Column(
            "payment_verified",
            sa.Boolean,
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("screening_slot", sa.DateTime(timezone=True), nullable=True),
        sa.Column("screening_result", sa.String(10), nullable=True),
        sa.Column("disqualification_reason", sa.Text, nullable=True),
        sa.Column("admin_notes", sa.Text, nullable=True),
        *_timestamps(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_aspirant_applications"),
        sa.ForeignKeyConstraint(
            ["position_id"],
            ["aspirant_positions.id"],
            name="fk_aspirant_applications_position_id__aspirant_positions",
        ),
        sa.CheckConstraint(
            "cgpa >= 2 AND cgpa <= 5", name="ck_aspirant_applications_cgpa"
        ),
        sa.CheckConstraint(
            _in_list("status", _STATUSES), name="ck_aspirant_applications_status"
        ),
        sa.CheckConstraint(
            _in_list("department", _DEPARTMENTS),
            name="ck_aspirant_applications_department",
        ),
        sa.CheckConstraint(
            "screening_result IS NULL OR screening_result IN ('passed', 'failed')",
            name="ck_aspirant_applications_screening_result",
        ),
    )
    op.create_index(
        "ix_aspirant_applications_status", "aspirant_applications", ["status"]
    )
    op.create_index(
        "ix_aspirant_applications_position_id",
        "aspirant_applications",
        ["position_id"],
    )

    # =========================================================
    # 4) CANDIDATES (created by promotion)
    # =========================================================
    op.create_table(
        "candidates",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("aspirant_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("matric", sa.String(20), nullable=False),
        sa.Column("department", sa.String(100), nullable=False),
        sa.Column("position_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_candidates"),
        sa.UniqueConstraint("aspirant_id", name="uq_candidates_aspirant_id"),
        sa.ForeignKeyConstraint(
            ["aspirant_id"],
            ["aspirant_applications.id"],
            name="fk_candidates_aspirant_id__aspirant_applications",
        ),
        sa.ForeignKeyConstraint(
            ["position_id"],
            ["aspirant_positions.id"],
            name="fk_candidates_position_id__aspirant_positions",
        ),
    )

    # =========================================================
    # 5) AUDIT LOGS (append-only)
    # =========================================================
    op.create_table(
        "audit_logs",
        sa.Column("seq", sa.BigInteger, sa.Identity(always=True), nullable=False),
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("entity_type", sa.String(100), nullable=True),
        sa.Column("entity_id", sa.String(255), nullable=True),
        sa.Column(
            "details",
            postgresql.JSONB,
            server_default=sa.text("'{}'::jsonb"),
            nullable=False,
        ),
        sa.Column("ip_address", sa.String(64), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_audit_logs"),
        sa.UniqueConstraint("seq", name="uq_audit_logs_seq"),
        sa.CheckConstraint("length(user_id) > 0", name="ck_audit_logs_user_id"),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"])
    op.create_index("ix_audit_logs_action", "audit_logs", ["action"])
    op.create_index(
        "ix_audit_logs_entity", "audit_logs", ["entity_type", "entity_id"]
    )
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"])

    op.execute(
        """
        CREATE FUNCTION audit_logs_reject_change() RETURNS trigger AS $$
        BEGIN
            RAISE EXCEPTION 'audit_logs is append-only';
        END;
        $$ LANGUAGE plpgsql
        """
    )
    op.execute(
        """
        CREATE TRIGGER trg_audit_logs_append_only
        BEFORE UPDATE OR DELETE ON audit_logs
        FOR EACH ROW EXECUTE FUNCTION audit_logs_reject_change()
        """
    )


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trg_audit_logs_append_only ON audit_logs")
    op.execute("DROP FUNCTION IF EXISTS audit_logs_reject_change()")
    op.drop_table("audit_logs")
    op.drop_table("candidates")
    op.drop_table("aspirant_applications")
    op.drop_table("aspirant_positions")
    op.drop_table("user_roles")
