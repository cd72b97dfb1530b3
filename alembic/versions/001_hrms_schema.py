"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_hrms_schema (Alembic Migration)

Responsibilities:
  - Crear el esquema completo del HRMS desde cero.
  - Definir tablas, constraints e índices que los repositorios asumen.
  - Sembrar el catálogo de departamentos por defecto.

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Convención de nombres (constraints / indexes):
      pk_<tabla>                         - Primary keys
      uq_<tabla>_<col>                   - Unique constraints
      ix_<tabla>_<col>                   - Indexes
      fk_<tabla>_<col>__<ref_tabla>      - Foreign keys
  - Emails únicos sin distinguir mayúsculas (índice sobre lower(email)).
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_hrms_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DEFAULT_DEPARTMENTS = (
    ("Information Technology", "Software Development, IT Support, and System Administration"),
    ("Human Resources", "Recruitment, Employee Relations, and HR Operations"),
    ("Finance & Accounting", "Financial Planning, Accounting, and Budget Management"),
    ("Sales & Marketing", "Sales Operations, Digital Marketing, and Brand Management"),
    ("Operations", "Business Operations, Process Management, and Quality Assurance"),
    ("Customer Support", "Customer Service, Technical Support, and Client Relations"),
    ("Research & Development", "Product Development, Innovation, and Technical Research"),
    ("Legal & Compliance", "Legal Affairs, Regulatory Compliance, and Risk Management"),
    ("Supply Chain", "Procurement, Logistics, and Inventory Management"),
    ("Product Management", "Product Strategy, Roadmap Planning, and Market Analysis"),
)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def upgrade() -> None:
    """
    Orden por dependencias:
      1) Departments
      2) Users (identity + registro de empleado)
      3) Attendance (log append-only)
      4) Leaves
      5) Performance reviews
      6) Seed de departamentos
    """

    # =========================================================
    # 1) DEPARTMENTS
    # =========================================================
    departments = op.create_table(
        "departments",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_departments"),
        sa.UniqueConstraint("name", name="uq_departments_name"),
    )

    # =========================================================
    # 2) USERS
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100), nullable=False),
        sa.Column(
            "role",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'employee'"),
        ),
        sa.Column("department_id", sa.Integer, nullable=True),
        sa.Column("position", sa.String(100), nullable=True),
        sa.Column(
            "hire_date", sa.Date, nullable=True, server_default=sa.text("CURRENT_DATE")
        ),
        sa.Column(
            "salary",
            sa.Numeric(10, 2),
            nullable=False,
            server_default=sa.text("0"),
        ),
        sa.Column("phone", sa.String(20), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column(
            "is_active", sa.Boolean, nullable=False, server_default=sa.text("true")
        ),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.ForeignKeyConstraint(
            ["department_id"],
            ["departments.id"],
            name="fk_users_department_id__departments",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "role IN ('employee', 'admin', 'manager')", name="ck_users_role"
        ),
    )
    op.create_index(
        "uq_users_email_lower",
        "users",
        [sa.text("lower(email)")],
        unique=True,
    )
    op.create_index("ix_users_department_id", "users", ["department_id"])

    # =========================================================
    # 3) ATTENDANCE
    # =========================================================
    op.create_table(
        "attendance",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Checked In'"),
        ),
        sa.Column(
            "check_time",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("notes", sa.Text, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_attendance"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_attendance_user_id__users",
            ondelete="CASCADE",
        ),
        sa.CheckConstraint(
            "status IN ('Checked In', 'Checked Out')", name="ck_attendance_status"
        ),
    )
    # Consulta "último registro de hoy" por usuario.
    op.create_index(
        "ix_attendance_user_id_check_time", "attendance", ["user_id", "check_time"]
    )

    # =========================================================
    # 4) LEAVES
    # =========================================================
    op.create_table(
        "leaves",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("user_id", sa.Integer, nullable=False),
        sa.Column("leave_type", sa.String(50), nullable=False),
        sa.Column("start_date", sa.Date, nullable=False),
        sa.Column("end_date", sa.Date, nullable=False),
        sa.Column("reason", sa.Text, nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'pending'"),
        ),
        sa.Column("approved_by", sa.Integer, nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_leaves"),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_leaves_user_id__users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["approved_by"],
            ["users.id"],
            name="fk_leaves_approved_by__users",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "status IN ('pending', 'approved', 'rejected')", name="ck_leaves_status"
        ),
    )
    op.create_index("ix_leaves_user_id", "leaves", ["user_id"])
    op.create_index("ix_leaves_status", "leaves", ["status"])

    # =========================================================
    # 5) PERFORMANCE REVIEWS
    # =========================================================
    op.create_table(
        "performance_reviews",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("employee_id", sa.Integer, nullable=False),
        sa.Column("reviewer_id", sa.Integer, nullable=True),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comments", sa.Text, nullable=True),
        sa.Column(
            "review_date",
            sa.DateTime(),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.PrimaryKeyConstraint("id", name="pk_performance_reviews"),
        sa.ForeignKeyConstraint(
            ["employee_id"],
            ["users.id"],
            name="fk_performance_reviews_employee_id__users",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["reviewer_id"],
            ["users.id"],
            name="fk_performance_reviews_reviewer_id__users",
            ondelete="SET NULL",
        ),
        sa.CheckConstraint(
            "rating >= 1 AND rating <= 5", name="ck_performance_reviews_rating"
        ),
    )
    op.create_index(
        "ix_performance_reviews_employee_id", "performance_reviews", ["employee_id"]
    )

    # =========================================================
    # 6) SEED
    # =========================================================
    op.bulk_insert(
        departments,
        [{"name": name, "description": description} for name, description in DEFAULT_DEPARTMENTS],
    )


def downgrade() -> None:
    op.drop_table("performance_reviews")
    op.drop_table("leaves")
    op.drop_table("attendance")
    op.drop_table("users")
    op.drop_table("departments")
