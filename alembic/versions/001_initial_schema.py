"""Initial YouthConnect schema

Revision ID: 001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
import sqlalchemy as sa
from fastapi_users_db_sqlalchemy.generics import GUID, TIMESTAMPAware

from alembic import op  # type: ignore[attr-defined]

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def _enum() -> sa.String:
    # Enums are stored as plain strings (native_enum=False in the models)
    return sa.String(length=32)


def upgrade() -> None:
    # Create user table (FastAPI Users base table) with the platform role
    op.create_table(
        "user",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("hashed_password", sa.String(length=1024), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("is_superuser", sa.Boolean(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False),
        sa.Column("role", _enum(), nullable=False),
        sa.Column("created_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_user_email"), "user", ["email"], unique=True)
    op.create_index(op.f("ix_user_role"), "user", ["role"], unique=False)

    op.create_table(
        "profile",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("user_id", GUID(), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("city", sa.String(length=120), nullable=True),
        sa.Column("birth_date", sa.Date(), nullable=True),
        sa.Column("education_level", _enum(), nullable=True),
        sa.Column("experience_level", _enum(), nullable=True),
        sa.Column("skills", sa.JSON(), nullable=False),
        sa.Column("interests", sa.JSON(), nullable=False),
        sa.Column("industry", sa.String(length=120), nullable=True),
        sa.Column("salary_expectation", sa.Float(), nullable=True),
        sa.Column("work_modality", _enum(), nullable=True),
        sa.Column("contract_type", _enum(), nullable=True),
        sa.Column("created_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_profile_user_id"), "profile", ["user_id"], unique=True)

    # Publishers: companies and institutions
    for table, extra in (
        ("company", sa.Column("business_sector", sa.String(length=120), nullable=True)),
        ("institution", sa.Column("institution_type", _enum(), nullable=True)),
    ):
        op.create_table(
            table,
            sa.Column("id", GUID(), nullable=False),
            sa.Column("name", sa.String(length=200), nullable=False),
            extra,
            sa.Column("approval_status", _enum(), nullable=False),
            sa.Column("is_active", sa.Boolean(), nullable=False),
            sa.Column("owner_id", GUID(), nullable=True),
            sa.Column("created_at", TIMESTAMPAware(timezone=True), nullable=False),
            sa.ForeignKeyConstraint(["owner_id"], ["user.id"], ondelete="SET NULL"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name"),
        )
        op.create_index(
            op.f(f"ix_{table}_approval_status"), table, ["approval_status"], unique=False
        )
        op.create_index(op.f(f"ix_{table}_owner_id"), table, ["owner_id"], unique=False)

    op.create_table(
        "course",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=120), nullable=True),
        sa.Column("level", _enum(), nullable=False),
        sa.Column("tags", sa.JSON(), nullable=False),
        sa.Column("status", _enum(), nullable=False),
        sa.Column("module_count", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("institution_id", GUID(), nullable=True),
        sa.Column("created_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["institution_id"], ["institution.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_course_category"), "course", ["category"], unique=False)
    op.create_index(op.f("ix_course_status"), "course", ["status"], unique=False)
    op.create_index(
        op.f("ix_course_institution_id"), "course", ["institution_id"], unique=False
    )

    op.create_table(
        "course_enrollment",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("course_id", GUID(), nullable=False),
        sa.Column("student_id", GUID(), nullable=False),
        sa.Column("progress", sa.Float(), nullable=False),
        sa.Column("enrolled_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.Column("completed_at", TIMESTAMPAware(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["course_id"], ["course.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["student_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("course_id", "student_id"),
    )
    op.create_index(
        op.f("ix_course_enrollment_course_id"),
        "course_enrollment",
        ["course_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_course_enrollment_student_id"),
        "course_enrollment",
        ["student_id"],
        unique=False,
    )

    op.create_table(
        "job_offer",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("skills_required", sa.JSON(), nullable=False),
        sa.Column("salary_min", sa.Float(), nullable=True),
        sa.Column("salary_max", sa.Float(), nullable=True),
        sa.Column("contract_type", _enum(), nullable=True),
        sa.Column("work_modality", _enum(), nullable=True),
        sa.Column("location", sa.String(length=200), nullable=True),
        sa.Column("experience_level", _enum(), nullable=True),
        sa.Column("education_level", _enum(), nullable=True),
        sa.Column("status", _enum(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("company_id", GUID(), nullable=False),
        sa.Column("created_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["company_id"], ["company.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_job_offer_experience_level"),
        "job_offer",
        ["experience_level"],
        unique=False,
    )
    op.create_index(op.f("ix_job_offer_status"), "job_offer", ["status"], unique=False)
    op.create_index(
        op.f("ix_job_offer_company_id"), "job_offer", ["company_id"], unique=False
    )

    op.create_table(
        "job_application",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("job_offer_id", GUID(), nullable=False),
        sa.Column("applicant_id", GUID(), nullable=False),
        sa.Column("status", _enum(), nullable=False),
        sa.Column("applied_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(
            ["job_offer_id"], ["job_offer.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["applicant_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("job_offer_id", "applicant_id"),
    )
    op.create_index(
        op.f("ix_job_application_job_offer_id"),
        "job_application",
        ["job_offer_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_job_application_applicant_id"),
        "job_application",
        ["applicant_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_job_application_status"), "job_application", ["status"], unique=False
    )

    op.create_table(
        "message",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("sender_id", GUID(), nullable=False),
        sa.Column("recipient_id", GUID(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("context_type", _enum(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False),
        sa.Column("created_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["sender_id"], ["user.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["recipient_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_message_sender_id"), "message", ["sender_id"], unique=False)
    op.create_index(
        op.f("ix_message_recipient_id"), "message", ["recipient_id"], unique=False
    )

    op.create_table(
        "entrepreneurship",
        sa.Column("id", GUID(), nullable=False),
        sa.Column("owner_id", GUID(), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(length=120), nullable=True),
        sa.Column("subcategory", sa.String(length=120), nullable=True),
        sa.Column("business_stage", _enum(), nullable=False),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("municipality", sa.String(length=120), nullable=True),
        sa.Column("department", sa.String(length=120), nullable=True),
        sa.Column("employees", sa.Integer(), nullable=True),
        sa.Column("annual_revenue", sa.Float(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("views_count", sa.Integer(), nullable=False),
        sa.Column("rating", sa.Float(), nullable=True),
        sa.Column("created_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.Column("updated_at", TIMESTAMPAware(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["user.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_entrepreneurship_owner_id"), "entrepreneurship", ["owner_id"], unique=False
    )
    op.create_index(
        op.f("ix_entrepreneurship_category"), "entrepreneurship", ["category"], unique=False
    )
    op.create_index(
        op.f("ix_entrepreneurship_business_stage"),
        "entrepreneurship",
        ["business_stage"],
        unique=False,
    )


def downgrade() -> None:
    for table in (
        "entrepreneurship",
        "message",
        "job_application",
        "job_offer",
        "course_enrollment",
        "course",
        "institution",
        "company",
        "profile",
        "user",
    ):
        op.drop_table(table)
