"""create timetable schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    venue_type = sa.Enum("lecture", "lab", "none", name="venue_type")
    user_role = sa.Enum("student", "lecturer", name="user_role")

    op.create_table(
        "sessions",
        sa.Column("session", sa.String(length=9), primary_key=True, nullable=False),
        sa.Column("semester", sa.Integer(), primary_key=True, nullable=False),
    )

    op.create_table(
        "courses",
        sa.Column("code", sa.String(length=20), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
    )

    op.create_table(
        "lecturers",
        sa.Column("worker_no", sa.Integer(), primary_key=True, autoincrement=False, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
    )
    op.create_index("ix_lecturers_name", "lecturers", ["name"])

    op.create_table(
        "venues",
        sa.Column("code", sa.String(length=50), primary_key=True, nullable=False),
        sa.Column("short_name", sa.String(length=50), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("type", venue_type, nullable=False),
    )
    op.create_index("ix_venues_short_name", "venues", ["short_name"])

    op.create_table(
        "course_sections",
        sa.Column("session", sa.String(length=9), primary_key=True, nullable=False),
        sa.Column("semester", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("course_code", sa.String(length=20), sa.ForeignKey("courses.code"), primary_key=True, nullable=False),
        sa.Column("section", sa.String(length=10), primary_key=True, nullable=False),
        sa.Column("lecturer_no", sa.Integer(), sa.ForeignKey("lecturers.worker_no"), nullable=True),
    )
    op.create_index("ix_course_sections_lecturer_no", "course_sections", ["lecturer_no"])

    op.create_table(
        "course_section_schedules",
        sa.Column("session", sa.String(length=9), primary_key=True, nullable=False),
        sa.Column("semester", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("course_code", sa.String(length=20), primary_key=True, nullable=False),
        sa.Column("section", sa.String(length=10), primary_key=True, nullable=False),
        sa.Column("day", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("time", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("venue_code", sa.String(length=50), sa.ForeignKey("venues.code"), nullable=True),
        sa.ForeignKeyConstraint(
            ["session", "semester", "course_code", "section"],
            [
                "course_sections.session",
                "course_sections.semester",
                "course_sections.course_code",
                "course_sections.section",
            ],
        ),
    )
    op.create_index("ix_course_section_schedules_venue_code", "course_section_schedules", ["venue_code"])

    op.create_table(
        "students",
        sa.Column("matric_no", sa.String(length=20), primary_key=True, nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("course_code", sa.String(length=20), nullable=False),
        sa.Column("kp_no", sa.String(length=12), nullable=True),
    )
    op.create_index("ix_students_name", "students", ["name"])
    op.create_index("ix_students_course_code", "students", ["course_code"])

    op.create_table(
        "student_registered_courses",
        sa.Column("matric_no", sa.String(length=20), sa.ForeignKey("students.matric_no"), primary_key=True, nullable=False),
        sa.Column("session", sa.String(length=9), primary_key=True, nullable=False),
        sa.Column("semester", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("course_code", sa.String(length=20), sa.ForeignKey("courses.code"), primary_key=True, nullable=False),
        sa.Column("section", sa.String(length=10), nullable=False),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), primary_key=True, nullable=False),
        sa.Column("login", sa.String(length=20), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_users_login", "users", ["login"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_login", table_name="users")
    op.drop_table("users")
    op.drop_table("student_registered_courses")
    op.drop_index("ix_students_course_code", table_name="students")
    op.drop_index("ix_students_name", table_name="students")
    op.drop_table("students")
    op.drop_index("ix_course_section_schedules_venue_code", table_name="course_section_schedules")
    op.drop_table("course_section_schedules")
    op.drop_index("ix_course_sections_lecturer_no", table_name="course_sections")
    op.drop_table("course_sections")
    op.drop_index("ix_venues_short_name", table_name="venues")
    op.drop_table("venues")
    op.drop_index("ix_lecturers_name", table_name="lecturers")
    op.drop_table("lecturers")
    op.drop_table("courses")
    op.drop_table("sessions")

    sa.Enum(name="user_role").drop(op.get_bind(), checkfirst=True)
    sa.Enum(name="venue_type").drop(op.get_bind(), checkfirst=True)
