from sqlalchemy import ForeignKey, ForeignKeyConstraint, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Course(Base):
    __tablename__ = "courses"

    code: Mapped[str] = mapped_column(String(20), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)


class CourseSection(Base):
    __tablename__ = "course_sections"

    session: Mapped[str] = mapped_column(String(9), primary_key=True)
    semester: Mapped[int] = mapped_column(Integer, primary_key=True)
    course_code: Mapped[str] = mapped_column(String(20), ForeignKey("courses.code"), primary_key=True)
    section: Mapped[str] = mapped_column(String(10), primary_key=True)
    lecturer_no: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("lecturers.worker_no"), nullable=True, index=True
    )


class CourseSectionSchedule(Base):
    __tablename__ = "course_section_schedules"
    __table_args__ = (
        ForeignKeyConstraint(
            ["session", "semester", "course_code", "section"],
            [
                "course_sections.session",
                "course_sections.semester",
                "course_sections.course_code",
                "course_sections.section",
            ],
        ),
    )

    session: Mapped[str] = mapped_column(String(9), primary_key=True)
    semester: Mapped[int] = mapped_column(Integer, primary_key=True)
    course_code: Mapped[str] = mapped_column(String(20), primary_key=True)
    section: Mapped[str] = mapped_column(String(10), primary_key=True)
    day: Mapped[int] = mapped_column(Integer, primary_key=True)
    time: Mapped[int] = mapped_column(Integer, primary_key=True)
    venue_code: Mapped[str | None] = mapped_column(
        String(50), ForeignKey("venues.code"), nullable=True, index=True
    )
