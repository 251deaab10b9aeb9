from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Student(Base):
    __tablename__ = "students"

    matric_no: Mapped[str] = mapped_column(String(20), primary_key=True)
    name: Mapped[str] = mapped_column(String(200), index=True, nullable=False)
    # Home programme code, used as the department bucket in analytics.
    course_code: Mapped[str] = mapped_column(String(20), index=True, nullable=False)
    kp_no: Mapped[str | None] = mapped_column(String(12), nullable=True)


class StudentRegisteredCourse(Base):
    __tablename__ = "student_registered_courses"

    matric_no: Mapped[str] = mapped_column(String(20), ForeignKey("students.matric_no"), primary_key=True)
    session: Mapped[str] = mapped_column(String(9), primary_key=True)
    semester: Mapped[int] = mapped_column(Integer, primary_key=True)
    course_code: Mapped[str] = mapped_column(String(20), ForeignKey("courses.code"), primary_key=True)
    section: Mapped[str] = mapped_column(String(10), nullable=False)
