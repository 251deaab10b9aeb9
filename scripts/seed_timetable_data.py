"""Seed a demo academic session for TTMS Analytics.

The data contains a venue clash, a student clash and a back-to-back run so
every analytics collection has something to show.

Run:
  PYTHONPATH=backend python scripts/seed_timetable_data.py
"""

from __future__ import annotations

import os

from sqlalchemy import func, select

from app.core.security import get_password_hash
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.models.academic_session import AcademicSession
from app.models.course import Course, CourseSection, CourseSectionSchedule
from app.models.lecturer import Lecturer
from app.models.student import Student, StudentRegisteredCourse
from app.models.user import User, UserRole
from app.models.venue import Venue, VenueType
from app.services.time_domain import Day, TimeSlot

DEFAULT_PASSWORD = os.getenv("SEED_DEFAULT_PASSWORD", "Ttms123!")
SESSION = os.getenv("SEED_SESSION", "2024/2025").strip() or "2024/2025"
SEMESTER = int(os.getenv("SEED_SEMESTER", "1"))

COURSES = {
    "SECJ1013": "Programming Technique I",
    "SECJ1023": "Programming Technique II",
    "SECR1013": "Digital Logic",
    "SECI1013": "Discrete Structure",
    "SECP1513": "Technology and Information System",
}

LECTURERS = {
    1001: "Dr. Aminah Yusof",
    1002: "Dr. Chen Wei Ling",
    1003: "Prof. Ravi Kumar",
}

VENUES = [
    ("N28-BK1", "BK1", "Bilik Kuliah 1", 60, VenueType.lecture),
    ("N28-BK2", "BK2", "Bilik Kuliah 2", 60, VenueType.lecture),
    ("N28-MK1", "MK1", "Makmal Komputer 1", 40, VenueType.lab),
    ("N28-STORE", "STORE", "Store Room", 0, VenueType.none),
]

# (course, section, lecturer)
SECTIONS = [
    ("SECJ1013", "01", 1001),
    ("SECJ1023", "01", 1001),
    ("SECR1013", "01", 1002),
    ("SECI1013", "01", 1003),
    ("SECP1513", "01", None),
]

# (course, section, day, time, venue code)
SCHEDULES = [
    ("SECJ1013", "01", Day.monday, TimeSlot.slot_2, "N28-BK1"),
    ("SECR1013", "01", Day.monday, TimeSlot.slot_2, "N28-BK1"),
    ("SECJ1023", "01", Day.monday, TimeSlot.slot_3, "N28-BK2"),
    ("SECI1013", "01", Day.monday, TimeSlot.slot_4, "N28-MK1"),
    ("SECJ1013", "01", Day.wednesday, TimeSlot.slot_5, "N28-BK2"),
    ("SECP1513", "01", Day.wednesday, TimeSlot.slot_5, None),
]

# (matric, name, home programme, kp, registered courses)
STUDENTS = [
    ("A23CS0001", "Nur Aisyah binti Ahmad", "SECJ", "010203040506", ["SECJ1013", "SECJ1023", "SECI1013"]),
    ("A23CS0002", "Lim Jia Hui", "SECJ", "020304050607", ["SECJ1013", "SECP1513"]),
    ("A23SC0003", "Muhammad Hafiz", "SECR", "030405060708", ["SECR1013"]),
    ("A23SC0004", "Priya Ramasamy", "SECR", "040506070809", []),
]


def upsert_reference_data(session) -> None:
    if session.get(AcademicSession, (SESSION, SEMESTER)) is None:
        session.add(AcademicSession(session=SESSION, semester=SEMESTER))
    for code, name in COURSES.items():
        course = session.get(Course, code)
        if course is None:
            session.add(Course(code=code, name=name))
        else:
            course.name = name
    for worker_no, name in LECTURERS.items():
        lecturer = session.get(Lecturer, worker_no)
        if lecturer is None:
            session.add(Lecturer(worker_no=worker_no, name=name))
        else:
            lecturer.name = name
    for code, short_name, name, capacity, venue_type in VENUES:
        venue = session.get(Venue, code)
        if venue is None:
            session.add(Venue(code=code, short_name=short_name, name=name, capacity=capacity, type=venue_type))
        else:
            venue.short_name = short_name
            venue.name = name
            venue.capacity = capacity
            venue.type = venue_type
    session.flush()


def upsert_sections_and_schedules(session) -> None:
    for course_code, section, lecturer_no in SECTIONS:
        key = (SESSION, SEMESTER, course_code, section)
        record = session.get(CourseSection, key)
        if record is None:
            session.add(
                CourseSection(
                    session=SESSION,
                    semester=SEMESTER,
                    course_code=course_code,
                    section=section,
                    lecturer_no=lecturer_no,
                )
            )
        else:
            record.lecturer_no = lecturer_no
    session.flush()

    for course_code, section, day, time, venue_code in SCHEDULES:
        key = (SESSION, SEMESTER, course_code, section, int(day), int(time))
        record = session.get(CourseSectionSchedule, key)
        if record is None:
            session.add(
                CourseSectionSchedule(
                    session=SESSION,
                    semester=SEMESTER,
                    course_code=course_code,
                    section=section,
                    day=int(day),
                    time=int(time),
                    venue_code=venue_code,
                )
            )
        else:
            record.venue_code = venue_code
    session.flush()


def upsert_user(session, *, login: str, name: str, role: UserRole) -> None:
    user = session.execute(select(User).where(User.login == login)).scalar_one_or_none()
    if user is None:
        session.add(User(login=login, name=name, role=role, hashed_password=get_password_hash(DEFAULT_PASSWORD)))
        return
    user.name = name
    user.role = role
    user.is_active = True


def seed_students_and_users(session) -> None:
    for matric_no, name, programme, kp_no, registered in STUDENTS:
        student = session.get(Student, matric_no)
        if student is None:
            session.add(Student(matric_no=matric_no, name=name, course_code=programme, kp_no=kp_no))
        else:
            student.name = name
            student.course_code = programme
            student.kp_no = kp_no
        session.flush()
        for course_code in registered:
            key = (matric_no, SESSION, SEMESTER, course_code)
            if session.get(StudentRegisteredCourse, key) is None:
                session.add(
                    StudentRegisteredCourse(
                        matric_no=matric_no,
                        session=SESSION,
                        semester=SEMESTER,
                        course_code=course_code,
                        section="01",
                    )
                )
        upsert_user(session, login=matric_no, name=name, role=UserRole.student)

    for worker_no, name in LECTURERS.items():
        upsert_user(session, login=str(worker_no), name=name, role=UserRole.lecturer)


def main() -> None:
    Base.metadata.create_all(bind=engine)
    with SessionLocal() as session:
        upsert_reference_data(session)
        upsert_sections_and_schedules(session)
        seed_students_and_users(session)
        session.commit()

        schedule_count = session.execute(select(func.count()).select_from(CourseSectionSchedule)).scalar_one()
        student_count = session.execute(select(func.count()).select_from(Student)).scalar_one()

    print("Timetable data seeded successfully.")
    print("")
    print(f"Session: {SESSION} semester {SEMESTER}")
    print(f"Schedule entries: {schedule_count}")
    print(f"Students: {student_count}")
    print("")
    print("Login credentials for seeded users (all use same password):")
    print(f"  Password: {DEFAULT_PASSWORD}")
    print(f"  Lecturer: {next(iter(LECTURERS))}")
    print(f"  Student:  {STUDENTS[0][0]}")


if __name__ == "__main__":
    main()
