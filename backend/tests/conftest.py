import os

# Keep the app's own engine off any real database while tests import it.
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.api.deps import get_db  # noqa: E402
from app.core.security import get_password_hash  # noqa: E402
from app.db.base import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models import (  # noqa: E402
    AcademicSession,
    Course,
    CourseSection,
    CourseSectionSchedule,
    Lecturer,
    Student,
    StudentRegisteredCourse,
    User,
    UserRole,
    Venue,
    VenueType,
)
from app.services.rate_limit import clear_rate_limiter  # noqa: E402

SESSION = "2024/2025"
SEMESTER = 1
PASSWORD = "password123"


@pytest.fixture()
def session_factory():
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture()
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(session_factory):
    # Previous tests must not leave login attempts behind.
    clear_rate_limiter()

    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    clear_rate_limiter()


def add_schedule(db, course_code, section, day, time, venue_code):
    db.add(
        CourseSectionSchedule(
            session=SESSION,
            semester=SEMESTER,
            course_code=course_code,
            section=section,
            day=day,
            time=time,
            venue_code=venue_code,
        )
    )


@pytest.fixture()
def seeded_db(db_session):
    """One semester with a venue clash, a student clash and a three-slot back-to-back run.

    A23CS0001 (SECJ) takes SECJ1013, SECJ1023 and SECI1013: Monday slots 2, 3, 4.
    A23CS0002 (SECJ) takes SECJ1013 and SECP1513: both meet Wednesday slot 5.
    A23SC0003 (SECR) takes SECR1013, which shares N28-BK1 on Monday slot 2 with SECJ1013.
    A23SC0004 (SECR) is registered for nothing.
    """
    db = db_session
    db.add(AcademicSession(session=SESSION, semester=SEMESTER))
    db.add_all(
        [
            Course(code="SECJ1013", name="Programming Technique I"),
            Course(code="SECJ1023", name="Programming Technique II"),
            Course(code="SECR1013", name="Digital Logic"),
            Course(code="SECI1013", name="Discrete Structure"),
            Course(code="SECP1513", name="Technology and Information System"),
            Lecturer(worker_no=1001, name="Dr. Aminah Yusof"),
            Lecturer(worker_no=1002, name="Dr. Chen Wei Ling"),
            Lecturer(worker_no=1003, name="Prof. Ravi Kumar"),
            Venue(code="N28-BK1", short_name="BK1", name="Bilik Kuliah 1", capacity=60, type=VenueType.lecture),
            Venue(code="N28-BK2", short_name="BK2", name="Bilik Kuliah 2", capacity=60, type=VenueType.lecture),
            Venue(code="N28-MK1", short_name="MK1", name="Makmal Komputer 1", capacity=40, type=VenueType.lab),
            Venue(code="N28-STORE", short_name="STORE", name="Store Room", capacity=0, type=VenueType.none),
        ]
    )
    db.flush()
    for course_code, lecturer_no in [
        ("SECJ1013", 1001),
        ("SECJ1023", 1001),
        ("SECR1013", 1002),
        ("SECI1013", 1003),
        ("SECP1513", None),
    ]:
        db.add(
            CourseSection(
                session=SESSION,
                semester=SEMESTER,
                course_code=course_code,
                section="01",
                lecturer_no=lecturer_no,
            )
        )
    db.flush()
    add_schedule(db, "SECJ1013", "01", 1, 2, "N28-BK1")
    add_schedule(db, "SECR1013", "01", 1, 2, "N28-BK1")
    add_schedule(db, "SECJ1023", "01", 1, 3, "N28-BK2")
    add_schedule(db, "SECI1013", "01", 1, 4, "N28-MK1")
    add_schedule(db, "SECJ1013", "01", 3, 5, "N28-BK2")
    add_schedule(db, "SECP1513", "01", 3, 5, None)

    students = [
        ("A23CS0001", "Nur Aisyah", "SECJ", ["SECJ1013", "SECJ1023", "SECI1013"]),
        ("A23CS0002", "Lim Jia Hui", "SECJ", ["SECJ1013", "SECP1513"]),
        ("A23SC0003", "Muhammad Hafiz", "SECR", ["SECR1013"]),
        ("A23SC0004", "Priya Ramasamy", "SECR", []),
    ]
    for matric_no, name, programme, registered in students:
        db.add(Student(matric_no=matric_no, name=name, course_code=programme, kp_no="010203040506"))
        db.flush()
        for course_code in registered:
            db.add(
                StudentRegisteredCourse(
                    matric_no=matric_no,
                    session=SESSION,
                    semester=SEMESTER,
                    course_code=course_code,
                    section="01",
                )
            )

    hashed = get_password_hash(PASSWORD)
    db.add_all(
        [
            User(login="A23CS0001", name="Nur Aisyah", hashed_password=hashed, role=UserRole.student),
            User(login="1001", name="Dr. Aminah Yusof", hashed_password=hashed, role=UserRole.lecturer),
            User(
                login="1002",
                name="Dr. Chen Wei Ling",
                hashed_password=hashed,
                role=UserRole.lecturer,
                is_active=False,
            ),
        ]
    )
    db.commit()
    return db


def login_user(client, login, password=PASSWORD):
    response = client.post("/api/auth/login", json={"login": login, "password": password})
    assert response.status_code == 200
    return response.json()["access_token"]


@pytest.fixture()
def lecturer_headers(client, seeded_db):
    return {"Authorization": f"Bearer {login_user(client, '1001')}"}


@pytest.fixture()
def student_headers(client, seeded_db):
    return {"Authorization": f"Bearer {login_user(client, 'A23CS0001')}"}
