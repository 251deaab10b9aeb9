from fastapi.testclient import TestClient

from app.main import app
from app.models import CourseSectionSchedule

SCOPE = {"session": "2024/2025", "semester": 1}


def test_generate_analytics_end_to_end(client, lecturer_headers):
    response = client.get("/api/analytics/generate", params=SCOPE, headers=lecturer_headers)
    assert response.status_code == 200
    data = response.json()

    assert data["activeStudents"] == 3

    (back_to_back,) = data["backToBackStudents"]
    assert back_to_back["matricNo"] == "A23CS0001"
    assert back_to_back["courseCode"] == "SECJ"
    (run,) = back_to_back["schedules"]
    assert [(item["day"], item["time"], item["course"]["code"]) for item in run] == [
        (1, 2, "SECJ1013"),
        (1, 3, "SECJ1023"),
        (1, 4, "SECI1013"),
    ]
    assert run[0]["venue"] == {"shortName": "BK1"}

    (clashing,) = data["clashingStudents"]
    assert clashing["matricNo"] == "A23CS0002"
    (clash,) = clashing["clashes"]
    assert (clash["day"], clash["time"], clash["venue"]) == (3, 5, None)
    assert [(item["course"]["code"], item["venue"]) for item in clash["courseSections"]] == [
        ("SECJ1013", {"shortName": "BK2"}),
        ("SECP1513", None),
    ]
    assert clash["courseSections"][0]["lecturer"] == {"workerNo": 1001, "name": "Dr. Aminah Yusof"}
    assert clash["courseSections"][1]["lecturer"] is None

    assert data["departments"] == [
        {"code": "SECJ", "totalStudents": 2, "totalClashes": 1, "totalBackToBack": 1},
        {"code": "SECR", "totalStudents": 1, "totalClashes": 0, "totalBackToBack": 0},
    ]

    (venue_clash,) = data["venueClashes"]
    assert venue_clash["venue"] == {"shortName": "BK1"}
    assert [item["course"]["code"] for item in venue_clash["courseSections"]] == ["SECJ1013", "SECR1013"]


def test_generate_analytics_for_empty_semester(client, lecturer_headers):
    response = client.get(
        "/api/analytics/generate",
        params={"session": "2030/2031", "semester": 3},
        headers=lecturer_headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "activeStudents": 0,
        "backToBackStudents": [],
        "clashingStudents": [],
        "departments": [],
        "venueClashes": [],
    }


def test_analytics_requires_lecturer(client, student_headers):
    forbidden = client.get("/api/analytics/generate", params=SCOPE, headers=student_headers)
    assert forbidden.status_code == 403

    anonymous = client.get("/api/analytics/generate", params=SCOPE)
    assert anonymous.status_code in {401, 403}


def test_analytics_scope_is_validated(client, lecturer_headers):
    missing = client.get("/api/analytics/generate", params={"semester": 1}, headers=lecturer_headers)
    assert missing.status_code == 400
    assert missing.json()["message"] == "Academic session and semester are required."

    bad_session = client.get(
        "/api/analytics/generate",
        params={"session": "2024-2025", "semester": 1},
        headers=lecturer_headers,
    )
    assert bad_session.status_code == 400
    assert bad_session.json()["details"] == {"session": "2024-2025"}

    bad_semester = client.get(
        "/api/analytics/generate",
        params={"session": "2024/2025", "semester": 4},
        headers=lecturer_headers,
    )
    assert bad_semester.status_code == 400


def test_malformed_schedule_is_an_opaque_server_error(client, lecturer_headers, seeded_db):
    seeded_db.add(
        CourseSectionSchedule(
            session="2024/2025",
            semester=1,
            course_code="SECI1013",
            section="01",
            day=9,
            time=1,
            venue_code="N28-MK1",
        )
    )
    seeded_db.commit()

    response = client.get("/api/analytics/generate", params=SCOPE, headers=lecturer_headers)
    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error", "details": {}}


def test_unexpected_failure_returns_generic_error(client, lecturer_headers, monkeypatch):
    def explode(self, session, semester):
        raise RuntimeError("database went away")

    monkeypatch.setattr("app.services.analytics.AnalyticsService.generate", explode)

    with TestClient(app, raise_server_exceptions=False) as failing_client:
        response = failing_client.get("/api/analytics/generate", params=SCOPE, headers=lecturer_headers)

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
    assert "database went away" not in response.text


def test_student_timetable_and_clashes(client, student_headers):
    timetable = client.get(
        "/api/student/timetable",
        params={**SCOPE, "matric_no": "a23cs0001"},
        headers=student_headers,
    )
    assert timetable.status_code == 200
    entries = timetable.json()
    assert len(entries) == 4
    assert entries[0]["courseSection"]["course"]["code"] == "SECJ1013"
    assert entries[0]["venue"] == {"shortName": "BK1"}

    clashes = client.get(
        "/api/student/clashes",
        params={**SCOPE, "matric_no": "A23CS0002"},
        headers=student_headers,
    )
    assert clashes.status_code == 200
    assert [(item["day"], item["time"]) for item in clashes.json()] == [(3, 5)]


def test_student_lookup_errors(client, student_headers):
    missing = client.get("/api/student/timetable", params=SCOPE, headers=student_headers)
    assert missing.status_code == 400

    malformed = client.get(
        "/api/student/timetable",
        params={**SCOPE, "matric_no": "nobody"},
        headers=student_headers,
    )
    assert malformed.status_code == 400

    unknown = client.get(
        "/api/student/timetable",
        params={**SCOPE, "matric_no": "Z99ZZ9999"},
        headers=student_headers,
    )
    assert unknown.status_code == 404
    assert unknown.json()["message"] == "Student with id Z99ZZ9999 not found"


def test_student_search(client, lecturer_headers, student_headers):
    response = client.get("/api/student/search", params={**SCOPE, "query": "Lim"}, headers=lecturer_headers)
    assert response.status_code == 200
    assert response.json() == [{"matricNo": "A23CS0002", "name": "Lim Jia Hui"}]

    too_short = client.get("/api/student/search", params={**SCOPE, "query": "Li"}, headers=lecturer_headers)
    assert too_short.status_code == 400

    forbidden = client.get("/api/student/search", params={**SCOPE, "query": "Lim"}, headers=student_headers)
    assert forbidden.status_code == 403


def test_lecturer_views(client, lecturer_headers, student_headers):
    timetable = client.get(
        "/api/lecturer/timetable",
        params={**SCOPE, "worker_no": "1001"},
        headers=student_headers,
    )
    assert timetable.status_code == 200
    assert len(timetable.json()) == 3

    clashes = client.get("/api/lecturer/clashes", params={**SCOPE, "worker_no": "1001"}, headers=lecturer_headers)
    assert clashes.status_code == 200
    assert clashes.json() == []

    venue_clash = client.get(
        "/api/lecturer/venue-clash",
        params={**SCOPE, "worker_no": "1002"},
        headers=lecturer_headers,
    )
    assert venue_clash.status_code == 200
    assert [item["venue"]["shortName"] for item in venue_clash.json()] == ["BK1"]

    unknown = client.get("/api/lecturer/clashes", params={**SCOPE, "worker_no": "4242"}, headers=lecturer_headers)
    assert unknown.status_code == 404

    malformed = client.get("/api/lecturer/clashes", params={**SCOPE, "worker_no": "x1"}, headers=lecturer_headers)
    assert malformed.status_code == 400


def test_available_venues(client, lecturer_headers):
    response = client.get(
        "/api/venue/available",
        params={**SCOPE, "day": 1, "times": [2, 3]},
        headers=lecturer_headers,
    )
    assert response.status_code == 200
    assert response.json() == [
        {"code": "N28-MK1", "shortName": "MK1", "name": "Makmal Komputer 1", "capacity": 40, "type": "lab"}
    ]

    bad_time = client.get(
        "/api/venue/available",
        params={**SCOPE, "day": 1, "times": [2, 17]},
        headers=lecturer_headers,
    )
    assert bad_time.status_code == 400

    bad_day = client.get(
        "/api/venue/available",
        params={**SCOPE, "day": 7, "times": [2]},
        headers=lecturer_headers,
    )
    assert bad_day.status_code == 400


def test_security_headers_are_set(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.headers["X-Content-Type-Options"] == "nosniff"
    assert response.headers["X-Frame-Options"] == "DENY"
