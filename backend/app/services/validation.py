from __future__ import annotations

import re

from app.services.time_domain import DAY_VALUES, TIME_VALUES

ACADEMIC_SESSION_PATTERN = re.compile(r"^[0-9]{4}/[0-9]{4}$")
MATRIC_NO_PATTERN = re.compile(r"^[a-z]\d{2}[a-z]{2}\d{4}$", re.IGNORECASE)
WORKER_NO_PATTERN = re.compile(r"^[1-9]\d{0,7}$")
SEMESTER_VALUES = frozenset({1, 2, 3})


def validate_academic_session(session: object) -> bool:
    return isinstance(session, str) and ACADEMIC_SESSION_PATTERN.match(session) is not None


def validate_semester(semester: object) -> bool:
    return isinstance(semester, int) and not isinstance(semester, bool) and semester in SEMESTER_VALUES


def is_valid_matric_number(value: object) -> bool:
    return isinstance(value, str) and MATRIC_NO_PATTERN.match(value) is not None


def is_valid_worker_no(value: object) -> bool:
    return isinstance(value, str) and WORKER_NO_PATTERN.match(value) is not None


def is_valid_kp_no(value: object) -> bool:
    return isinstance(value, str) and len(value) == 12


def is_valid_day(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in DAY_VALUES


def is_valid_time(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in TIME_VALUES
