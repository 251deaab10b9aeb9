from __future__ import annotations

from collections.abc import Sequence

from app.core.exceptions import ResourceNotFoundError
from app.models.student import Student
from app.models.venue import Venue
from app.services.clash_grouping import (
    ClashGroup,
    clashes_involving,
    lecturer_self_clashes,
    student_clashes,
    venue_clashes,
)
from app.services.repository import TimetableRepository
from app.services.schedule_facts import ScheduleEntry, normalize_rows
from app.services.validation import is_valid_matric_number

MIN_SEARCH_QUERY_LENGTH = 3


class TimetableService:
    def __init__(self, repository: TimetableRepository) -> None:
        self.repository = repository

    def _require_student(self, matric_no: str) -> Student:
        student = self.repository.get_student(matric_no)
        if student is None:
            raise ResourceNotFoundError("Student", matric_no)
        return student

    def _require_lecturer_sections(self, worker_no: int, session: str, semester: int) -> list[tuple[str, str]]:
        if self.repository.get_lecturer(worker_no) is None:
            raise ResourceNotFoundError("Lecturer", str(worker_no))
        return self.repository.fetch_lecturer_sections(worker_no, session, semester)

    def student_timetable(self, matric_no: str, session: str, semester: int) -> list[ScheduleEntry]:
        student = self._require_student(matric_no)
        sections = self.repository.fetch_student_sections(student.matric_no, session, semester)
        return normalize_rows(self.repository.fetch_section_schedule_rows(session, semester, sections))

    def student_clashes(self, matric_no: str, session: str, semester: int) -> list[ClashGroup]:
        return student_clashes(self.student_timetable(matric_no, session, semester))

    def lecturer_timetable(self, worker_no: int, session: str, semester: int) -> list[ScheduleEntry]:
        sections = self._require_lecturer_sections(worker_no, session, semester)
        return normalize_rows(self.repository.fetch_section_schedule_rows(session, semester, sections))

    def lecturer_self_clashes(self, worker_no: int, session: str, semester: int) -> list[ClashGroup]:
        sections = self._require_lecturer_sections(worker_no, session, semester)
        rows = self.repository.fetch_section_schedule_rows(session, semester, sections)
        return lecturer_self_clashes(normalize_rows(rows), sections)

    def lecturer_venue_clashes(self, worker_no: int, session: str, semester: int) -> list[ClashGroup]:
        """Venue clashes in which at least one of the lecturer's sections takes part."""
        sections = self._require_lecturer_sections(worker_no, session, semester)
        if not sections:
            return []
        entries = normalize_rows(self.repository.fetch_schedule_rows(session, semester))
        return clashes_involving(venue_clashes(entries), sections)

    def search_students(
        self,
        session: str,
        semester: int,
        query: str,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Student]:
        query = query.strip()
        if len(query) < MIN_SEARCH_QUERY_LENGTH:
            raise ValueError(f"Query must be at least {MIN_SEARCH_QUERY_LENGTH} characters long")

        # Names never contain digits, so a digit means a matric number lookup.
        if any(char.isdigit() for char in query):
            if not is_valid_matric_number(query):
                return []
            return self.repository.search_students(
                session, semester, query, by_matric_no=True, limit=limit, offset=offset
            )
        return self.repository.search_students(
            session, semester, query, by_matric_no=False, limit=limit, offset=offset
        )

    def available_venues(self, session: str, semester: int, day: int, times: Sequence[int]) -> list[Venue]:
        return self.repository.fetch_available_venues(session, semester, day, times)
