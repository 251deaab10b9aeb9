from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
import logging
from time import perf_counter

from app.core.config import Settings, get_settings
from app.services.back_to_back import BackToBackRun, MIN_RUN_LENGTH, detect_back_to_back
from app.services.clash_grouping import ClashGroup, entries_for_sections, student_clashes, venue_clashes
from app.services.repository import TimetableRepository
from app.services.schedule_facts import (
    RawScheduleRow,
    Registration,
    RosterStudent,
    ScheduleEntry,
    index_by_section,
    normalize_rows,
    require_slot,
)

logger = logging.getLogger(__name__)

SectionKey = tuple[str, str]


@dataclass(frozen=True)
class ClashingStudent:
    student: RosterStudent
    clashes: tuple[ClashGroup, ...]


@dataclass(frozen=True)
class BackToBackStudent:
    student: RosterStudent
    runs: tuple[BackToBackRun, ...]


@dataclass
class DepartmentTotals:
    code: str
    total_students: int = 0
    total_clashes: int = 0
    total_back_to_back: int = 0


@dataclass(frozen=True)
class AnalyticsReport:
    active_students: int
    back_to_back_students: list[BackToBackStudent] = field(default_factory=list)
    clashing_students: list[ClashingStudent] = field(default_factory=list)
    departments: list[DepartmentTotals] = field(default_factory=list)
    venue_clashes: list[ClashGroup] = field(default_factory=list)


@dataclass(frozen=True)
class _StudentOutcome:
    student: RosterStudent
    clashes: tuple[ClashGroup, ...]
    runs: tuple[BackToBackRun, ...]


def sections_by_student(registrations: Iterable[Registration]) -> dict[str, list[SectionKey]]:
    grouped: dict[str, list[SectionKey]] = {}
    for registration in registrations:
        grouped.setdefault(registration.matric_no, []).append(registration.section_key)
    return grouped


def active_roster(
    roster: Iterable[RosterStudent],
    registered: dict[str, list[SectionKey]],
) -> list[RosterStudent]:
    """Students with at least one registration, each listed once in roster order."""
    roster = list(roster)
    active: dict[str, RosterStudent] = {}
    for student in roster:
        if student.matric_no in active or not registered.get(student.matric_no):
            continue
        active[student.matric_no] = student
    unknown = registered.keys() - active.keys() - {student.matric_no for student in roster}
    if unknown:
        logger.debug("Ignoring registrations for %d student(s) missing from the roster", len(unknown))
    return list(active.values())


def _analyse_student(
    student: RosterStudent,
    section_keys: Sequence[SectionKey],
    index: dict[SectionKey, list[ScheduleEntry]],
    min_run: int,
) -> _StudentOutcome:
    # Stable, so same-slot entries keep registration order for first-seen grouping.
    entries = sorted(entries_for_sections(index, section_keys), key=require_slot)
    return _StudentOutcome(
        student=student,
        clashes=tuple(student_clashes(entries)),
        runs=tuple(detect_back_to_back(entries, min_run)),
    )


def aggregate_departments(outcomes: Iterable[_StudentOutcome]) -> list[DepartmentTotals]:
    departments: dict[str, DepartmentTotals] = {}
    for outcome in outcomes:
        # Attributed to the student's home department, whatever courses clash.
        code = outcome.student.department_code
        totals = departments.get(code)
        if totals is None:
            totals = DepartmentTotals(code=code)
            departments[code] = totals
        totals.total_students += 1
        if outcome.clashes:
            totals.total_clashes += 1
        if outcome.runs:
            totals.total_back_to_back += 1
    return sorted(departments.values(), key=lambda item: -item.total_students)


def build_analytics_report(
    schedule_rows: Iterable[RawScheduleRow],
    roster: Iterable[RosterStudent],
    registrations: Iterable[Registration],
    *,
    min_run: int = MIN_RUN_LENGTH,
    max_workers: int = 1,
) -> AnalyticsReport:
    entries = normalize_rows(schedule_rows)
    index = index_by_section(entries)
    registered = sections_by_student(registrations)
    students = active_roster(roster, registered)

    def analyse(student: RosterStudent) -> _StudentOutcome:
        return _analyse_student(student, registered[student.matric_no], index, min_run)

    if max_workers > 1 and len(students) > 1:
        # Executor.map yields in submission order, which keeps roster order.
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            outcomes = list(executor.map(analyse, students))
    else:
        outcomes = [analyse(student) for student in students]

    return AnalyticsReport(
        active_students=len(outcomes),
        back_to_back_students=[
            BackToBackStudent(student=outcome.student, runs=outcome.runs) for outcome in outcomes if outcome.runs
        ],
        clashing_students=[
            ClashingStudent(student=outcome.student, clashes=outcome.clashes) for outcome in outcomes if outcome.clashes
        ],
        departments=aggregate_departments(outcomes),
        venue_clashes=venue_clashes(entries),
    )


class AnalyticsService:
    def __init__(self, repository: TimetableRepository, settings: Settings | None = None) -> None:
        self.repository = repository
        self.settings = settings or get_settings()

    def generate(self, session: str, semester: int) -> AnalyticsReport:
        started = perf_counter()
        schedule_rows = self.repository.fetch_schedule_rows(session, semester)
        roster = self.repository.fetch_active_roster(session, semester)
        registrations = self.repository.fetch_registrations(session, semester)

        report = build_analytics_report(
            schedule_rows,
            roster,
            registrations,
            min_run=self.settings.analytics_back_to_back_min_run,
            max_workers=self.settings.analytics_max_workers,
        )
        logger.info(
            "Generated analytics for %s semester %s: %d active, %d clashing, %d back-to-back, %d venue clashes in %.1f ms",
            session,
            semester,
            report.active_students,
            len(report.clashing_students),
            len(report.back_to_back_students),
            len(report.venue_clashes),
            (perf_counter() - started) * 1000,
        )
        return report
