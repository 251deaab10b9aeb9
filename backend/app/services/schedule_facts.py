from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import IntEnum
from typing import TypeVar

from app.core.exceptions import MalformedScheduleError
from app.services.time_domain import Day, TimeSlot

EnumT = TypeVar("EnumT", bound=IntEnum)


@dataclass(frozen=True)
class RawScheduleRow:
    """One flattened course-section meeting as returned by the data layer."""

    schedule_day: int | None
    schedule_time: int | None
    venue_code: str | None
    venue_short_name: str | None
    course_code: str
    section: str
    course_name: str
    lecturer_no: int | None
    lecturer_name: str | None


@dataclass(frozen=True)
class CourseRef:
    code: str
    name: str


@dataclass(frozen=True)
class LecturerRef:
    worker_no: int
    name: str


@dataclass(frozen=True)
class VenueRef:
    # Rooms are told apart by code; the short name is only for display.
    code: str
    short_name: str


@dataclass(frozen=True)
class CourseSectionRef:
    course: CourseRef
    section: str
    lecturer: LecturerRef | None = None

    @property
    def key(self) -> tuple[str, str]:
        return self.course.code, self.section


@dataclass(frozen=True)
class ScheduleEntry:
    day: Day | None
    time: TimeSlot | None
    course_section: CourseSectionRef
    venue: VenueRef | None = None


def _coerce(enum_cls: type[EnumT], value: int | None, field: str, row: RawScheduleRow) -> EnumT | None:
    if value is None:
        return None
    try:
        return enum_cls(int(value))
    except (TypeError, ValueError) as exc:
        raise MalformedScheduleError(
            f"Schedule row has an invalid {field}",
            details={"courseCode": row.course_code, "section": row.section, field: value},
        ) from exc


def lecturer_from(worker_no: int | None, name: str | None) -> LecturerRef | None:
    # Partial lecturer data is treated as no lecturer at all.
    if worker_no is None or name is None:
        return None
    return LecturerRef(worker_no=worker_no, name=name)


def venue_from(code: str | None, short_name: str | None) -> VenueRef | None:
    if code is None or short_name is None:
        return None
    return VenueRef(code=code, short_name=short_name)


def normalize_row(row: RawScheduleRow) -> ScheduleEntry:
    return ScheduleEntry(
        day=_coerce(Day, row.schedule_day, "day", row),
        time=_coerce(TimeSlot, row.schedule_time, "time", row),
        course_section=CourseSectionRef(
            course=CourseRef(code=row.course_code, name=row.course_name),
            section=row.section,
            lecturer=lecturer_from(row.lecturer_no, row.lecturer_name),
        ),
        venue=venue_from(row.venue_code, row.venue_short_name),
    )


def normalize_rows(rows: Iterable[RawScheduleRow]) -> list[ScheduleEntry]:
    return [normalize_row(row) for row in rows]


def require_slot(entry: ScheduleEntry) -> tuple[Day, TimeSlot]:
    """Return the entry's (day, time), refusing entries that lost either one."""
    if entry.day is None or entry.time is None:
        raise MalformedScheduleError(
            "Schedule entry is missing its day or time",
            details={
                "courseCode": entry.course_section.course.code,
                "section": entry.course_section.section,
                "day": None if entry.day is None else int(entry.day),
                "time": None if entry.time is None else int(entry.time),
            },
        )
    return entry.day, entry.time


def index_by_section(entries: Iterable[ScheduleEntry]) -> dict[tuple[str, str], list[ScheduleEntry]]:
    indexed: dict[tuple[str, str], list[ScheduleEntry]] = {}
    for entry in entries:
        indexed.setdefault(entry.course_section.key, []).append(entry)
    return indexed


@dataclass(frozen=True)
class RosterStudent:
    matric_no: str
    name: str
    department_code: str


@dataclass(frozen=True)
class Registration:
    matric_no: str
    course_code: str
    section: str

    @property
    def section_key(self) -> tuple[str, str]:
        return self.course_code, self.section
