from __future__ import annotations

from collections.abc import Iterable

from app.services.schedule_facts import ScheduleEntry, require_slot
from app.services.time_domain import Day, is_adjacent

BackToBackRun = tuple[ScheduleEntry, ...]

MIN_RUN_LENGTH = 2


def _entries_by_day(entries: Iterable[ScheduleEntry]) -> dict[Day, list[ScheduleEntry]]:
    by_day: dict[Day, list[ScheduleEntry]] = {}
    for entry in entries:
        day, _ = require_slot(entry)
        by_day.setdefault(day, []).append(entry)
    return by_day


def _continues(previous: ScheduleEntry, entry: ScheduleEntry) -> bool:
    return is_adjacent(previous.time, entry.time) and previous.course_section.key != entry.course_section.key


def runs_for_day(day_entries: list[ScheduleEntry], min_run: int = MIN_RUN_LENGTH) -> list[BackToBackRun]:
    """Split one day's entries into maximal runs of consecutive time slots.

    Entries sharing a slot never extend each other: a double booking belongs to
    the clash report, not here. A section meeting in consecutive slots is one
    long class, so it does not extend its own run either.
    """
    ordered = sorted(day_entries, key=lambda entry: int(entry.time))
    runs: list[BackToBackRun] = []
    current: list[ScheduleEntry] = []
    for entry in ordered:
        if current and not _continues(current[-1], entry):
            if len(current) >= min_run:
                runs.append(tuple(current))
            current = []
        current.append(entry)
    if len(current) >= min_run:
        runs.append(tuple(current))
    return runs


def detect_back_to_back(student_entries: Iterable[ScheduleEntry], min_run: int = MIN_RUN_LENGTH) -> list[BackToBackRun]:
    """Return a student's back-to-back runs, earliest day first and in time order within a run."""
    min_run = max(MIN_RUN_LENGTH, min_run)
    by_day = _entries_by_day(student_entries)
    runs: list[BackToBackRun] = []
    for day in sorted(by_day):
        runs.extend(runs_for_day(by_day[day], min_run))
    return runs
