from __future__ import annotations

from collections.abc import Callable, Collection, Hashable, Iterable, Sequence
from dataclasses import dataclass
from typing import TypeVar

from app.services.schedule_facts import CourseSectionRef, ScheduleEntry, VenueRef, require_slot
from app.services.time_domain import Day, TimeSlot

K = TypeVar("K", bound=Hashable)
SectionKey = tuple[str, str]


@dataclass(frozen=True)
class ClashParticipant:
    course_section: CourseSectionRef
    venue: VenueRef | None


@dataclass(frozen=True)
class ClashGroup:
    day: Day
    time: TimeSlot
    venue: VenueRef | None
    participants: tuple[ClashParticipant, ...]

    @property
    def section_keys(self) -> tuple[SectionKey, ...]:
        return tuple(item.course_section.key for item in self.participants)


def group_by_key(entries: Iterable[ScheduleEntry], key: Callable[[ScheduleEntry], K]) -> list[list[ScheduleEntry]]:
    """Bucket entries by ``key`` keeping buckets in the order their first entry was seen."""
    groups: dict[K, list[ScheduleEntry]] = {}
    for entry in entries:
        groups.setdefault(key(entry), []).append(entry)
    return list(groups.values())


def _distinct_participants(group: Sequence[ScheduleEntry]) -> tuple[ClashParticipant, ...]:
    seen: set[SectionKey] = set()
    participants: list[ClashParticipant] = []
    for entry in group:
        section_key = entry.course_section.key
        if section_key in seen:
            continue
        seen.add(section_key)
        participants.append(ClashParticipant(course_section=entry.course_section, venue=entry.venue))
    return tuple(participants)


def find_clashes(
    entries: Iterable[ScheduleEntry],
    key: Callable[[ScheduleEntry], K],
    *,
    keyed_on_venue: bool,
) -> list[ClashGroup]:
    """Group entries by ``key`` and keep groups shared by two or more distinct course sections."""
    clashes: list[ClashGroup] = []
    for group in group_by_key(entries, key):
        participants = _distinct_participants(group)
        if len(participants) < 2:
            continue
        day, time = require_slot(group[0])
        clashes.append(
            ClashGroup(
                day=day,
                time=time,
                venue=group[0].venue if keyed_on_venue else None,
                participants=participants,
            )
        )
    return clashes


def venue_key(entry: ScheduleEntry) -> tuple[Day, TimeSlot, str | None]:
    day, time = require_slot(entry)
    return day, time, entry.venue.code if entry.venue is not None else None


def day_time_key(entry: ScheduleEntry) -> tuple[Day, TimeSlot]:
    return require_slot(entry)


def entries_for_sections(
    index: dict[SectionKey, list[ScheduleEntry]],
    section_keys: Iterable[SectionKey],
) -> list[ScheduleEntry]:
    """Collect the entries of the given sections in the order the sections are listed."""
    collected: list[ScheduleEntry] = []
    for section_key in dict.fromkeys(section_keys):
        collected.extend(index.get(section_key, ()))
    return collected


def venue_clashes(entries: Iterable[ScheduleEntry]) -> list[ClashGroup]:
    located = (entry for entry in entries if entry.venue is not None)
    return find_clashes(located, venue_key, keyed_on_venue=True)


def student_clashes(student_entries: Iterable[ScheduleEntry]) -> list[ClashGroup]:
    # A student cannot attend two places at once, so the venue is irrelevant here.
    return find_clashes(student_entries, day_time_key, keyed_on_venue=False)


def lecturer_self_clashes(
    entries: Iterable[ScheduleEntry],
    taught_sections: Collection[SectionKey],
) -> list[ClashGroup]:
    taught = set(taught_sections)
    own = (
        entry
        for entry in entries
        if entry.venue is not None and entry.course_section.key in taught
    )
    return find_clashes(own, venue_key, keyed_on_venue=True)


def clashes_involving(clashes: Iterable[ClashGroup], section_keys: Collection[SectionKey]) -> list[ClashGroup]:
    wanted = set(section_keys)
    return [clash for clash in clashes if wanted.intersection(clash.section_keys)]
