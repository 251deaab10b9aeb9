import pytest

from app.core.exceptions import MalformedScheduleError
from app.services.clash_grouping import (
    clashes_involving,
    entries_for_sections,
    lecturer_self_clashes,
    student_clashes,
    venue_clashes,
)
from app.services.schedule_facts import CourseRef, CourseSectionRef, ScheduleEntry, VenueRef, index_by_section
from app.services.time_domain import Day, TimeSlot


def entry(code, day, time, venue="R101", section="01"):
    return ScheduleEntry(
        day=Day(day) if day is not None else None,
        time=TimeSlot(time) if time is not None else None,
        course_section=CourseSectionRef(course=CourseRef(code=code, name=f"{code} name"), section=section),
        venue=VenueRef(code=f"N28-{venue}", short_name=venue) if venue is not None else None,
    )


def test_two_courses_sharing_a_room_slot_clash():
    clashes = venue_clashes([entry("CS101", 1, 2), entry("CS102", 1, 2)])

    assert len(clashes) == 1
    clash = clashes[0]
    assert clash.day is Day.monday
    assert clash.time is TimeSlot.slot_2
    assert clash.venue == VenueRef(code="N28-R101", short_name="R101")
    assert clash.section_keys == (("CS101", "01"), ("CS102", "01"))


def test_same_section_twice_is_not_a_clash():
    assert venue_clashes([entry("CS101", 1, 2), entry("CS101", 1, 2)]) == []


def test_duplicate_rows_collapse_inside_a_clash():
    clashes = venue_clashes([entry("CS101", 1, 2), entry("CS101", 1, 2), entry("CS102", 1, 2)])
    assert clashes[0].section_keys == (("CS101", "01"), ("CS102", "01"))


def test_sections_of_one_course_can_clash():
    clashes = venue_clashes([entry("CS101", 1, 2, section="01"), entry("CS101", 1, 2, section="02")])
    assert clashes[0].section_keys == (("CS101", "01"), ("CS101", "02"))


def test_different_rooms_do_not_clash_by_venue():
    assert venue_clashes([entry("CS101", 1, 2, venue="R101"), entry("CS102", 1, 2, venue="R102")]) == []


def test_rooms_sharing_a_short_name_do_not_clash():
    first = entry("CS101", 1, 1)
    second = ScheduleEntry(
        day=Day.monday,
        time=TimeSlot.slot_1,
        course_section=CourseSectionRef(course=CourseRef(code="CS102", name="CS102 name"), section="01"),
        venue=VenueRef(code="N29-R101", short_name="R101"),
    )

    assert first.venue.short_name == second.venue.short_name
    assert venue_clashes([first, second]) == []
    assert len(student_clashes([first, second])) == 1


def test_unplaced_entries_never_form_venue_clashes():
    assert venue_clashes([entry("CS101", 1, 2, venue=None), entry("CS102", 1, 2, venue=None)]) == []


def test_groups_follow_first_seen_order():
    clashes = venue_clashes(
        [
            entry("CS201", 4, 6),
            entry("CS101", 1, 2),
            entry("CS202", 4, 6),
            entry("CS102", 1, 2),
        ]
    )
    assert [(int(clash.day), int(clash.time)) for clash in clashes] == [(4, 6), (1, 2)]


def test_student_clash_ignores_venue_but_keeps_participant_venues():
    clashes = student_clashes([entry("CS101", 2, 5, venue="R101"), entry("CS102", 2, 5, venue=None)])

    assert len(clashes) == 1
    assert clashes[0].venue is None
    assert [item.venue for item in clashes[0].participants] == [VenueRef(code="N28-R101", short_name="R101"), None]


def test_entry_without_slot_aborts_grouping():
    with pytest.raises(MalformedScheduleError):
        student_clashes([entry("CS101", 1, None)])


def test_lecturer_self_clash_only_counts_own_located_sections():
    entries = [
        entry("CS101", 1, 2),
        entry("CS102", 1, 2),
        entry("CS103", 1, 2),
        entry("CS104", 3, 1, venue=None),
        entry("CS105", 3, 1, venue=None),
    ]

    clashes = lecturer_self_clashes(entries, {("CS101", "01"), ("CS102", "01"), ("CS104", "01"), ("CS105", "01")})

    assert len(clashes) == 1
    assert clashes[0].section_keys == (("CS101", "01"), ("CS102", "01"))


def test_entries_for_sections_and_clashes_involving():
    entries = [entry("CS101", 1, 2), entry("CS102", 1, 2), entry("CS103", 2, 2)]
    index = index_by_section(entries)

    collected = entries_for_sections(index, [("CS103", "01"), ("CS101", "01"), ("CS103", "01"), ("CS999", "01")])
    assert [item.course_section.course.code for item in collected] == ["CS103", "CS101"]

    clashes = venue_clashes(entries)
    assert clashes_involving(clashes, [("CS102", "01")]) == clashes
    assert clashes_involving(clashes, [("CS103", "01")]) == []
