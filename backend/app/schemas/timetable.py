from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.services.clash_grouping import ClashGroup, ClashParticipant
from app.services.schedule_facts import CourseSectionRef, LecturerRef, ScheduleEntry, VenueRef


class CourseOut(BaseModel):
    code: str
    name: str


class LecturerOut(BaseModel):
    worker_no: int = Field(alias="workerNo")
    name: str

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_ref(cls, ref: LecturerRef | None) -> "LecturerOut | None":
        if ref is None:
            return None
        return cls(workerNo=ref.worker_no, name=ref.name)


class VenueOut(BaseModel):
    short_name: str = Field(alias="shortName")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_ref(cls, ref: VenueRef | None) -> "VenueOut | None":
        if ref is None:
            return None
        return cls(shortName=ref.short_name)


class CourseSectionOut(BaseModel):
    section: str
    course: CourseOut
    lecturer: LecturerOut | None = None

    @classmethod
    def from_ref(cls, ref: CourseSectionRef) -> "CourseSectionOut":
        return cls(
            section=ref.section,
            course=CourseOut(code=ref.course.code, name=ref.course.name),
            lecturer=LecturerOut.from_ref(ref.lecturer),
        )


class TimetableEntryOut(BaseModel):
    day: int
    time: int
    course_section: CourseSectionOut = Field(alias="courseSection")
    venue: VenueOut | None = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_entry(cls, entry: ScheduleEntry) -> "TimetableEntryOut":
        return cls(
            day=int(entry.day),
            time=int(entry.time),
            courseSection=CourseSectionOut.from_ref(entry.course_section),
            venue=VenueOut.from_ref(entry.venue),
        )


class ClashCourseSectionOut(CourseSectionOut):
    venue: VenueOut | None = None

    @classmethod
    def from_participant(cls, participant: ClashParticipant) -> "ClashCourseSectionOut":
        base = CourseSectionOut.from_ref(participant.course_section)
        return cls(
            section=base.section,
            course=base.course,
            lecturer=base.lecturer,
            venue=VenueOut.from_ref(participant.venue),
        )


class ClashOut(BaseModel):
    day: int
    time: int
    venue: VenueOut | None = None
    course_sections: list[ClashCourseSectionOut] = Field(default_factory=list, alias="courseSections")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_group(cls, group: ClashGroup) -> "ClashOut":
        return cls(
            day=int(group.day),
            time=int(group.time),
            venue=VenueOut.from_ref(group.venue),
            courseSections=[ClashCourseSectionOut.from_participant(item) for item in group.participants],
        )
