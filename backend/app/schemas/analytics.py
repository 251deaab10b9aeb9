from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.timetable import ClashOut, CourseOut, VenueOut
from app.services.analytics import AnalyticsReport, BackToBackStudent, ClashingStudent, DepartmentTotals
from app.services.schedule_facts import RosterStudent, ScheduleEntry


class AnalyticsStudentBase(BaseModel):
    matric_no: str = Field(alias="matricNo")
    name: str
    course_code: str = Field(alias="courseCode")

    model_config = ConfigDict(populate_by_name=True)

    @staticmethod
    def _identity(student: RosterStudent) -> dict:
        return {"matricNo": student.matric_no, "name": student.name, "courseCode": student.department_code}


class BackToBackScheduleOut(BaseModel):
    day: int
    time: int
    course: CourseOut
    section: str
    venue: VenueOut | None = None

    @classmethod
    def from_entry(cls, entry: ScheduleEntry) -> "BackToBackScheduleOut":
        return cls(
            day=int(entry.day),
            time=int(entry.time),
            course=CourseOut(code=entry.course_section.course.code, name=entry.course_section.course.name),
            section=entry.course_section.section,
            venue=VenueOut.from_ref(entry.venue),
        )


class BackToBackStudentOut(AnalyticsStudentBase):
    schedules: list[list[BackToBackScheduleOut]] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: BackToBackStudent) -> "BackToBackStudentOut":
        return cls(
            **cls._identity(result.student),
            schedules=[[BackToBackScheduleOut.from_entry(entry) for entry in run] for run in result.runs],
        )


class ClashingStudentOut(AnalyticsStudentBase):
    clashes: list[ClashOut] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: ClashingStudent) -> "ClashingStudentOut":
        return cls(
            **cls._identity(result.student),
            clashes=[ClashOut.from_group(group) for group in result.clashes],
        )


class DepartmentOut(BaseModel):
    code: str
    total_students: int = Field(alias="totalStudents")
    total_clashes: int = Field(alias="totalClashes")
    total_back_to_back: int = Field(alias="totalBackToBack")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_totals(cls, totals: DepartmentTotals) -> "DepartmentOut":
        return cls(
            code=totals.code,
            totalStudents=totals.total_students,
            totalClashes=totals.total_clashes,
            totalBackToBack=totals.total_back_to_back,
        )


class AnalyticsOut(BaseModel):
    active_students: int = Field(alias="activeStudents")
    back_to_back_students: list[BackToBackStudentOut] = Field(default_factory=list, alias="backToBackStudents")
    clashing_students: list[ClashingStudentOut] = Field(default_factory=list, alias="clashingStudents")
    departments: list[DepartmentOut] = Field(default_factory=list)
    venue_clashes: list[ClashOut] = Field(default_factory=list, alias="venueClashes")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_report(cls, report: AnalyticsReport) -> "AnalyticsOut":
        return cls(
            activeStudents=report.active_students,
            backToBackStudents=[BackToBackStudentOut.from_result(item) for item in report.back_to_back_students],
            clashingStudents=[ClashingStudentOut.from_result(item) for item in report.clashing_students],
            departments=[DepartmentOut.from_totals(item) for item in report.departments],
            venueClashes=[ClashOut.from_group(group) for group in report.venue_clashes],
        )
