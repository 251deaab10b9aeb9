from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import and_, exists, or_, select
from sqlalchemy.orm import Session

from app.models.course import Course, CourseSection, CourseSectionSchedule
from app.models.lecturer import Lecturer
from app.models.student import Student, StudentRegisteredCourse
from app.models.venue import Venue, VenueType
from app.services.schedule_facts import RawScheduleRow, Registration, RosterStudent

SectionKey = tuple[str, str]


class TimetableRepository:
    """Read-only queries over one academic session and semester."""

    def __init__(self, db: Session) -> None:
        self.db = db

    def _schedule_statement(self, session: str, semester: int):
        css = CourseSectionSchedule
        cs = CourseSection
        return (
            select(
                css.day,
                css.time,
                Venue.code,
                Venue.short_name,
                css.course_code,
                css.section,
                Course.name,
                cs.lecturer_no,
                Lecturer.name,
            )
            .join(
                cs,
                and_(
                    cs.session == css.session,
                    cs.semester == css.semester,
                    cs.course_code == css.course_code,
                    cs.section == css.section,
                ),
            )
            .join(Course, Course.code == css.course_code)
            .outerjoin(Venue, Venue.code == css.venue_code)
            .outerjoin(Lecturer, Lecturer.worker_no == cs.lecturer_no)
            .where(css.session == session, css.semester == semester)
            .order_by(css.day.asc(), css.time.asc(), css.course_code.asc(), css.section.asc())
        )

    @staticmethod
    def _to_raw_rows(result) -> list[RawScheduleRow]:
        return [
            RawScheduleRow(
                schedule_day=day,
                schedule_time=time,
                venue_code=venue_code,
                venue_short_name=venue_short_name,
                course_code=course_code,
                section=section,
                course_name=course_name,
                lecturer_no=lecturer_no,
                lecturer_name=lecturer_name,
            )
            for day, time, venue_code, venue_short_name, course_code, section, course_name, lecturer_no, lecturer_name in result
        ]

    def fetch_schedule_rows(self, session: str, semester: int) -> list[RawScheduleRow]:
        return self._to_raw_rows(self.db.execute(self._schedule_statement(session, semester)).all())

    def fetch_section_schedule_rows(
        self,
        session: str,
        semester: int,
        section_keys: Sequence[SectionKey],
    ) -> list[RawScheduleRow]:
        if not section_keys:
            return []
        css = CourseSectionSchedule
        statement = self._schedule_statement(session, semester).where(
            or_(*(and_(css.course_code == code, css.section == section) for code, section in section_keys))
        )
        return self._to_raw_rows(self.db.execute(statement).all())

    def _registered_in_scope(self, session: str, semester: int):
        return exists().where(
            StudentRegisteredCourse.matric_no == Student.matric_no,
            StudentRegisteredCourse.session == session,
            StudentRegisteredCourse.semester == semester,
        )

    def fetch_active_roster(self, session: str, semester: int) -> list[RosterStudent]:
        students = self.db.execute(
            select(Student).where(self._registered_in_scope(session, semester)).order_by(Student.matric_no.asc())
        ).scalars()
        return [
            RosterStudent(matric_no=student.matric_no, name=student.name, department_code=student.course_code)
            for student in students
        ]

    def fetch_registrations(self, session: str, semester: int) -> list[Registration]:
        rows = self.db.execute(
            select(
                StudentRegisteredCourse.matric_no,
                StudentRegisteredCourse.course_code,
                StudentRegisteredCourse.section,
            )
            .where(StudentRegisteredCourse.session == session, StudentRegisteredCourse.semester == semester)
            .order_by(StudentRegisteredCourse.matric_no.asc(), StudentRegisteredCourse.course_code.asc())
        ).all()
        return [Registration(matric_no=matric_no, course_code=code, section=section) for matric_no, code, section in rows]

    def get_student(self, matric_no: str) -> Student | None:
        return self.db.get(Student, matric_no.upper())

    def get_lecturer(self, worker_no: int) -> Lecturer | None:
        return self.db.get(Lecturer, worker_no)

    def fetch_student_sections(self, matric_no: str, session: str, semester: int) -> list[SectionKey]:
        rows = self.db.execute(
            select(StudentRegisteredCourse.course_code, StudentRegisteredCourse.section)
            .where(
                StudentRegisteredCourse.matric_no == matric_no,
                StudentRegisteredCourse.session == session,
                StudentRegisteredCourse.semester == semester,
            )
            .order_by(StudentRegisteredCourse.course_code.asc())
        ).all()
        return [(code, section) for code, section in rows]

    def fetch_lecturer_sections(self, worker_no: int, session: str, semester: int) -> list[SectionKey]:
        rows = self.db.execute(
            select(CourseSection.course_code, CourseSection.section)
            .where(
                CourseSection.session == session,
                CourseSection.semester == semester,
                CourseSection.lecturer_no == worker_no,
            )
            .order_by(CourseSection.course_code.asc(), CourseSection.section.asc())
        ).all()
        return [(code, section) for code, section in rows]

    def search_students(
        self,
        session: str,
        semester: int,
        query: str,
        *,
        by_matric_no: bool,
        limit: int = 10,
        offset: int = 0,
    ) -> list[Student]:
        if limit < 1:
            raise ValueError("Limit must be greater than 0")
        if offset < 0:
            raise ValueError("Offset must be greater than or equal to 0")

        if by_matric_no:
            condition = Student.matric_no.ilike(f"{query}%")
        else:
            condition = Student.name.ilike(f"%{query}%")
        statement = (
            select(Student)
            .where(condition, self._registered_in_scope(session, semester))
            .order_by(Student.name.asc(), Student.matric_no.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.db.execute(statement).scalars())

    def fetch_available_venues(self, session: str, semester: int, day: int, times: Sequence[int]) -> list[Venue]:
        occupied = exists().where(
            CourseSectionSchedule.session == session,
            CourseSectionSchedule.semester == semester,
            CourseSectionSchedule.venue_code == Venue.code,
            CourseSectionSchedule.day == day,
            CourseSectionSchedule.time.in_(list(times)),
        )
        statement = (
            select(Venue)
            .where(Venue.capacity > 0, Venue.type != VenueType.none, ~occupied)
            .order_by(Venue.short_name.asc(), Venue.code.asc())
        )
        return list(self.db.execute(statement).scalars())
