from app.models.academic_session import AcademicSession  # noqa: F401
from app.models.course import Course, CourseSection, CourseSectionSchedule  # noqa: F401
from app.models.lecturer import Lecturer  # noqa: F401
from app.models.student import Student, StudentRegisteredCourse  # noqa: F401
from app.models.user import User, UserRole  # noqa: F401
from app.models.venue import Venue, VenueType  # noqa: F401
