from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import Scope, get_repository, get_scope, require_roles
from app.models.user import User, UserRole
from app.schemas.student import StudentSearchOut
from app.schemas.timetable import ClashOut, TimetableEntryOut
from app.services.repository import TimetableRepository
from app.services.timetable import TimetableService
from app.services.validation import is_valid_matric_number

router = APIRouter()


def _matric_no(matric_no: str | None = Query(default=None)) -> str:
    if not matric_no:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Matric number is required.")
    if not is_valid_matric_number(matric_no):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid matric number format.")
    return matric_no.upper()


@router.get("/timetable", response_model=list[TimetableEntryOut])
def student_timetable(
    scope: Scope = Depends(get_scope),
    matric_no: str = Depends(_matric_no),
    current_user: User = Depends(require_roles(UserRole.student, UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> list[TimetableEntryOut]:
    entries = TimetableService(repository).student_timetable(matric_no, scope.session, scope.semester)
    return [TimetableEntryOut.from_entry(entry) for entry in entries]


@router.get("/clashes", response_model=list[ClashOut])
def student_clashes(
    scope: Scope = Depends(get_scope),
    matric_no: str = Depends(_matric_no),
    current_user: User = Depends(require_roles(UserRole.student, UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> list[ClashOut]:
    clashes = TimetableService(repository).student_clashes(matric_no, scope.session, scope.semester)
    return [ClashOut.from_group(group) for group in clashes]


@router.get("/search", response_model=list[StudentSearchOut])
def search_students(
    query: str = Query(default=""),
    limit: int = Query(default=10, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    scope: Scope = Depends(get_scope),
    current_user: User = Depends(require_roles(UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> list[StudentSearchOut]:
    try:
        students = TimetableService(repository).search_students(
            scope.session, scope.semester, query, limit=limit, offset=offset
        )
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return [StudentSearchOut(matricNo=student.matric_no, name=student.name) for student in students]
