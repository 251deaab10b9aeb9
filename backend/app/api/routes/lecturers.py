from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import Scope, get_repository, get_scope, require_roles
from app.models.user import User, UserRole
from app.schemas.timetable import ClashOut, TimetableEntryOut
from app.services.repository import TimetableRepository
from app.services.timetable import TimetableService
from app.services.validation import is_valid_worker_no

router = APIRouter()


def _worker_no(worker_no: str | None = Query(default=None)) -> int:
    if not worker_no:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Worker number is required.")
    if not is_valid_worker_no(worker_no):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid worker number format.")
    return int(worker_no)


@router.get("/timetable", response_model=list[TimetableEntryOut])
def lecturer_timetable(
    scope: Scope = Depends(get_scope),
    worker_no: int = Depends(_worker_no),
    current_user: User = Depends(require_roles(UserRole.student, UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> list[TimetableEntryOut]:
    entries = TimetableService(repository).lecturer_timetable(worker_no, scope.session, scope.semester)
    return [TimetableEntryOut.from_entry(entry) for entry in entries]


@router.get("/clashes", response_model=list[ClashOut])
def lecturer_self_clashes(
    scope: Scope = Depends(get_scope),
    worker_no: int = Depends(_worker_no),
    current_user: User = Depends(require_roles(UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> list[ClashOut]:
    clashes = TimetableService(repository).lecturer_self_clashes(worker_no, scope.session, scope.semester)
    return [ClashOut.from_group(group) for group in clashes]


@router.get("/venue-clash", response_model=list[ClashOut])
def lecturer_venue_clashes(
    scope: Scope = Depends(get_scope),
    worker_no: int = Depends(_worker_no),
    current_user: User = Depends(require_roles(UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> list[ClashOut]:
    clashes = TimetableService(repository).lecturer_venue_clashes(worker_no, scope.session, scope.semester)
    return [ClashOut.from_group(group) for group in clashes]
