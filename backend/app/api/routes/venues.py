from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.deps import Scope, get_repository, get_scope, require_roles
from app.models.user import User, UserRole
from app.schemas.venue import AvailableVenueOut
from app.services.repository import TimetableRepository
from app.services.timetable import TimetableService
from app.services.validation import is_valid_day, is_valid_time

router = APIRouter()


@router.get("/available", response_model=list[AvailableVenueOut])
def available_venues(
    day: int = Query(),
    times: list[int] = Query(),
    scope: Scope = Depends(get_scope),
    current_user: User = Depends(require_roles(UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> list[AvailableVenueOut]:
    if not is_valid_day(day):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid day.")
    invalid_times = [value for value in times if not is_valid_time(value)]
    if invalid_times:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid time(s): {', '.join(str(value) for value in invalid_times)}",
        )
    venues = TimetableService(repository).available_venues(scope.session, scope.semester, day, times)
    return [
        AvailableVenueOut(
            code=venue.code,
            shortName=venue.short_name,
            name=venue.name,
            capacity=venue.capacity,
            type=venue.type,
        )
        for venue in venues
    ]
