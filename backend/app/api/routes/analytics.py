import logging

from fastapi import APIRouter, Depends

from app.api.deps import Scope, get_repository, get_scope, require_roles
from app.models.user import User, UserRole
from app.schemas.analytics import AnalyticsOut
from app.services.analytics import AnalyticsService
from app.services.repository import TimetableRepository

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/generate", response_model=AnalyticsOut)
def generate_analytics(
    scope: Scope = Depends(get_scope),
    current_user: User = Depends(require_roles(UserRole.lecturer)),
    repository: TimetableRepository = Depends(get_repository),
) -> AnalyticsOut:
    try:
        report = AnalyticsService(repository).generate(scope.session, scope.semester)
    except Exception:
        logger.exception(
            "ANALYTICS GENERATION FAILED | user_id=%s | session=%s | semester=%s",
            current_user.id,
            scope.session,
            scope.semester,
        )
        raise
    return AnalyticsOut.from_report(report)
