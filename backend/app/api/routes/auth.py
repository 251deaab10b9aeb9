import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_current_user, get_db
from app.core.config import get_settings
from app.core.security import create_access_token, verify_password
from app.models.user import User, UserRole
from app.schemas.user import Token, UserLogin, UserOut
from app.services.rate_limit import enforce_rate_limit
from app.services.validation import is_valid_matric_number, is_valid_worker_no

settings = get_settings()
router = APIRouter()
logger = logging.getLogger(__name__)


def role_for_login(login: str) -> UserRole | None:
    if is_valid_matric_number(login):
        return UserRole.student
    if is_valid_worker_no(login):
        return UserRole.lecturer
    return None


def validate_login_user(payload: UserLogin, db: Session) -> User:
    invalid = HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password.")
    role = role_for_login(payload.login)
    if role is None:
        raise invalid
    user = db.execute(select(User).where(User.login == payload.login, User.role == role)).scalar_one_or_none()
    if user is None or not verify_password(payload.password, user.hashed_password):
        logger.info("Rejected %s login for %s", role.value, payload.login)
        raise invalid
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")
    return user


@router.post("/login", response_model=Token)
def login(payload: UserLogin, request: Request, db: Session = Depends(get_db)) -> Token:
    enforce_rate_limit(
        request=request,
        scope="auth.login",
        limit=settings.auth_rate_limit_login_max_requests,
        window_seconds=settings.auth_rate_limit_window_seconds,
    )
    user = validate_login_user(payload, db)
    access_token = create_access_token(user.id, role=user.role.value)
    return Token(access_token=access_token, token_type="bearer", user=UserOut.model_validate(user))


@router.get("/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)) -> UserOut:
    return current_user


@router.post("/logout")
def logout(current_user: User = Depends(get_current_user)) -> dict:
    return {"success": True}
