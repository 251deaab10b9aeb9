from collections.abc import Callable, Generator, Iterable
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Query, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidScopeError
from app.core.security import decode_token
from app.db.session import SessionLocal
from app.models.user import User, UserRole
from app.services.repository import TimetableRepository
from app.services.validation import validate_academic_session, validate_semester

security = HTTPBearer()


@dataclass(frozen=True)
class Scope:
    session: str
    semester: int


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_repository(db: Session = Depends(get_db)) -> TimetableRepository:
    return TimetableRepository(db)


CREDENTIALS_ERROR = "Could not validate credentials"


def _unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=CREDENTIALS_ERROR,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _token_claims(token: str) -> tuple[str, str | None]:
    try:
        payload = decode_token(token)
    except JWTError as exc:
        raise _unauthorized() from exc
    subject = payload.get("sub")
    if not subject:
        raise _unauthorized()
    return subject, payload.get("role")


def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    user_id, token_role = _token_claims(credentials.credentials)
    user = db.get(User, user_id)
    # A token minted for another role is stale once the account changes role.
    if user is None or (token_role is not None and token_role != user.role.value):
        raise _unauthorized()
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User account is inactive")
    return user


def require_roles(*roles: UserRole) -> Callable[[User], User]:
    allowed_roles: Iterable[UserRole] = set(roles)

    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role not in allowed_roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return current_user

    return role_checker


def get_scope(
    session: str | None = Query(default=None),
    semester: int | None = Query(default=None),
) -> Scope:
    if session is None or semester is None:
        raise InvalidScopeError("Academic session and semester are required.")
    if not validate_academic_session(session):
        raise InvalidScopeError("Invalid academic session format.", details={"session": session})
    if not validate_semester(semester):
        raise InvalidScopeError("Invalid semester.", details={"semester": semester})
    return Scope(session=session, semester=semester)
