from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie
from sqlalchemy.orm import Session

from boilerplate.core.config import settings
from boilerplate.core.security import decode_token
from boilerplate.db import SessionLocal
from boilerplate.db.models.user import User
from boilerplate.services.email import SmtpMailService
from boilerplate.services.user import UserService

session_cookie = APIKeyCookie(name=settings.session_cookie_name, auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(db)


def get_mail_service() -> SmtpMailService:
    return SmtpMailService()


def get_current_user(
    token: str | None = Depends(session_cookie),
    service: UserService = Depends(get_user_service),
) -> User:
    """Get the signed-in user from the session cookie."""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    payload = decode_token(token)
    if payload is None or payload.get("type") != "access":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        )

    user = service.get_user(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )

    return user


def require_roles(*role_names: str):
    """
    Create a dependency that requires the current user to have one of the specified roles.

    Example:
        Depends(require_roles("admin"))
        Depends(require_roles("admin", "manager"))
    """
    def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role.value not in role_names:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Not enough permissions",
            )
        return current_user

    return role_checker
