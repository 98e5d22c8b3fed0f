import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.concurrency import run_in_threadpool

from boilerplate.api.deps import (
    get_current_user,
    get_mail_service,
    get_user_service,
)
from boilerplate.core.config import settings
from boilerplate.core.security import create_session_token, validate_password
from boilerplate.db.models.user import User as UserModel
from boilerplate.errors import (
    DomainValidationError,
    DuplicateResourceError,
    UnauthorizedError,
)
from boilerplate.schemas.user import (
    ForgotPasswordRequest,
    LoginRequest,
    Message,
    PasswordChange,
    ProfileUpdate,
    ResetPasswordRequest,
    User,
    UserRegister,
    UserUpdate,
)
from boilerplate.services.email import SmtpMailService, password_reset_body
from boilerplate.services.user import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

FORGOT_PASSWORD_MESSAGE = "If the email exists, a password reset link has been sent."


def _sign_in(response: Response, user: UserModel) -> None:
    """Store a signed session token for ``user`` in the session cookie."""
    response.set_cookie(
        key=settings.session_cookie_name,
        value=create_session_token(user),
        max_age=settings.access_token_expire_minutes * 60,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )


def _check_password_strength(password: str) -> None:
    is_valid, error_message = validate_password(password)
    if not is_valid:
        raise DomainValidationError(error_message)


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
def register(
    data: UserRegister,
    service: UserService = Depends(get_user_service),
):
    """Register a new account."""
    _check_password_strength(data.password)
    user = service.add_user(data.name, data.email, data.password, data.role)
    if user is None:
        raise DuplicateResourceError("Email already registered")
    return User.model_validate(user)


@router.post("/login", response_model=User)
def login(
    credentials: LoginRequest,
    response: Response,
    service: UserService = Depends(get_user_service),
):
    """Authenticate and set the session cookie."""
    user = service.authenticate(credentials.email, credentials.password)
    if user is None:
        raise UnauthorizedError("Invalid Login Credentials")

    _sign_in(response, user)
    return User.model_validate(user)


@router.post("/logout", response_model=Message)
def logout(
    response: Response,
    current_user: UserModel = Depends(get_current_user),
):
    response.delete_cookie(settings.session_cookie_name)
    return Message(message="Logged out")


@router.get("/me", response_model=User)
def get_current_user_info(current_user: UserModel = Depends(get_current_user)):
    """Get current authenticated user information."""
    return User.model_validate(current_user)


@router.put("/profile", response_model=User)
def update_profile(
    data: ProfileUpdate,
    response: Response,
    current_user: UserModel = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Update the signed-in user's name and email. The role cannot be changed here."""
    updated = service.update_user(
        current_user.id,
        UserUpdate(name=data.name, email=data.email, role=current_user.role),
    )
    if updated is None:
        raise DuplicateResourceError("Email already registered")

    _sign_in(response, updated)
    return User.model_validate(updated)


@router.put("/password", response_model=Message)
def change_password(
    data: PasswordChange,
    response: Response,
    current_user: UserModel = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Change the signed-in user's password after verifying the current one."""
    if not service.hasher.verify(current_user.password_hash, data.old_password):
        raise DomainValidationError("Please enter current password")
    _check_password_strength(data.password)

    updated = service.update_user(
        current_user.id,
        UserUpdate(
            name=current_user.name,
            email=current_user.email,
            role=current_user.role,
            password=data.password,
        ),
    )
    if updated is None:
        raise DomainValidationError("There was a problem updating the password")

    _sign_in(response, updated)
    return Message(message="Successfully Updated Password")


@router.post("/forgot-password", response_model=Message)
async def forgot_password(
    data: ForgotPasswordRequest,
    request: Request,
    service: UserService = Depends(get_user_service),
    mailer: SmtpMailService = Depends(get_mail_service),
):
    """
    Request a password reset link by email.

    Always returns the same message so account existence is not revealed.
    """
    token = await run_in_threadpool(service.forgot_password, data.email)
    if token:
        body = password_reset_body(
            data.email,
            token,
            base_url=settings.frontend_url or str(request.base_url),
            expire_minutes=service.reset_token_expire_minutes,
        )
        sent = await mailer.send_mail_async("Password Reset Request", body, data.email)
        if not sent:
            logger.error("Password reset email could not be delivered")

    return Message(message=FORGOT_PASSWORD_MESSAGE)


@router.post("/reset-password", response_model=Message)
def reset_password(
    data: ResetPasswordRequest,
    service: UserService = Depends(get_user_service),
):
    """Reset a password using the emailed token."""
    _check_password_strength(data.password)
    user = service.reset_password(data.email, data.token, data.password)
    if user is None:
        raise DomainValidationError("Invalid Password Reset Request")
    return Message(message="Password reset successfully")
