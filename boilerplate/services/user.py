"""User service: account lifecycle, authentication and the password reset workflow.

Expected failures (unknown user, taken email, bad credentials, invalid reset
request) are reported as ``None``/``False``. Database errors propagate.
"""

import logging

from sqlalchemy.orm import Session

import boilerplate.repositories.forgot_password as token_repo
import boilerplate.repositories.user as user_repo
from boilerplate.core.config import settings
from boilerplate.core.security import PasswordHasher, pwd_hasher
from boilerplate.db.base import Base
from boilerplate.db.models import ForgotPassword, User as UserModel  # noqa: F401
from boilerplate.domain.pagination import Paged, SortDirection, SortField
from boilerplate.domain.reset_token import ResetTokenPolicy, new_reset_token, utcnow
from boilerplate.domain.role import Role
from boilerplate.errors import DuplicateResourceError
from boilerplate.schemas.user import UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(
        self,
        db: Session,
        hasher: PasswordHasher | None = None,
        reset_token_expire_minutes: int | None = None,
    ):
        self.db = db
        self.hasher = hasher or pwd_hasher
        self.reset_token_expire_minutes = (
            reset_token_expire_minutes
            if reset_token_expire_minutes is not None
            else settings.password_reset_token_expire_minutes
        )

    def initialise(self) -> None:
        """Destroy and recreate every table. Development and tests only."""
        bind = self.db.get_bind()
        self.db.close()
        logger.warning("Recreating database schema on %s", bind.url)
        Base.metadata.drop_all(bind=bind)
        Base.metadata.create_all(bind=bind)

    # ------------------ Queries ------------------

    def get_users(self) -> list[UserModel]:
        return user_repo.get_all_users(self.db)

    def get_users_page(
        self,
        page: int = 1,
        size: int = 10,
        order_by: str | SortField = "id",
        direction: str | SortDirection = "asc",
    ) -> Paged[UserModel]:
        """
        Get one page of users.

        - order_by: id, name or email (anything else sorts by id)
        - direction: asc or desc (anything else sorts ascending)
        - page and size below 1 are clamped to 1
        """
        page = max(page, 1)
        size = max(size, 1)
        field = SortField.parse(order_by)
        sort_direction = SortDirection.parse(direction)

        users, total = user_repo.get_users_paginated(
            self.db,
            page=page,
            page_size=size,
            order_by=field,
            direction=sort_direction,
        )
        return Paged(
            data=users,
            total_rows=total,
            current_page=page,
            page_size=size,
            order_by=field,
            direction=sort_direction,
        )

    def get_user(self, user_id: int) -> UserModel | None:
        return user_repo.get_user_by_id(self.db, user_id)

    def get_user_by_email(self, email: str) -> UserModel | None:
        return user_repo.get_user_by_email(self.db, email)

    def is_email_available(self, email: str, excluding_user_id: int | None = None) -> bool:
        """True if no user other than ``excluding_user_id`` owns ``email``."""
        return user_repo.get_other_user_by_email(self.db, email, excluding_user_id) is None

    # ------------------ Account lifecycle ------------------

    def add_user(self, name: str, email: str, password: str, role: Role) -> UserModel | None:
        """Register a user. Returns None if the email is already registered."""
        if user_repo.get_user_by_email(self.db, email):
            logger.info("Registration rejected: email already registered")
            return None

        try:
            return user_repo.create_user(
                self.db,
                name=name,
                email=email,
                password_hash=self.hasher.hash(password),
                role=role,
            )
        except DuplicateResourceError:
            logger.info("Registration rejected: email registered concurrently")
            return None

    def update_user(self, user_id: int, user_data: UserUpdate) -> UserModel | None:
        """
        Overwrite a user's name, email and role (and password when supplied).

        Returns None if the user does not exist or the email belongs to
        another user.
        """
        user = user_repo.get_user_by_id(self.db, user_id)
        if not user:
            return None

        if not self.is_email_available(user_data.email, user_id):
            logger.info("Update of user %s rejected: email already registered", user_id)
            return None

        user.name = user_data.name
        user.email = user_data.email
        user.role = user_data.role
        if user_data.password is not None:
            user.password_hash = self.hasher.hash(user_data.password)

        try:
            return user_repo.save_user(self.db, user)
        except DuplicateResourceError:
            logger.info("Update of user %s rejected: email registered concurrently", user_id)
            return None

    def delete_user(self, user_id: int) -> bool:
        user = user_repo.get_user_by_id(self.db, user_id)
        if not user:
            return False
        user_repo.delete_user(self.db, user)
        return True

    def authenticate(self, email: str, password: str) -> UserModel | None:
        """Return the user if the credentials match, otherwise None."""
        user = user_repo.get_user_by_email(self.db, email)
        if user and self.hasher.verify(user.password_hash, password):
            return user
        return None

    # ------------------ Password reset ------------------

    def forgot_password(self, email: str) -> str | None:
        """
        Issue a new reset token for ``email``.

        Any token still valid for the email is expired first, so at most one
        token per email is valid at a time. Returns None if no account uses
        the email.
        """
        # Row lock serialises concurrent requests for the same account
        user = user_repo.get_user_by_email_for_update(self.db, email)
        if not user:
            self.db.rollback()
            return None

        policy = ResetTokenPolicy(as_of=utcnow())
        for previous in token_repo.get_valid_tokens_for_email(self.db, email, policy):
            token_repo.expire_token(previous, policy.as_of)

        reset = token_repo.add_token(
            self.db,
            email=email,
            token=new_reset_token(),
            created_at=policy.as_of,
            expires_at=policy.expiry_for_new_token(self.reset_token_expire_minutes),
        )
        self.db.commit()
        logger.info("Password reset token issued for user %s", user.id)
        return reset.token

    def reset_password(self, email: str, token: str, new_password: str) -> UserModel | None:
        """
        Set a new password using a valid reset token.

        The token is consumed. Returns None for an unknown email or a token
        that is unknown, belongs to another email, or has expired.
        """
        user = user_repo.get_user_by_email(self.db, email)
        if not user:
            return None

        policy = ResetTokenPolicy(as_of=utcnow())
        reset = token_repo.get_valid_token(self.db, email, token, policy)
        if not reset:
            return None

        token_repo.expire_token(reset, policy.as_of)
        user.password_hash = self.hasher.hash(new_password)
        user = user_repo.save_user(self.db, user)
        logger.info("Password reset completed for user %s", user.id)
        return user

    def get_valid_password_reset_tokens(self) -> list[str]:
        policy = ResetTokenPolicy(as_of=utcnow())
        return [t.token for t in token_repo.get_all_valid_tokens(self.db, policy)]
