from datetime import datetime

from sqlalchemy.orm import Session

from boilerplate.db.models.forgot_password import ForgotPassword as ForgotPasswordModel
from boilerplate.domain.reset_token import ResetTokenPolicy


def get_valid_tokens_for_email(
    db: Session, email: str, policy: ResetTokenPolicy
) -> list[ForgotPasswordModel]:
    """Get every reset token for ``email`` that has not yet expired."""
    return (
        db.query(ForgotPasswordModel)
        .filter(
            ForgotPasswordModel.email == email,
            policy.sqlalchemy_valid_predicate(expires_col=ForgotPasswordModel.expires_at),
        )
        .all()
    )


def get_valid_token(
    db: Session, email: str, token: str, policy: ResetTokenPolicy
) -> ForgotPasswordModel | None:
    """Get the reset token matching (email, token) if it is still valid."""
    return (
        db.query(ForgotPasswordModel)
        .filter(
            ForgotPasswordModel.email == email,
            ForgotPasswordModel.token == token,
            policy.sqlalchemy_valid_predicate(expires_col=ForgotPasswordModel.expires_at),
        )
        .first()
    )


def get_all_valid_tokens(db: Session, policy: ResetTokenPolicy) -> list[ForgotPasswordModel]:
    return (
        db.query(ForgotPasswordModel)
        .filter(policy.sqlalchemy_valid_predicate(expires_col=ForgotPasswordModel.expires_at))
        .order_by(ForgotPasswordModel.id)
        .all()
    )


def add_token(
    db: Session, email: str, token: str, created_at: datetime, expires_at: datetime
) -> ForgotPasswordModel:
    """Stage a new reset token. The caller commits."""
    db_token = ForgotPasswordModel(
        email=email,
        token=token,
        created_at=created_at,
        expires_at=expires_at,
    )
    db.add(db_token)
    return db_token


def expire_token(reset: ForgotPasswordModel, as_of: datetime) -> None:
    """Stage expiry of a reset token. The caller commits."""
    reset.expires_at = as_of
