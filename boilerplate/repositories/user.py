from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from boilerplate.db.models.user import User as UserModel
from boilerplate.domain.pagination import SortDirection, SortField
from boilerplate.domain.role import Role
from boilerplate.errors import DuplicateResourceError

SORT_COLUMNS = {
    SortField.id: UserModel.id,
    SortField.name: UserModel.name,
    SortField.email: UserModel.email,
}


def _commit_unique_email(db: Session) -> None:
    """Commit, reporting a users.email unique index violation as DuplicateResourceError."""
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateResourceError("Email already registered") from e


def get_user_by_email(db: Session, email: str) -> UserModel | None:
    """Get a user by email."""
    return db.query(UserModel).filter(UserModel.email == email).first()


def get_user_by_email_for_update(db: Session, email: str) -> UserModel | None:
    """Get a user by email, locking the row until the transaction ends."""
    return (
        db.query(UserModel)
        .filter(UserModel.email == email)
        .with_for_update()
        .first()
    )


def get_user_by_id(db: Session, user_id: int) -> UserModel | None:
    """Get a user by ID."""
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def get_other_user_by_email(
    db: Session, email: str, exclude_id: int | None = None
) -> UserModel | None:
    """Get a user owning ``email`` other than the one identified by exclude_id."""
    query = db.query(UserModel).filter(UserModel.email == email)
    if exclude_id is not None:
        query = query.filter(UserModel.id != exclude_id)
    return query.first()


def get_all_users(db: Session) -> list[UserModel]:
    """Get all users."""
    return db.query(UserModel).all()


def get_users_paginated(
    db: Session,
    page: int = 1,
    page_size: int = 10,
    order_by: SortField = SortField.id,
    direction: SortDirection = SortDirection.asc,
) -> tuple[list[UserModel], int]:
    """
    Get one page of users in the requested order.

    Args:
        page: Page number (1-indexed)
        page_size: Number of items per page
        order_by: Column to sort on
        direction: Sort direction

    Returns:
        Tuple of (list of users, total count)
    """
    query = db.query(UserModel)
    total = query.count()

    column = SORT_COLUMNS[order_by]
    ordering = column.desc() if direction is SortDirection.desc else column.asc()
    # id as tie-breaker keeps pages stable when sorting on non-unique columns
    query = query.order_by(ordering, UserModel.id.asc())

    skip = (page - 1) * page_size
    users = query.offset(skip).limit(page_size).all()
    return users, total


def create_user(
    db: Session,
    name: str,
    email: str,
    password_hash: str,
    role: Role,
) -> UserModel:
    """Create a new user in the database. Pure data access - no business logic."""
    db_user = UserModel(
        name=name,
        email=email,
        password_hash=password_hash,
        role=role,
    )
    db.add(db_user)
    _commit_unique_email(db)
    db.refresh(db_user)
    return db_user


def save_user(db: Session, user: UserModel) -> UserModel:
    """Persist changes made to a loaded user."""
    _commit_unique_email(db)
    db.refresh(user)
    return user


def delete_user(db: Session, user: UserModel) -> None:
    db.delete(user)
    db.commit()
