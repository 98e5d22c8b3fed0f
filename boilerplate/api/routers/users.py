from fastapi import APIRouter, Depends, Query, status
from pydantic import EmailStr

from boilerplate.api.deps import get_user_service, require_roles
from boilerplate.core.config import settings
from boilerplate.db.models.user import User as UserModel
from boilerplate.domain.pagination import (
    Paged,
    SortField,
    link_range,
    paginate,
    toggle_sort_direction,
)
from boilerplate.errors import DuplicateResourceError, NotFoundError
from boilerplate.schemas.pagination import PageLinks, PaginatedResponse, SortLink
from boilerplate.schemas.user import EmailAvailability, User, UserUpdate
from boilerplate.services.user import UserService

router = APIRouter(prefix="/users", tags=["users"])


def _to_response(paged: Paged[UserModel]) -> PaginatedResponse[User]:
    window = paginate(paged.total_rows, paged.page_size, paged.current_page)
    start, end = link_range(
        window.total_pages, paged.current_page, settings.pagination_max_links
    )
    sort_links = {
        field.value: SortLink(
            order=field,
            direction=toggle_sort_direction(paged.order_by, field, paged.direction),
        )
        for field in SortField
    }
    return PaginatedResponse[User](
        data=[User.model_validate(user) for user in paged.data],
        total_rows=paged.total_rows,
        current_page=paged.current_page,
        page_size=paged.page_size,
        total_pages=window.total_pages,
        order_by=paged.order_by,
        direction=paged.direction,
        paginator=PageLinks(
            total_pages=window.total_pages,
            has_previous=window.has_previous,
            has_next=window.has_next,
            previous_page=window.previous_page,
            next_page=window.next_page,
            first_page=window.first_page,
            last_page=window.last_page,
            pages=list(range(start, end + 1)),
        ),
        sort_links=sort_links,
    )


@router.get("", response_model=PaginatedResponse[User])
def get_users_paginated(
    page: int = Query(1, ge=1, description="Page number (1-indexed)"),
    size: int = Query(10, ge=1, le=100, description="Number of items per page"),
    order: str = Query("id", description="Sort column: id, name or email"),
    direction: str = Query("asc", description="Sort direction: asc or desc"),
    service: UserService = Depends(get_user_service),
    current_user: UserModel = Depends(require_roles("admin", "manager")),
):
    """
    Get a page of users. Admin and manager users only.

    Unrecognised sort columns fall back to id; unrecognised directions to asc.
    """
    paged = service.get_users_page(page=page, size=size, order_by=order, direction=direction)
    return _to_response(paged)


@router.get("/email-available", response_model=EmailAvailability)
def verify_email_available(
    email: EmailStr = Query(..., description="Email address to check"),
    id: int | None = Query(None, description="User allowed to already own the email"),
    service: UserService = Depends(get_user_service),
):
    """Remote validation helper for registration and profile forms."""
    return EmailAvailability(email=email, available=service.is_email_available(email, id))


@router.get("/{user_id}", response_model=User)
def get_user_by_id(
    user_id: int,
    service: UserService = Depends(get_user_service),
    current_user: UserModel = Depends(require_roles("admin", "manager")),
):
    user = service.get_user(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return User.model_validate(user)


@router.put("/{user_id}", response_model=User)
def update_user_by_id(
    user_id: int,
    user_data: UserUpdate,
    service: UserService = Depends(get_user_service),
    current_user: UserModel = Depends(require_roles("admin")),
):
    """
    Update a user's name, email and role. Admin only.

    A password may be supplied to replace the current one; omit it to keep it.
    """
    if service.get_user(user_id) is None:
        raise NotFoundError("User not found")

    user = service.update_user(user_id, user_data)
    if user is None:
        raise DuplicateResourceError("Email already registered")
    return User.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user_by_id(
    user_id: int,
    service: UserService = Depends(get_user_service),
    current_user: UserModel = Depends(require_roles("admin")),
):
    """Delete a user by ID. Admin only."""
    if not service.delete_user(user_id):
        raise NotFoundError("User not found")
