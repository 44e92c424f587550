"""User routes (search, profile update).

Endpoints:
- GET /users/search: Filtered, sorted and paginated search over active users
- PUT /users/profile: Partial update of the authenticated user's profile
"""

import logging
from datetime import datetime, timezone
from typing import Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.dependencies import get_account_service
from api.models import (
    AccountResponse,
    PaginationResponse,
    ProfileResponse,
    SearchUsersResponse,
    UpdateProfileRequest,
)
from api.security import get_current_account
from domain.model.account import Account, Gender
from domain.model.errors import NotFoundError, ValidationError
from domain.model.search import DEFAULT_LIMIT, DEFAULT_PAGE, Pagination, SearchCriteria, SortField, SortOrder
from services.account_service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _split_values(values: Optional[list[str]]) -> tuple[str, ...]:
    """Accept repeated params (?skills=a&skills=b) and comma lists (?skills=a,b)."""
    if not values:
        return ()
    return tuple(v.strip() for value in values for v in value.split(',') if v.strip())


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None or value.tzinfo:
        return value
    return value.replace(tzinfo=timezone.utc)


def search_criteria(
    search: Optional[str] = Query(None),
    city: Optional[str] = Query(None),
    country: Optional[str] = Query(None),
    gender: Optional[Literal["male", "female", "other"]] = Query(None),
    min_age: Optional[int] = Query(None, alias="minAge", ge=13, le=120),
    max_age: Optional[int] = Query(None, alias="maxAge", ge=13, le=120),
    interests: Optional[list[str]] = Query(None),
    skills: Optional[list[str]] = Query(None),
    joined_after: Optional[datetime] = Query(None, alias="joinedAfter"),
    joined_before: Optional[datetime] = Query(None, alias="joinedBefore"),
    last_active_after: Optional[datetime] = Query(None, alias="lastActiveAfter"),
    sort_by: SortField = Query(SortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
    page: int = Query(DEFAULT_PAGE, ge=1),
    limit: int = Query(DEFAULT_LIMIT, ge=1, le=100),
) -> SearchCriteria:
    """Validate and default the search query string."""
    return SearchCriteria(
        search=search or None,
        city=city or None,
        country=country or None,
        gender=Gender(gender) if gender else None,
        min_age=min_age,
        max_age=max_age,
        interests=_split_values(interests),
        skills=_split_values(skills),
        joined_after=_as_utc(joined_after),
        joined_before=_as_utc(joined_before),
        last_active_after=_as_utc(last_active_after),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )


@router.get("/search", response_model=SearchUsersResponse)
async def search_users(
    criteria: SearchCriteria = Depends(search_criteria),
    service: AccountService = Depends(get_account_service),
):
    """Search active users with filters, sorting and pagination."""
    result = service.search_users(criteria)
    pagination = Pagination.compute(criteria.page, criteria.limit, result.total)

    logger.info("Search request served", extra={
        "total": pagination.total,
        "page": pagination.page,
        "totalPages": pagination.total_pages,
    })

    return SearchUsersResponse(
        users=[AccountResponse.from_domain(a) for a in result.accounts],
        pagination=PaginationResponse.from_domain(pagination),
    )


@router.put("/profile", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    current_account: Account = Depends(get_current_account),
    service: AccountService = Depends(get_account_service),
):
    """Update the authenticated user's profile.

    Only fields present in the request body are changed.

    Raises:
        HTTPException: 404 if the user no longer exists, 400 if a field cannot be updated
    """
    changes = request.changes()
    logger.info("Profile update request", extra={"userId": current_account.id, "fields": sorted(changes)})

    try:
        account = service.update_profile(current_account.id, changes)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return ProfileResponse(
        message="Profile updated successfully",
        user=AccountResponse.from_domain(account.sanitized()),
    )
