"""Pydantic models for API request/response.

Wire format is camelCase; Python attributes stay snake_case.
"""

from datetime import date, datetime
from typing import Annotated, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, StringConstraints, field_validator
from pydantic.alias_generators import to_camel

from domain.model.account import Account, Registration
from domain.model.search import Pagination

GenderValue = Literal["male", "female", "other"]
Name = Annotated[str, StringConstraints(min_length=1, max_length=50)]
Tag = Annotated[str, StringConstraints(max_length=50)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Requests ─────────────────────────────────────────────


class RegisterRequest(CamelModel):
    """Request model for user registration."""
    email: EmailStr
    first_name: Name
    last_name: Name
    password: str = Field(..., min_length=6, max_length=72)

    def to_domain(self) -> Registration:
        return Registration(
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
            password=self.password,
        )


class LoginRequest(CamelModel):
    """Request model for user login."""
    email: EmailStr
    password: str


class UpdateProfileRequest(CamelModel):
    """Partial profile update. Only fields present in the body are applied."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra='forbid')

    first_name: Optional[Name] = None
    last_name: Optional[Name] = None
    date_of_birth: Optional[date] = None
    gender: Optional[GenderValue] = None
    city: Optional[str] = Field(None, max_length=100)
    country: Optional[str] = Field(None, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    interests: Optional[list[Tag]] = Field(None, max_length=10)
    skills: Optional[list[Tag]] = Field(None, max_length=20)
    is_active: Optional[bool] = None

    @field_validator('first_name', 'last_name', 'is_active')
    @classmethod
    def reject_null(cls, v):
        """These fields may be omitted but not cleared."""
        if v is None:
            raise ValueError("must not be null")
        return v

    def changes(self) -> dict:
        """Fields the client actually sent, keyed by attribute name."""
        return self.model_dump(exclude_unset=True)


# ── Responses ────────────────────────────────────────────


class AccountResponse(CamelModel):
    """Public account representation. Has no password field."""
    id: str
    email: str
    first_name: str
    last_name: str
    date_of_birth: Optional[date] = None
    gender: Optional[GenderValue] = None
    city: Optional[str] = None
    country: Optional[str] = None
    bio: Optional[str] = None
    interests: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
    last_login_at: Optional[datetime] = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, account: Account) -> 'AccountResponse':
        return cls(
            id=account.id,
            email=account.email,
            first_name=account.first_name,
            last_name=account.last_name,
            date_of_birth=account.date_of_birth,
            gender=account.gender.value if account.gender else None,
            city=account.city,
            country=account.country,
            bio=account.bio,
            interests=list(account.interests),
            skills=list(account.skills),
            last_login_at=account.last_login_at,
            is_active=account.is_active,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )


class AuthResponse(CamelModel):
    """Response model for registration and login."""
    message: str
    user: AccountResponse
    token: str


class PaginationResponse(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def from_domain(cls, pagination: Pagination) -> 'PaginationResponse':
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total=pagination.total,
            total_pages=pagination.total_pages,
            has_next=pagination.has_next,
            has_prev=pagination.has_prev,
        )


class SearchUsersResponse(CamelModel):
    users: list[AccountResponse]
    pagination: PaginationResponse


class ProfileResponse(CamelModel):
    message: str
    user: AccountResponse
