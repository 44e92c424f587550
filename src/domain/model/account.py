"""Account domain model."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum


class Gender(str, Enum):
    MALE = 'male'
    FEMALE = 'female'
    OTHER = 'other'


# Attribute name → public (wire) name for fields a profile update may touch.
PROFILE_FIELDS: dict[str, str] = {
    'first_name': 'firstName',
    'last_name': 'lastName',
    'date_of_birth': 'dateOfBirth',
    'gender': 'gender',
    'city': 'city',
    'country': 'country',
    'bio': 'bio',
    'interests': 'interests',
    'skills': 'skills',
    'is_active': 'isActive',
}


@dataclass(frozen=True)
class Registration:
    """Validated registration input."""
    email: str
    first_name: str
    last_name: str
    password: str


@dataclass
class Account:
    """Domain model representing a registered user account."""
    id: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime
    updated_at: datetime
    password_hash: str | None = None
    date_of_birth: date | None = None
    gender: Gender | None = None
    city: str | None = None
    country: str | None = None
    bio: str | None = None
    interests: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    last_login_at: datetime | None = None
    is_active: bool = True

    def sanitized(self) -> 'Account':
        """Return a copy safe to hand to callers (no password hash)."""
        return replace(
            self,
            password_hash=None,
            interests=list(self.interests),
            skills=list(self.skills),
        )


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful registration or login."""
    account: Account
    token: str
