"""Account service — account creation, lookup, profile mutation and search.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Any

from domain.model.account import PROFILE_FIELDS, Account, Gender, Registration
from domain.model.errors import DuplicateError, NotFoundError, ValidationError
from domain.model.event import USER_PROFILE_UPDATED, identity_payload
from domain.model.search import AccountPage, SearchCriteria
from port.account_repository import AccountRepository
from port.event_publisher import EventPublisher
from port.password_hasher import PasswordHasher
from services.search_query_builder import build_search_query

logger = logging.getLogger(__name__)


class AccountService:
    def __init__(self, repo: AccountRepository, hasher: PasswordHasher, publisher: EventPublisher):
        self.repo = repo
        self.hasher = hasher
        self.publisher = publisher

    # ── write operations ─────────────────────────────────────

    def create(self, registration: Registration) -> Account:
        """Create a new account from a registration.

        Returns the stored Account, password hash included.

        Raises:
            DuplicateError: email already registered (pre-check or unique index)
        """
        if self.repo.get_by_email(registration.email):
            raise DuplicateError("User with this email already exists")

        password_hash = self.hasher.hash(registration.password)

        account = self.repo.create(
            email=registration.email,
            password_hash=password_hash,
            first_name=registration.first_name,
            last_name=registration.last_name,
        )
        logger.info("Account created", extra={"userId": account.id})
        return account

    def update_profile(self, account_id: str, changes: dict[str, Any]) -> Account:
        """Patch-merge `changes` onto the stored account and publish the update.

        Only keys present in `changes` are touched. Keys are attribute names
        from PROFILE_FIELDS.

        Raises:
            ValidationError: a key is not an updatable profile field
            NotFoundError: no account with `account_id`
            EventPublishError: the update was stored but the event was not sent
        """
        unknown = [key for key in changes if key not in PROFILE_FIELDS]
        if unknown:
            raise ValidationError(f"Fields cannot be updated: {', '.join(unknown)}")

        account = self.repo.get_by_id(account_id)
        if not account:
            raise NotFoundError("User not found")

        values = dict(changes)
        if 'date_of_birth' in values:
            values['date_of_birth'] = _parse_date(values['date_of_birth']) or account.date_of_birth
        if values.get('gender') is not None:
            values['gender'] = Gender(values['gender'])
        for key in ('interests', 'skills'):
            if key in values:
                values[key] = list(values[key] or [])

        saved = self.repo.save(replace(account, **values))

        updated_fields = [PROFILE_FIELDS[key] for key in changes]
        self.publisher.publish(
            USER_PROFILE_UPDATED,
            identity_payload(saved, updatedFields=updated_fields),
        )

        logger.info("Profile updated", extra={"userId": saved.id, "updatedFields": updated_fields})
        return saved

    def record_login(self, account: Account) -> Account:
        """Persist the login time and return the account reflecting it."""
        now = datetime.now(timezone.utc)
        if not self.repo.update_last_login(account.id, now):
            logger.warning("Failed to record login", extra={"userId": account.id})
            return account
        return replace(account, last_login_at=now)

    # ── read operations ──────────────────────────────────────

    def find_by_email(self, email: str) -> Account | None:
        return self.repo.get_by_email(email)

    def find_by_id(self, account_id: str) -> Account | None:
        return self.repo.get_by_id(account_id)

    def validate_password(self, plain: str, hashed: str) -> bool:
        return self.hasher.verify(plain, hashed)

    def search_users(self, criteria: SearchCriteria) -> AccountPage:
        """Search active accounts; `total` ignores pagination."""
        logger.info("Executing account search", extra={"filters": criteria.log_extra})

        query = build_search_query(criteria)
        page = self.repo.search(query)

        logger.info("Account search completed", extra={
            "total": page.total,
            "returned": len(page.accounts),
            "page": criteria.page,
        })

        return AccountPage(
            accounts=[account.sanitized() for account in page.accounts],
            total=page.total,
        )


def _parse_date(value: Any) -> date | None:
    """Coerce an ISO string, datetime or date into a date. Falsy → None."""
    if not value:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()
