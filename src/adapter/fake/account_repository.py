"""In-memory implementation of AccountRepository for testing."""

import copy
import uuid
from datetime import datetime, timezone
from typing import Any

from domain.model.account import Account
from domain.model.errors import DuplicateError, NotFoundError
from domain.model.search import AccountPage, Operator, Predicate, SearchQuery, SortOrder


def matches(account: Account, predicate: Predicate) -> bool:
    """Evaluate one predicate against an account (OR across its fields)."""
    return any(_test(getattr(account, f), predicate.op, predicate.value) for f in predicate.fields)


def _test(actual: Any, op: Operator, expected: Any) -> bool:
    if op == Operator.EQ:
        return actual == expected
    if op == Operator.ICONTAINS:
        return actual is not None and expected.lower() in actual.lower()
    if actual is None:
        return False
    if op == Operator.GTE:
        return actual >= expected
    if op == Operator.LTE:
        return actual <= expected
    if op == Operator.OVERLAPS:
        return bool(set(actual) & set(expected))
    raise ValueError(f"Unsupported operator: {op}")


def _sort_key(value: Any) -> tuple:
    # Nulls sort first ascending, like MongoDB
    return (value is not None, value if value is not None else 0)


class FakeAccountRepository:
    def __init__(self):
        self.store: dict[str, Account] = {}

    def add(self, account: Account) -> Account:
        """Seed an account as-is (tests)."""
        self.store[account.id] = copy.deepcopy(account)
        return account

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str, first_name: str, last_name: str) -> Account:
        if any(a.email == email for a in self.store.values()):
            raise DuplicateError("User with this email already exists")

        now = datetime.now(timezone.utc)
        account = Account(
            id=uuid.uuid4().hex,
            email=email,
            first_name=first_name,
            last_name=last_name,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        self.store[account.id] = account
        return copy.deepcopy(account)

    def save(self, account: Account) -> Account:
        if account.id not in self.store:
            raise NotFoundError("User not found")
        account.updated_at = datetime.now(timezone.utc)
        self.store[account.id] = copy.deepcopy(account)
        return account

    def update_last_login(self, account_id: str, when: datetime) -> bool:
        account = self.store.get(account_id)
        if not account:
            return False
        account.last_login_at = when
        account.updated_at = when
        return True

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> Account | None:
        for account in self.store.values():
            if account.email == email:
                return copy.deepcopy(account)
        return None

    def get_by_id(self, account_id: str) -> Account | None:
        account = self.store.get(account_id)
        return copy.deepcopy(account) if account else None

    def search(self, query: SearchQuery) -> AccountPage:
        found = [
            a for a in self.store.values()
            if all(matches(a, p) for p in query.predicates)
        ]
        found.sort(
            key=lambda a: _sort_key(getattr(a, query.sort_field)),
            reverse=query.sort_order == SortOrder.DESC,
        )
        page = found[query.skip:query.skip + query.limit]
        return AccountPage(accounts=[copy.deepcopy(a) for a in page], total=len(found))
