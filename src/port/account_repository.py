from datetime import datetime
from typing import Protocol

from domain.model.account import Account
from domain.model.search import AccountPage, SearchQuery


class AccountRepository(Protocol):
    """Protocol defining the interface for account data access."""
    def create(self, email: str, password_hash: str, first_name: str, last_name: str) -> Account:
        """Create a new account. Raise DuplicateError if the email is taken."""
        ...

    def get_by_email(self, email: str) -> Account | None:
        """Find an account by exact email. Return Account or None if not found."""
        ...

    def get_by_id(self, account_id: str) -> Account | None:
        """Find an account by ID. Return Account or None if not found."""
        ...

    def save(self, account: Account) -> Account:
        """Persist mutable fields of an existing account. Return the stored Account.

        Raises NotFoundError if the account is no longer stored.
        """
        ...

    def update_last_login(self, account_id: str, when: datetime) -> bool:
        """Set the last login timestamp. Return True if an account was updated."""
        ...

    def search(self, query: SearchQuery) -> AccountPage:
        """Run a search query. `total` counts all matches, ignoring skip/limit."""
        ...
