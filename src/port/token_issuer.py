"""Port definition for TokenIssuer."""

from typing import Protocol

from domain.model.account import Account


class TokenIssuer(Protocol):
    def issue(self, account: Account) -> str:
        """Mint a signed, time-bounded token for the account."""
        ...

    def verify(self, token: str) -> str | None:
        """Return the token subject (account ID), or None if invalid or expired."""
        ...
