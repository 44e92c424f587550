"""In-memory implementation of TokenIssuer for testing."""

import uuid

from domain.model.account import Account


class FakeTokenIssuer:
    def __init__(self):
        self.issued: dict[str, dict] = {}

    def issue(self, account: Account) -> str:
        token = f"token-{uuid.uuid4().hex}"
        self.issued[token] = {
            'sub': account.id,
            'email': account.email,
            'firstName': account.first_name,
            'lastName': account.last_name,
        }
        return token

    def verify(self, token: str) -> str | None:
        claims = self.issued.get(token)
        return claims['sub'] if claims else None
