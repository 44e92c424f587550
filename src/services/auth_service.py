"""Auth service — registration and authentication business logic.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.

Event publication is synchronous: if it fails the call fails, and an account
created just before stays persisted.
"""

import logging

from domain.model.account import AuthResult, Registration
from domain.model.errors import UnauthorizedError
from domain.model.event import USER_LOGGED_IN, USER_REGISTERED, identity_payload
from port.event_publisher import EventPublisher
from port.token_issuer import TokenIssuer
from services.account_service import AccountService

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, accounts: AccountService, tokens: TokenIssuer, publisher: EventPublisher):
        self.accounts = accounts
        self.tokens = tokens
        self.publisher = publisher

    def register(self, registration: Registration) -> AuthResult:
        """Register a new account and issue its first token.

        Raises:
            DuplicateError: email already registered
            EventPublishError: account stored, but user.registered was not sent
        """
        account = self.accounts.create(registration)

        self.publisher.publish(USER_REGISTERED, identity_payload(account))

        token = self.tokens.issue(account)

        logger.info("User registered", extra={"userId": account.id})
        return AuthResult(account=account.sanitized(), token=token)

    def login(self, email: str, password: str) -> AuthResult:
        """Authenticate by email and password.

        Unknown email, wrong password and inactive account all raise the same
        UnauthorizedError so the response does not reveal which one happened.
        """
        account = self.accounts.find_by_email(email)
        if not account:
            raise UnauthorizedError()

        is_password_valid = self.accounts.validate_password(password, account.password_hash)
        if not is_password_valid or not account.is_active:
            raise UnauthorizedError()

        account = self.accounts.record_login(account)

        self.publisher.publish(USER_LOGGED_IN, identity_payload(account))

        token = self.tokens.issue(account)

        logger.info("User logged in", extra={"userId": account.id})
        return AuthResult(account=account.sanitized(), token=token)
