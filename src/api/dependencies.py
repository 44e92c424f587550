from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.crypto.bcrypt_hasher import BcryptPasswordHasher
from adapter.crypto.jwt_issuer import JwtTokenIssuer
from adapter.mongodb.account_repository import MongoAccountRepository
from adapter.mongodb.connection import get_database
from adapter.queue.redis_event_publisher import RedisEventPublisher
from port.account_repository import AccountRepository
from port.event_publisher import EventPublisher
from port.password_hasher import PasswordHasher
from port.token_issuer import TokenIssuer
from services.account_service import AccountService
from services.auth_service import AuthService


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    db = get_database()
    if db is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return db


def get_account_repo() -> AccountRepository:
    return MongoAccountRepository(_get_db())


@lru_cache
def get_event_publisher() -> EventPublisher:
    """One publisher per process so its Redis client is reused."""
    return RedisEventPublisher()


def get_password_hasher() -> PasswordHasher:
    return BcryptPasswordHasher()


def get_token_issuer() -> TokenIssuer:
    return JwtTokenIssuer()


def get_account_service(
    repo: AccountRepository = Depends(get_account_repo),
    hasher: PasswordHasher = Depends(get_password_hasher),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> AccountService:
    return AccountService(repo, hasher, publisher)


def get_auth_service(
    accounts: AccountService = Depends(get_account_service),
    tokens: TokenIssuer = Depends(get_token_issuer),
    publisher: EventPublisher = Depends(get_event_publisher),
) -> AuthService:
    return AuthService(accounts, tokens, publisher)
