"""Bearer token authentication dependency."""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from api.dependencies import get_account_repo, get_token_issuer
from domain.model.account import Account
from port.account_repository import AccountRepository
from port.token_issuer import TokenIssuer

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

# Every rejection carries the same detail; the reason is only logged
UNAUTHORIZED_DETAIL = "Invalid credentials"


def _unauthorized(reason: str) -> HTTPException:
    logger.info("Rejected bearer token", extra={"reason": reason})
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_DETAIL,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_account(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    tokens: TokenIssuer = Depends(get_token_issuer),
    repo: AccountRepository = Depends(get_account_repo),
) -> Account:
    """Resolve the bearer token to a stored account. Raises 401 otherwise."""
    if not credentials:
        raise _unauthorized("missing token")

    account_id = tokens.verify(credentials.credentials)
    if not account_id:
        raise _unauthorized("invalid token")

    account = repo.get_by_id(account_id)
    if not account:
        logger.warning("Token subject not found", extra={"userId": account_id})
        raise _unauthorized("unknown subject")

    return account
