"""JWT (python-jose) implementation of TokenIssuer."""

import logging
import os
import re
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from domain.model.account import Account

logger = logging.getLogger(__name__)

# JWT Configuration
JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY")
if not JWT_SECRET_KEY:
    raise ValueError(
        "JWT_SECRET_KEY environment variable is required. "
        "Generate a secure key with: openssl rand -hex 32"
    )
JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
JWT_EXPIRES_IN = os.getenv("JWT_EXPIRES_IN", "1d")

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNIT_SECONDS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_expires_in(value: str) -> timedelta:
    """Parse a duration like '1d', '12h', '30m', '45s' or '3600' (seconds)."""
    match = _DURATION_RE.match(value)
    if not match:
        raise ValueError(f"Invalid token lifetime: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _UNIT_SECONDS[unit])


class JwtTokenIssuer:
    def __init__(
        self,
        secret_key: str = JWT_SECRET_KEY,
        algorithm: str = JWT_ALGORITHM,
        expires_in: timedelta | None = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_in = expires_in or parse_expires_in(JWT_EXPIRES_IN)

    def issue(self, account: Account) -> str:
        """Create a signed access token for the account."""
        now = datetime.now(timezone.utc)
        payload = {
            "sub": account.id,
            "email": account.email,
            "firstName": account.first_name,
            "lastName": account.last_name,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> str | None:
        """Verify the token and extract the account ID."""
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            return None
        return payload.get("sub")
