"""Shared pytest setup.

Adapters read configuration at import time, so defaults must be in place
before any test module imports them.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-not-for-production")
os.environ.setdefault("JWT_EXPIRES_IN", "1d")
os.environ.setdefault("MONGO_URL", "")
os.environ.setdefault("REDIS_URL", "")
