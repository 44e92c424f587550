"""Shared MongoDB client for the account store.

One client per process. A client that stops answering ping is replaced, and
a failed connect is tried again on the next call; only a missing MONGO_URL
disables the store.
"""

import os
import logging
from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

logger = logging.getLogger(__name__)

logging.getLogger('pymongo').setLevel(logging.WARNING)

MONGO_URL = os.getenv('MONGO_URL')
DATABASE_NAME = os.getenv('MONGODB_DATABASE', 'users')
ACCOUNTS_COLLECTION_NAME = 'accounts'

CLIENT_OPTIONS = {
    'serverSelectionTimeoutMS': 5000,
    'connectTimeoutMS': 5000,
    'socketTimeoutMS': 30000,
    'maxPoolSize': 20,
    'waitQueueTimeoutMS': 10000,
    'retryWrites': True,
    'retryReads': True,
    # datetimes come back as aware UTC values
    'tz_aware': True,
}

_client: MongoClient | None = None
_connected_once = False
_missing_url_reported = False


def reset_client() -> None:
    global _client, _connected_once, _missing_url_reported
    _client = None
    _connected_once = False
    _missing_url_reported = False


def _alive(client: MongoClient) -> bool:
    try:
        client.admin.command('ping')
        return True
    except PyMongoError:
        return False


def get_mongodb_client() -> MongoClient | None:
    """Return a client that answered ping, or None when MongoDB is unreachable."""
    global _client, _connected_once, _missing_url_reported

    if _client is not None:
        if _alive(_client):
            return _client
        logger.debug("[MONGODB] Cached client failed ping, reconnecting")
        _client = None

    if not MONGO_URL:
        if not _missing_url_reported:
            logger.error("[MONGODB] MONGO_URL not configured")
            _missing_url_reported = True
        return None

    try:
        client = MongoClient(MONGO_URL, **CLIENT_OPTIONS)
        client.admin.command('ping')
    except PyMongoError as e:
        logger.warning(f"[MONGODB] Connection failed, will retry on next use: {str(e)[:200]}")
        return None

    if not _connected_once:
        logger.info(f"[MONGODB] Connected to {DATABASE_NAME}")
    _connected_once = True
    _client = client
    return client


def get_database(name: str = DATABASE_NAME) -> Database | None:
    """Database handle on the shared client, or None when MongoDB is unreachable."""
    client = get_mongodb_client()
    return client[name] if client is not None else None
