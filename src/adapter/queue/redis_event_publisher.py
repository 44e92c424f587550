"""Redis Streams implementation of EventPublisher.

Each event is appended to one stream (the topic), keyed by account ID:
- Stream: USER_EVENTS_STREAM, capped at roughly STREAM_MAXLEN entries
- Entry fields: key (userId), eventType, value (JSON envelope)
- Connection: Cached client. A failed connect is retried on the next call;
  only a missing REDIS_URL disables the publisher.
"""

import json
import logging
import os
from typing import Optional

import redis
from redis.exceptions import RedisError

from domain.model.errors import EventPublishError
from domain.model.event import utc_timestamp
from utils.metrics import record_event

logger = logging.getLogger(__name__)

REDIS_URL = os.getenv('REDIS_URL', '')
USER_EVENTS_STREAM = os.getenv('USER_EVENTS_STREAM', 'user-events')
STREAM_MAXLEN = 100_000


class RedisEventPublisher:
    def __init__(self, stream: str = USER_EVENTS_STREAM):
        self.stream = stream
        self._client_cache: Optional[redis.Redis] = None
        self._connected_once: bool = False
        self._missing_url_reported: bool = False

    def _get_client(self) -> Optional[redis.Redis]:
        """Return a healthy client, connecting again if the cached one is gone."""
        if self._client_cache:
            try:
                self._client_cache.ping()
                return self._client_cache
            except (RedisError, OSError):
                self._client_cache = None
                logger.debug("[REDIS] Cached client failed ping, attempting reconnection...")

        if not REDIS_URL:
            if not self._missing_url_reported:
                logger.error("[REDIS] REDIS_URL not configured")
                self._missing_url_reported = True
            return None

        try:
            client = redis.from_url(
                REDIS_URL,
                decode_responses=True,
                socket_connect_timeout=5,
            )
            client.ping()
        except (RedisError, ValueError, OSError) as e:
            logger.warning(f"[REDIS] Connection failed, will retry on next use: {str(e)[:200]}")
            return None

        logger.info("[REDIS] Reconnected" if self._connected_once else "[REDIS] Connected successfully")
        self._connected_once = True
        self._client_cache = client
        return client

    # ── EventPublisher implementation ────────────────────────

    def publish(self, event_type: str, payload: dict) -> None:
        client = self._get_client()
        if not client:
            record_event(self.stream, ok=False)
            raise EventPublishError(event_type, "event bus unavailable")

        key = payload.get('userId', '')
        envelope = {
            'eventType': event_type,
            'data': payload,
            'timestamp': utc_timestamp(),
        }

        try:
            entry_id = client.xadd(
                self.stream,
                {'key': key, 'eventType': event_type, 'value': json.dumps(envelope)},
                maxlen=STREAM_MAXLEN,
                approximate=True,
            )
        except RedisError as e:
            record_event(self.stream, ok=False)
            logger.error("Failed to publish event", extra={"eventType": event_type, "userId": key, "error": str(e)})
            raise EventPublishError(event_type, str(e)) from e

        record_event(self.stream, ok=True)
        logger.info("Event published", extra={"eventType": event_type, "userId": key, "entryId": entry_id})

    def ping(self) -> bool:
        client = self._get_client()
        if not client:
            return False
        try:
            client.ping()
            return True
        except (RedisError, OSError):
            return False
