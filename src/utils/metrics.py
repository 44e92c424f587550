"""Prometheus metrics.

Registered on the default registry, which also carries the process and
platform collectors. Exposed by GET /metrics.
"""

from prometheus_client import Counter, Histogram

HTTP_REQUESTS = Counter(
    'http_requests_total',
    'Total number of HTTP requests',
    ['method', 'route', 'status_code'],
)

HTTP_REQUEST_DURATION = Histogram(
    'http_request_duration_seconds',
    'Duration of HTTP requests in seconds',
    ['method', 'route'],
    buckets=(0.1, 0.5, 1, 2, 5),
)

EVENT_MESSAGES = Counter(
    'event_messages_total',
    'Total number of events sent to the event bus',
    ['topic', 'status'],
)

# Label used for requests that matched no route, to keep cardinality bounded
UNMATCHED_ROUTE = 'unmatched'


def record_request(method: str, route: str, status_code: int, duration: float) -> None:
    HTTP_REQUESTS.labels(method=method, route=route, status_code=str(status_code)).inc()
    HTTP_REQUEST_DURATION.labels(method=method, route=route).observe(duration)


def record_event(topic: str, ok: bool) -> None:
    EVENT_MESSAGES.labels(topic=topic, status='success' if ok else 'error').inc()
