"""Port definition for EventPublisher."""

from typing import Protocol


class EventPublisher(Protocol):
    def publish(self, event_type: str, payload: dict) -> None:
        """Publish one event keyed by payload['userId']. Raise EventPublishError on failure."""
        ...

    def ping(self) -> bool: ...
