"""In-memory implementation of EventPublisher for testing."""

from domain.model.errors import EventPublishError


class FakeEventPublisher:
    def __init__(self, fail: bool = False):
        self.events: list[tuple[str, dict]] = []
        self.fail = fail

    def publish(self, event_type: str, payload: dict) -> None:
        if self.fail:
            raise EventPublishError(event_type, "event bus unavailable")
        self.events.append((event_type, payload))

    def of_type(self, event_type: str) -> list[dict]:
        return [payload for kind, payload in self.events if kind == event_type]

    def ping(self) -> bool:
        return not self.fail
