"""Idempotency protection for webhook deliveries.

Stripe delivers events at least once. Successfully dispatched event ids
are remembered so a redelivery is acknowledged without running its
handler again.
"""

from datetime import UTC, datetime, timedelta


class ProcessedEventStore:
    """In-memory store of processed webhook event ids.

    Entries live for the process lifetime only; bookings are not persisted
    yet, so a redelivery after a restart is still harmless.
    """

    def __init__(self, ttl: timedelta = timedelta(hours=24)):
        self._events: dict[str, dict] = {}
        self._ttl = ttl

    def _cleanup_expired(self) -> None:
        """Remove expired entries."""
        now = datetime.now(UTC)
        expired = [k for k, v in self._events.items() if v["expires_at"] < now]
        for k in expired:
            del self._events[k]

    def get(self, event_id: str) -> dict | None:
        """Get the stored outcome for an event id."""
        self._cleanup_expired()
        entry = self._events.get(event_id)
        if entry and entry["expires_at"] > datetime.now(UTC):
            return entry["result"]
        return None

    def mark_processed(self, event_id: str, result: dict) -> None:
        self._events[event_id] = {
            "result": result,
            "expires_at": datetime.now(UTC) + self._ttl,
        }

    def is_processed(self, event_id: str) -> bool:
        return self.get(event_id) is not None

    def __len__(self) -> int:
        self._cleanup_expired()
        return len(self._events)
