"""
In-Memory Storage Implementations

Used for tests and for running the ledger without any files.
"""

from typing import Optional

from wallet.models.audit import AuditEvent
from wallet.models.ledger import LedgerSnapshot
from wallet.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
    MissingDumpError,
)


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Keeps the last saved snapshot in memory."""

    def __init__(self, snapshot: Optional[LedgerSnapshot] = None):
        self._snapshot = snapshot

    @property
    def location(self) -> str:
        return "memory"

    def save(self, snapshot: LedgerSnapshot) -> None:
        self._snapshot = snapshot.model_copy(deep=True)

    def load(self) -> LedgerSnapshot:
        if self._snapshot is None:
            raise MissingDumpError("memory")
        return self._snapshot.model_copy(deep=True)


class InMemoryAuditStorage(AuditStorageInterface):
    """
    Append-only audit trail kept in a list.

    Events are stored in the order they were appended.
    """

    def __init__(self):
        self._events: list[AuditEvent] = []

    @property
    def events(self) -> list[AuditEvent]:
        return list(self._events)

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        events = [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_recent_events(self, limit: int = 100) -> list[AuditEvent]:
        return list(reversed(self._events))[:limit]
