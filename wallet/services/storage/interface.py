"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep several dump formats behind one seam
2. Use in-memory storage for testing
3. Keep ledger logic decoupled from file formats

The interface is intentionally simple - a backend saves and loads a whole
LedgerSnapshot. The ledger decides how loaded records are merged.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from wallet.models.audit import AuditEvent
from wallet.models.ledger import LedgerSnapshot


class LedgerStorageInterface(ABC):
    """
    Abstract interface for ledger persistence.

    Any dump format (directory dump, single file, ...) must implement
    these methods.
    """

    @abstractmethod
    def save(self, snapshot: LedgerSnapshot) -> None:
        """
        Persist a ledger snapshot.

        Args:
            snapshot: Copy of the ledger state to write

        Raises:
            StorageError: If any write fails. Files already flushed
                          are left on disk.
        """
        pass

    @abstractmethod
    def load(self) -> LedgerSnapshot:
        """
        Read a ledger snapshot.

        Returns:
            The parsed records, in file order

        Raises:
            MissingDumpError: If a required file is absent
            MalformedRecordError: If a record cannot be parsed
        """
        pass

    @property
    @abstractmethod
    def location(self) -> str:
        """Human-readable description of where this backend reads/writes."""
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Args:
            event: The audit event to log

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: str,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'account', 'payment')
            entity_id: The entity's ID

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Args:
            limit: Maximum number of events to return

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class MissingDumpError(StorageError):
    """A dump file required for import does not exist."""

    def __init__(self, path: Path | str):
        self.path = path
        super().__init__(f"Dump file not found: {path}")


class MalformedRecordError(StorageError):
    """A dump record could not be parsed."""

    def __init__(self, path: Path, line: Optional[int], reason: str):
        self.path = path
        self.line = line
        self.reason = reason
        where = f"{path}:{line}" if line is not None else str(path)
        super().__init__(f"Malformed record at {where}: {reason}")
