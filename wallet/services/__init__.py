"""Services package."""

from wallet.services.storage import (
    AuditStorageInterface,
    DirectoryDumpStorage,
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
    LedgerStorageInterface,
    MalformedRecordError,
    MissingDumpError,
    SingleFileDumpStorage,
    StorageError,
)

__all__ = [
    "AuditStorageInterface",
    "DirectoryDumpStorage",
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
    "LedgerStorageInterface",
    "MalformedRecordError",
    "MissingDumpError",
    "SingleFileDumpStorage",
    "StorageError",
]
