"""
Storage Services Package

Provides abstract interfaces and concrete implementations for ledger
persistence. Two delimited-text dump formats are implemented, plus
in-memory backends for tests.
"""

from wallet.services.storage.interface import (
    AuditStorageInterface,
    LedgerStorageInterface,
    MalformedRecordError,
    MissingDumpError,
    StorageError,
)
from wallet.services.storage.directory_dump import (
    DirectoryDumpStorage,
    payment_chunk_name,
)
from wallet.services.storage.single_file_dump import SingleFileDumpStorage
from wallet.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryLedgerStorage,
)

__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "LedgerStorageInterface",
    # Exceptions
    "MalformedRecordError",
    "MissingDumpError",
    "StorageError",
    # Dump formats
    "DirectoryDumpStorage",
    "SingleFileDumpStorage",
    "payment_chunk_name",
    # In-memory
    "InMemoryAuditStorage",
    "InMemoryLedgerStorage",
]
