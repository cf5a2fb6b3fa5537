"""
Data Models Package

This package contains all Pydantic models used by the wallet ledger.
All records the ledger owns must conform to these schemas.
"""

from wallet.models.ledger import (
    Account,
    Favorite,
    LedgerSnapshot,
    Money,
    Payment,
    PaymentStatus,
    new_record_id,
)
from wallet.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "Account",
    "Favorite",
    "LedgerSnapshot",
    "Money",
    "Payment",
    "PaymentStatus",
    "new_record_id",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
