"""
Audit Models for Wallet

Every ledger mutation is logged for audit purposes.
This provides:
1. Complete traceability of balance changes
2. Debugging information when things go wrong
3. Ability to reconstruct history

DESIGN DECISION: Audit logs are append-only. We never delete or modify them.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Accounts
    ACCOUNT_REGISTERED = "account_registered"
    DEPOSIT_MADE = "deposit_made"

    # Payments
    PAYMENT_CREATED = "payment_created"
    PAYMENT_REJECTED = "payment_rejected"
    FAVORITE_CREATED = "favorite_created"

    # Persistence
    LEDGER_EXPORTED = "ledger_exported"
    LEDGER_IMPORTED = "ledger_imported"

    # Failures
    OPERATION_FAILED = "operation_failed"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class AuditEvent(BaseModel):
    """
    A single audit event.

    This is the core unit of our audit trail.
    Every successful mutation creates one of these.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Context - what entity is this about?
    entity_type: Optional[str] = Field(
        default=None,
        description="Type of entity (e.g., 'account', 'payment', 'favorite')"
    )
    entity_id: Optional[str] = Field(
        default=None,
        description="ID of the entity this event relates to"
    )

    description: str = Field(
        ...,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_code: Optional[str] = None
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "description": self.description,
            "details": self.details,
            "error_code": self.error_code,
            "error_message": self.error_message,
        }


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.account_registered(account_id, phone)
        event = AuditEventBuilder.payment_rejected(payment_id, account_id, amount)
    """

    @staticmethod
    def account_registered(account_id: int, phone: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.ACCOUNT_REGISTERED,
            entity_type="account",
            entity_id=str(account_id),
            description=f"Account registered for phone {phone}",
            details={"phone": phone},
        )

    @staticmethod
    def deposit_made(account_id: int, amount: int, balance: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DEPOSIT_MADE,
            entity_type="account",
            entity_id=str(account_id),
            description=f"Deposited {amount} into account {account_id}",
            details={"amount": amount, "balance": balance},
        )

    @staticmethod
    def payment_created(
        payment_id: str,
        account_id: int,
        amount: int,
        category: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_CREATED,
            entity_type="payment",
            entity_id=payment_id,
            description=f"Payment of {amount} from account {account_id}",
            details={
                "account_id": account_id,
                "amount": amount,
                "category": category,
            },
        )

    @staticmethod
    def payment_rejected(payment_id: str, account_id: int, amount: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.PAYMENT_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="payment",
            entity_id=payment_id,
            description=f"Payment rejected, {amount} refunded to account {account_id}",
            details={"account_id": account_id, "refunded": amount},
        )

    @staticmethod
    def favorite_created(
        favorite_id: str,
        payment_id: str,
        name: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.FAVORITE_CREATED,
            entity_type="favorite",
            entity_id=favorite_id,
            description=f"Favorite '{name}' created",
            details={"payment_id": payment_id, "name": name},
        )

    @staticmethod
    def ledger_exported(target: str, accounts: int, payments: int, favorites: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_EXPORTED,
            entity_type="ledger",
            description=f"Ledger exported to {target}",
            details={
                "target": target,
                "accounts": accounts,
                "payments": payments,
                "favorites": favorites,
            },
        )

    @staticmethod
    def ledger_imported(source: str, accounts: int, payments: int, favorites: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.LEDGER_IMPORTED,
            entity_type="ledger",
            description=f"Ledger imported from {source}",
            details={
                "source": source,
                "accounts": accounts,
                "payments": payments,
                "favorites": favorites,
            },
        )

    @staticmethod
    def operation_failed(
        operation: str,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.OPERATION_FAILED,
            severity=AuditSeverity.ERROR,
            description=f"{operation} failed: {error_type}",
            details=details or {},
            error_code=error_type,
            error_message=error_message,
        )
