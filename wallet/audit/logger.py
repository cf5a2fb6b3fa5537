"""
Audit Logger

DESIGN DECISION: Every ledger mutation is logged.
This provides:
1. Complete traceability of balances
2. Debugging capability
3. A history the user can inspect

The audit logger:
- Is synchronous, like the ledger itself
- Gracefully handles storage failures (never breaks a ledger operation)
"""

from typing import Optional

import structlog

from wallet.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from wallet.services.storage.interface import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit storage backend, if one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("wallet.audit")

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity == AuditSeverity.ERROR:
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_account_registered(self, account_id: int, phone: str) -> None:
        self.log(AuditEventBuilder.account_registered(account_id, phone))

    def log_deposit(self, account_id: int, amount: int, balance: int) -> None:
        self.log(AuditEventBuilder.deposit_made(account_id, amount, balance))

    def log_payment_created(
        self,
        payment_id: str,
        account_id: int,
        amount: int,
        category: str,
    ) -> None:
        self.log(AuditEventBuilder.payment_created(payment_id, account_id, amount, category))

    def log_payment_rejected(self, payment_id: str, account_id: int, amount: int) -> None:
        self.log(AuditEventBuilder.payment_rejected(payment_id, account_id, amount))

    def log_favorite_created(self, favorite_id: str, payment_id: str, name: str) -> None:
        self.log(AuditEventBuilder.favorite_created(favorite_id, payment_id, name))

    def log_ledger_exported(
        self,
        target: str,
        accounts: int,
        payments: int,
        favorites: int,
    ) -> None:
        """Log a completed export."""
        self.log(AuditEventBuilder.ledger_exported(target, accounts, payments, favorites))

    def log_ledger_imported(
        self,
        source: str,
        accounts: int,
        payments: int,
        favorites: int,
    ) -> None:
        """Log a completed import."""
        self.log(AuditEventBuilder.ledger_imported(source, accounts, payments, favorites))

    def log_error(
        self,
        operation: str,
        error: Exception,
        details: Optional[dict] = None,
    ) -> None:
        """Log a failed ledger operation."""
        self.log(
            AuditEventBuilder.operation_failed(
                operation=operation,
                error_type=type(error).__name__,
                error_message=str(error),
                details=details,
            )
        )
