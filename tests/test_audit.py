"""Tests for the audit logger."""

from wallet.audit import AuditLogger
from wallet.models.audit import AuditEventBuilder, AuditEventType
from wallet.services.storage import AuditStorageInterface, InMemoryAuditStorage


class FailingAuditStorage(AuditStorageInterface):
    def append_event(self, event):
        raise OSError("disk full")

    def get_events_by_entity(self, entity_type, entity_id):
        return []

    def get_recent_events(self, limit=100):
        return []


class TestAuditLogger:
    """Tests for AuditLogger persistence behaviour."""

    def test_local_only_logging_succeeds(self):
        assert AuditLogger().log(AuditEventBuilder.account_registered(1, "+992")) is True

    def test_persists_to_storage(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        logger.log_deposit(1, 100, 100)
        logger.log_ledger_exported("/tmp/dump", 1, 0, 0)

        assert [e.event_type for e in storage.events] == [
            AuditEventType.DEPOSIT_MADE,
            AuditEventType.LEDGER_EXPORTED,
        ]
        assert storage.get_recent_events(limit=1)[0].details["target"] == "/tmp/dump"

    def test_storage_failure_is_not_raised(self):
        logger = AuditLogger(FailingAuditStorage())
        assert logger.log(AuditEventBuilder.account_registered(1, "+992")) is False

    def test_log_error_records_exception_type(self):
        storage = InMemoryAuditStorage()
        AuditLogger(storage).log_error("reject", KeyError("p1"), {"payment_id": "p1"})

        event = storage.events[0]
        assert event.event_type == AuditEventType.OPERATION_FAILED
        assert event.error_code == "KeyError"
        assert event.details == {"payment_id": "p1"}
