"""Tests for the audit logger."""

import pytest
import structlog

from finance_tracker.audit import AUDIT_LOG_KEY, AuditLogger, configure_logging
from finance_tracker.models.audit import AuditEventBuilder, AuditEventType
from finance_tracker.services.storage import InMemoryKeyValueStore, StorageError


class FailingStore(InMemoryKeyValueStore):
    """Store whose writes always fail."""

    def set(self, key, value):
        raise StorageError("disk full")


class TestAuditLogger:
    """Tests for AuditLogger persistence."""

    def test_log_without_storage(self):
        logger = AuditLogger()
        assert logger.log(AuditEventBuilder.session_restored("user_1")) is True
        assert logger.recent_events() == []

    def test_log_persists_event(self, storage):
        logger = AuditLogger(storage)
        event = AuditEventBuilder.user_signed_up("user_1", "a@example.com")
        assert logger.log(event) is True
        stored = storage.read_json(AUDIT_LOG_KEY)
        assert len(stored) == 1
        assert stored[0]["event_id"] == str(event.event_id)

    def test_recent_events_newest_first(self, storage):
        logger = AuditLogger(storage)
        logger.log(AuditEventBuilder.user_logged_in("user_1", "a@example.com", is_admin=False))
        logger.log(AuditEventBuilder.transaction_removed("user_1", 5))
        events = logger.recent_events()
        assert [event.event_type for event in events] == [
            AuditEventType.TRANSACTION_REMOVED,
            AuditEventType.USER_LOGGED_IN,
        ]

    def test_recent_events_limit(self, storage):
        logger = AuditLogger(storage)
        for tx_id in range(5):
            logger.log(AuditEventBuilder.transaction_removed("user_1", tx_id))
        events = logger.recent_events(limit=2)
        assert [event.entity_id for event in events] == ["4", "3"]
        assert logger.recent_events(limit=0) == []

    def test_log_is_bounded(self, storage):
        logger = AuditLogger(storage, max_events=3)
        for tx_id in range(10):
            logger.log(AuditEventBuilder.transaction_removed("user_1", tx_id))
        stored = storage.read_json(AUDIT_LOG_KEY)
        assert [item["entity_id"] for item in stored] == ["7", "8", "9"]

    def test_zero_max_events_keeps_nothing(self, storage):
        logger = AuditLogger(storage, max_events=0)
        logger.log(AuditEventBuilder.transaction_removed("user_1", 1))
        assert storage.get(AUDIT_LOG_KEY) is None

    def test_storage_failure_does_not_raise(self):
        logger = AuditLogger(FailingStore())
        assert logger.log(AuditEventBuilder.transaction_removed("user_1", 1)) is False

    def test_corrupt_log_reads_as_empty(self, storage):
        storage.set(AUDIT_LOG_KEY, "{broken")
        assert AuditLogger(storage).recent_events() == []

    def test_log_storage_error(self, storage):
        logger = AuditLogger(storage)
        logger.log_storage_error("transactions_user_1", "disk full")
        event = logger.recent_events(1)[0]
        assert event.event_type == AuditEventType.STORAGE_ERROR
        assert event.error_message == "disk full"


class TestConfigureLogging:
    """Tests for process log setup."""

    def teardown_method(self):
        structlog.reset_defaults()

    @pytest.mark.parametrize("debug", [True, False])
    def test_logging_after_configure(self, storage, debug):
        configure_logging(debug=debug)
        logger = AuditLogger(storage)
        assert logger.log(AuditEventBuilder.transaction_removed("user_1", 1)) is True
        assert len(logger.recent_events()) == 1
