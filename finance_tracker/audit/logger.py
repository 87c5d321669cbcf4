"""
Audit Logger

Every session change and every transaction mutation (including the
rejected ones) becomes an AuditEvent. Events go to two places:
1. The process log, as structlog key-value records
2. A bounded list under AUDIT_LOG_KEY in the key-value store, which
   the admin page reads back

A failed audit write is reported in the process log and otherwise
ignored; it never fails the operation being audited.
"""

import logging
from typing import Optional

import structlog

from finance_tracker.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from finance_tracker.services.storage import KeyValueStore


AUDIT_LOG_KEY = "audit_log"
DEFAULT_MAX_EVENTS = 500

_LEVELS = {
    AuditSeverity.DEBUG: logging.DEBUG,
    AuditSeverity.INFO: logging.INFO,
    AuditSeverity.WARNING: logging.WARNING,
    AuditSeverity.ERROR: logging.ERROR,
    AuditSeverity.CRITICAL: logging.CRITICAL,
}


def configure_logging(debug: bool = False) -> None:
    """
    Set up structlog for the process.

    Debug mode renders readable console lines and lets DEBUG events
    through; otherwise records are JSON at INFO and above.
    """
    renderer = structlog.dev.ConsoleRenderer() if debug else structlog.processors.JSONRenderer()
    logging.basicConfig(format="%(message)s", level=logging.DEBUG if debug else logging.INFO)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """Writes audit events to the process log and the key-value store."""

    def __init__(
        self,
        storage: Optional[KeyValueStore] = None,
        max_events: int = DEFAULT_MAX_EVENTS,
    ):
        """
        Args:
            storage: Where the persisted log lives. Without one, events
                only reach the process log.
            max_events: Size of the persisted log; the oldest events are
                dropped first. Zero disables persistence.
        """
        self._storage = storage
        self._max_events = max_events
        self._logger = structlog.get_logger(__name__)

    def log(self, event: AuditEvent) -> bool:
        """
        Record one event.

        Returns False only when the persisted log could not be updated.
        """
        self._logger.log(_LEVELS[event.severity], "audit_event", **event.to_log_dict())

        if self._storage is None or self._max_events == 0:
            return True

        try:
            events = self._storage.read_json(AUDIT_LOG_KEY) or []
            events.append(event.model_dump(mode="json"))
            self._storage.write_json(AUDIT_LOG_KEY, events[-self._max_events:])
        except Exception as e:
            self._logger.error(
                "audit_persist_failed",
                event_id=str(event.event_id),
                error=str(e),
            )
            return False
        return True

    def recent_events(self, limit: int = 50) -> list[AuditEvent]:
        """Newest first, at most `limit` events."""
        if self._storage is None or limit <= 0:
            return []
        try:
            events = self._storage.read_json(AUDIT_LOG_KEY) or []
        except Exception as e:
            self._logger.error("audit_read_failed", error=str(e))
            return []
        return [AuditEvent.model_validate(item) for item in reversed(events[-limit:])]

    def log_storage_error(self, key: str, error_message: str) -> None:
        self.log(AuditEventBuilder.storage_error(key=key, error_message=error_message))
