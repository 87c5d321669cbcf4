"""
Audit Models for Finance Tracker

Every significant action in the system is logged for audit purposes:
sign-in and sign-out, every transaction mutation, and every rejected
or failed attempt.

DESIGN DECISION: Audit logs are append-only. We never modify them.
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
    # Session
    USER_LOGGED_IN = "user_logged_in"
    USER_SIGNED_UP = "user_signed_up"
    USER_LOGGED_OUT = "user_logged_out"
    AUTH_REJECTED = "auth_rejected"
    SESSION_RESTORED = "session_restored"

    # Transactions
    TRANSACTIONS_LOADED = "transactions_loaded"
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_REMOVED = "transaction_removed"
    TRANSACTION_REJECTED = "transaction_rejected"
    TRANSACTIONS_ERASED = "transactions_erased"

    # System events
    STORAGE_ERROR = "storage_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    One entry in the audit trail.

    owner_id is the identity whose data the event touched; entity_type
    and entity_id name the record ("transaction", "identity", or a
    storage key for storage failures).
    """

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(default_factory=_utcnow)

    event_type: AuditEventType
    severity: AuditSeverity = AuditSeverity.INFO

    owner_id: Optional[str] = None
    entity_type: Optional[str] = None
    entity_id: Optional[str] = None

    description: str
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    # False for events the system raised on its own (loads, restores, failures)
    is_user_action: bool = False

    def to_log_dict(self) -> dict:
        """JSON-safe fields for the process log; unset fields are left out."""
        return self.model_dump(mode="json", exclude_none=True)


class AuditEventBuilder:
    """
    Factory methods for the events the app emits.

        event = AuditEventBuilder.user_logged_in(identity_id, email, is_admin)
        event = AuditEventBuilder.transaction_added(owner_id, tx_id, name, amount)
    """

    @staticmethod
    def user_logged_in(identity_id: str, email: str, is_admin: bool) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_IN,
            owner_id=identity_id,
            entity_type="identity",
            entity_id=identity_id,
            description=f"User signed in: {email}",
            details={"email": email, "is_admin": is_admin},
            is_user_action=True,
        )

    @staticmethod
    def user_signed_up(identity_id: str, email: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_SIGNED_UP,
            owner_id=identity_id,
            entity_type="identity",
            entity_id=identity_id,
            description=f"User signed up: {email}",
            details={"email": email},
            is_user_action=True,
        )

    @staticmethod
    def user_logged_out(identity_id: str, policy: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.USER_LOGGED_OUT,
            owner_id=identity_id,
            entity_type="identity",
            entity_id=identity_id,
            description="User signed out",
            details={"logout_policy": policy},
            is_user_action=True,
        )

    @staticmethod
    def auth_rejected(action: str, reason: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.AUTH_REJECTED,
            severity=AuditSeverity.WARNING,
            entity_type="identity",
            description=f"{action} rejected: {reason}",
            details={"action": action},
            error_message=reason,
            is_user_action=True,
        )

    @staticmethod
    def session_restored(identity_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SESSION_RESTORED,
            owner_id=identity_id,
            entity_type="identity",
            entity_id=identity_id,
            description="Signed-in identity restored from storage",
        )

    @staticmethod
    def transactions_loaded(owner_id: str, count: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_LOADED,
            severity=AuditSeverity.DEBUG,
            owner_id=owner_id,
            entity_type="transaction",
            description=f"Loaded {count} transactions",
            details={"count": count},
        )

    @staticmethod
    def transaction_added(
        owner_id: str,
        transaction_id: int,
        name: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_ADDED,
            owner_id=owner_id,
            entity_type="transaction",
            entity_id=str(transaction_id),
            description=f"Transaction added: {name}",
            details={"name": name, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def transaction_updated(
        owner_id: str,
        transaction_id: int,
        name: str,
        amount: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_UPDATED,
            owner_id=owner_id,
            entity_type="transaction",
            entity_id=str(transaction_id),
            description=f"Transaction updated: {name}",
            details={"name": name, "amount": amount},
            is_user_action=True,
        )

    @staticmethod
    def transaction_removed(owner_id: str, transaction_id: int) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REMOVED,
            owner_id=owner_id,
            entity_type="transaction",
            entity_id=str(transaction_id),
            description=f"Transaction removed: {transaction_id}",
            is_user_action=True,
        )

    @staticmethod
    def transaction_rejected(owner_id: str, errors: list[str]) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTION_REJECTED,
            severity=AuditSeverity.WARNING,
            owner_id=owner_id,
            entity_type="transaction",
            description="Transaction rejected by validation",
            details={"errors": errors},
            error_message="; ".join(errors),
            is_user_action=True,
        )

    @staticmethod
    def transactions_erased(owner_id: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.TRANSACTIONS_ERASED,
            severity=AuditSeverity.WARNING,
            owner_id=owner_id,
            entity_type="transaction",
            description="All transactions erased on sign-out",
        )

    @staticmethod
    def storage_error(key: str, error_message: str) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            entity_type="storage",
            entity_id=key,
            description=f"Storage operation failed for key {key}",
            error_message=error_message,
        )
