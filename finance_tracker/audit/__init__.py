"""Audit logging package."""

from finance_tracker.audit.logger import AUDIT_LOG_KEY, AuditLogger, configure_logging

__all__ = ["AUDIT_LOG_KEY", "AuditLogger", "configure_logging"]
