"""
Main Orchestrator for Finance Tracker

This module ties the components together into one application-state
object per active session:
1. Session (sign in → load that user's transactions → sign out)
2. Transactions (add / edit / delete → write back → new summary)
3. Tools (loan calculator, example alerts, admin dashboard)

DESIGN DECISION: The current identity and the current transaction list
live in a FinanceApp instance, not in module globals or UI state. The
UI holds exactly one FinanceApp per browser session and calls it; it
never touches storage directly.
"""

from typing import Optional

from finance_tracker.alerts import get_admin_stats, get_alerts
from finance_tracker.audit import AuditLogger
from finance_tracker.calculator import amortization_schedule, calculate
from finance_tracker.config import (
    AppSettings,
    LogoutPolicy,
    Settings,
    StorageBackend,
    StorageSettings,
    get_settings,
)
from finance_tracker.models.alert import AdminStats, Alert
from finance_tracker.models.audit import AuditEvent, AuditEventBuilder
from finance_tracker.models.identity import Identity
from finance_tracker.models.loan import AmortizationRow, LoanResult
from finance_tracker.models.transaction import Transaction, TransactionSummary
from finance_tracker.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    StorageError,
)
from finance_tracker.session import SessionHolder
from finance_tracker.store import DraftLike, TransactionStore
from finance_tracker.summary import summarize
from finance_tracker.validation import TransactionValidator


class FinanceApp:
    """
    Application state for one signed-in session.

    Owns the session holder and the transaction store and keeps them
    in step: whenever the identity changes, the store is reloaded for
    the new scope.
    """

    def __init__(
        self,
        session: SessionHolder,
        store: TransactionStore,
        settings: Optional[AppSettings] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._session = session
        self._store = store
        self._settings = settings or AppSettings()
        self._audit_logger = audit_logger

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def identity(self) -> Optional[Identity]:
        return self._session.identity

    @property
    def is_authenticated(self) -> bool:
        return self._session.is_authenticated

    @property
    def is_admin(self) -> bool:
        return self._session.is_admin

    @property
    def transactions(self) -> list[Transaction]:
        return self._store.transactions

    # -------------------------------------------------------------------------
    # Session
    # -------------------------------------------------------------------------

    def restore(self) -> Optional[Identity]:
        """Pick up a signed-in identity left in storage by a previous run."""
        identity = self._session.restore()
        if identity:
            self._open_scope(identity)
        else:
            self._store.clear()
        return identity

    def login(self, email: str, password: str) -> Identity:
        identity = self._session.login(email, password)
        self._open_scope(identity)
        return identity

    def signup(
        self,
        email: str,
        password: str,
        confirm_password: str,
        whatsapp_number: Optional[str] = None,
    ) -> Identity:
        identity = self._session.signup(
            email,
            password,
            confirm_password,
            whatsapp_number=whatsapp_number,
        )
        self._open_scope(identity)
        return identity

    def _open_scope(self, identity: Identity) -> None:
        """
        Load the signed-in identity's transactions.

        If they cannot be read the sign-in is undone, so no session is
        left without its own scope loaded.
        """
        try:
            self._store.load(identity.id)
        except StorageError:
            self._session.logout()
            self._store.clear()
            raise

    def logout(self) -> Optional[Identity]:
        """
        Sign out.

        The user's stored transactions are kept or erased according to
        the configured logout policy.
        """
        previous = self._session.logout()
        if previous and self._settings.logout_policy == LogoutPolicy.ERASE:
            self._store.erase(previous.id)
        self._store.clear()

        if previous and self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.user_logged_out(
                identity_id=previous.id,
                policy=self._settings.logout_policy.value,
            ))
        return previous

    # -------------------------------------------------------------------------
    # Transactions
    # -------------------------------------------------------------------------

    def add_transaction(self, draft: DraftLike) -> Transaction:
        return self._store.add(draft)

    def update_transaction(self, draft: DraftLike) -> Optional[Transaction]:
        return self._store.update(draft)

    def remove_transaction(self, transaction_id: int) -> bool:
        return self._store.remove(transaction_id)

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        return self._store.get(transaction_id)

    def summary(self) -> TransactionSummary:
        return summarize(self._store.transactions)

    # -------------------------------------------------------------------------
    # Tools
    # -------------------------------------------------------------------------

    def calculate_loan(
        self,
        principal: float,
        annual_rate_percent: float,
        term_years: float,
    ) -> LoanResult:
        return calculate(
            principal,
            annual_rate_percent,
            term_years,
            allow_zero_rate=self._settings.allow_zero_rate_loans,
        )

    def loan_schedule(
        self,
        principal: float,
        annual_rate_percent: float,
        term_years: float,
    ) -> list[AmortizationRow]:
        return amortization_schedule(
            principal,
            annual_rate_percent,
            term_years,
            allow_zero_rate=self._settings.allow_zero_rate_loans,
        )

    def alerts(self) -> list[Alert]:
        return get_alerts()

    def admin_dashboard(self, event_limit: int = 20) -> tuple[AdminStats, list[AuditEvent]]:
        """
        Statistics and recent activity for the admin page.

        Raises:
            PermissionError: If the current identity is not an admin
        """
        if not self.is_admin:
            raise PermissionError("Admin access required")
        events = self._audit_logger.recent_events(event_limit) if self._audit_logger else []
        return get_admin_stats(), events


def create_storage(settings: StorageSettings) -> KeyValueStore:
    """Build the configured key-value backend."""
    if settings.backend == StorageBackend.MEMORY:
        return InMemoryKeyValueStore()
    return JsonFileKeyValueStore(settings.data_dir)


def create_app_components(
    settings: Optional[Settings] = None,
    storage: Optional[KeyValueStore] = None,
) -> FinanceApp:
    """
    Create a FinanceApp with all dependencies wired up.

    Args:
        settings: Settings to use; defaults to get_settings()
        storage: Storage to use; defaults to the configured backend
    """
    settings = settings or get_settings()
    storage_settings = settings.storage
    auth_settings = settings.auth
    app_settings = settings.app

    storage = storage or create_storage(storage_settings)
    audit_logger = AuditLogger(storage, max_events=storage_settings.max_audit_events)

    session = SessionHolder(
        storage,
        admin_emails=auth_settings.admin_emails_list,
        identity_key=auth_settings.identity_key,
        audit_logger=audit_logger,
    )
    store = TransactionStore(
        storage,
        validator=TransactionValidator(),
        audit_logger=audit_logger,
        missing_update_policy=app_settings.missing_update_policy,
    )

    return FinanceApp(session, store, settings=app_settings, audit_logger=audit_logger)
