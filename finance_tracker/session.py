"""
Session / Identity Holder

Mocked authentication: any non-empty email and password sign in, and
sign-up only checks that the two passwords match. There is no account
store behind this.

DESIGN DECISION: login() and signup() are the only entry points, so a
real credential-verification service can replace the mock without
changing callers. Admin rights come from configuration, never from a
value written into this module.
"""

from typing import Optional

from pydantic import ValidationError

from finance_tracker.audit import AuditLogger
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.identity import Identity, Role, identity_id_for_email
from finance_tracker.services.storage import CorruptDataError, KeyValueStore


DEFAULT_IDENTITY_KEY = "financeUser"


class AuthenticationError(ValueError):
    """Sign-in or sign-up input was rejected."""
    pass


class SessionHolder:
    """
    Holds the current identity and persists it under the identity key.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        admin_emails: Optional[list[str]] = None,
        identity_key: str = DEFAULT_IDENTITY_KEY,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._storage = storage
        self._admin_emails = {email.strip().lower() for email in admin_emails or []}
        self._identity_key = identity_key
        self._audit_logger = audit_logger
        self._identity: Optional[Identity] = None

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    @property
    def is_admin(self) -> bool:
        return self._identity is not None and self._identity.is_admin

    def role_for(self, email: str) -> Role:
        return Role.ADMIN if email.strip().lower() in self._admin_emails else Role.USER

    def restore(self) -> Optional[Identity]:
        """
        Re-read a previously signed-in identity from storage.

        A stored identity that can no longer be decoded is discarded.
        """
        try:
            raw = self._storage.read_json(self._identity_key)
            identity = Identity.model_validate(raw) if raw is not None else None
        except (CorruptDataError, ValidationError) as e:
            self._discard_stored_identity(str(e))
            return None

        self._identity = identity
        if identity and self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.session_restored(identity.id))
        return identity

    def login(self, email: str, password: str) -> Identity:
        """
        Sign in.

        Raises:
            AuthenticationError: If email or password is empty
        """
        email = (email or "").strip()
        if not email or not password:
            self._reject("login", "Please enter email and password.")

        try:
            identity = Identity(
                id=identity_id_for_email(email),
                email=email,
                role=self.role_for(email),
            )
        except ValidationError as e:
            self._reject("login", str(e))
        self._set_identity(identity)

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.user_logged_in(
                identity_id=identity.id,
                email=identity.email,
                is_admin=identity.is_admin,
            ))
        return identity

    def signup(
        self,
        email: str,
        password: str,
        confirm_password: str,
        whatsapp_number: Optional[str] = None,
    ) -> Identity:
        """
        Create an account and sign in.

        Sign-up never grants the admin role.

        Raises:
            AuthenticationError: If a field is missing or the passwords differ
        """
        email = (email or "").strip()
        if not email or not password or not confirm_password:
            self._reject("signup", "Please fill all required fields for sign up.")
        if password != confirm_password:
            self._reject("signup", "Passwords do not match.")

        try:
            identity = Identity(
                id=identity_id_for_email(email),
                email=email,
                role=Role.USER,
                whatsapp_number=(whatsapp_number or "").strip() or None,
            )
        except ValidationError as e:
            self._reject("signup", str(e))
        self._set_identity(identity)

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.user_signed_up(
                identity_id=identity.id,
                email=identity.email,
            ))
        return identity

    def logout(self) -> Optional[Identity]:
        """
        Clear the current identity and its persisted key.

        Returns the identity that was signed in, if any. What happens to
        that identity's transactions is decided by the caller.
        """
        previous = self._identity
        self._identity = None
        self._storage.delete(self._identity_key)
        return previous

    def _set_identity(self, identity: Identity) -> None:
        self._storage.write_json(
            self._identity_key,
            identity.model_dump(mode="json", by_alias=True),
        )
        self._identity = identity

    def _discard_stored_identity(self, reason: str) -> None:
        self._storage.delete(self._identity_key)
        if self._audit_logger:
            self._audit_logger.log_storage_error(self._identity_key, reason)

    def _reject(self, action: str, reason: str) -> None:
        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.auth_rejected(action, reason))
        raise AuthenticationError(reason)
