"""
Transaction Store

Holds the signed-in user's transactions in memory and writes the whole
collection back to the key-value store after every change.

GUARANTEES:
- The collection is always sorted by date, newest first. Records on the
  same date keep the order they were added in.
- Ids are unique within one owner's collection.
- A mutation either applies completely (memory and storage) or not at all.
"""

from typing import Any, Optional, Union

from pydantic import TypeAdapter, ValidationError

from finance_tracker.audit import AuditLogger
from finance_tracker.config.settings import MissingUpdatePolicy
from finance_tracker.models.audit import AuditEventBuilder
from finance_tracker.models.transaction import (
    Transaction,
    TransactionDraft,
    ValidationIssue,
    ValidationResult,
    generate_transaction_id,
)
from finance_tracker.services.storage import (
    CorruptDataError,
    KeyValueStore,
    NotFoundError,
    StorageError,
)
from finance_tracker.validation import TransactionValidator


GUEST_OWNER_ID = "guest"
SCOPE_KEY_PREFIX = "transactions_"

_TRANSACTION_LIST = TypeAdapter(list[Transaction])

DraftLike = Union[TransactionDraft, dict[str, Any]]


def scope_key(owner_id: Optional[str]) -> str:
    """Storage key holding one owner's transactions."""
    return f"{SCOPE_KEY_PREFIX}{owner_id or GUEST_OWNER_ID}"


def sort_by_date(transactions: list[Transaction]) -> list[Transaction]:
    """Newest first; sorted() is stable, so ties keep insertion order."""
    return sorted(transactions, key=lambda tx: tx.date, reverse=True)


class TransactionRejectedError(ValueError):
    """A draft failed validation and was not applied."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = result.error_messages or ["Transaction is invalid"]
        super().__init__("; ".join(messages))


class TransactionNotFoundError(NotFoundError):
    """An update referenced an id that is not in the collection."""

    def __init__(self, transaction_id: Optional[int]):
        self.transaction_id = transaction_id
        super().__init__(f"Transaction {transaction_id} not found")


class TransactionStore:
    """
    Ordered, owner-scoped transaction collection.

    Reads happen once per identity change (load); every add, update
    and remove writes the full collection back.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        missing_update_policy: MissingUpdatePolicy = MissingUpdatePolicy.IGNORE,
    ):
        self._storage = storage
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger
        self._missing_update_policy = missing_update_policy
        self._owner_id: Optional[str] = None
        self._transactions: list[Transaction] = []

    @property
    def owner_id(self) -> str:
        return self._owner_id or GUEST_OWNER_ID

    @property
    def scope_key(self) -> str:
        return scope_key(self._owner_id)

    @property
    def transactions(self) -> list[Transaction]:
        """A copy of the current collection, newest first."""
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, transaction_id: int) -> Optional[Transaction]:
        for tx in self._transactions:
            if tx.id == transaction_id:
                return tx
        return None

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def load(self, owner_id: Optional[str]) -> list[Transaction]:
        """
        Switch to an owner and read their collection.

        Returns an empty collection when the owner has no stored data.

        Raises:
            CorruptDataError: If the stored collection cannot be decoded
        """
        key = scope_key(owner_id)
        try:
            loaded = self._read_collection(key, owner_id or GUEST_OWNER_ID)
        except CorruptDataError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(key, str(e))
            raise

        self._owner_id = owner_id
        self._transactions = sort_by_date(loaded)

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.transactions_loaded(
                owner_id=self.owner_id,
                count=len(self._transactions),
            ))
        return self.transactions

    def clear(self) -> None:
        """Forget the in-memory collection without touching storage."""
        self._owner_id = None
        self._transactions = []

    def erase(self, owner_id: Optional[str]) -> bool:
        """
        Delete an owner's persisted collection.

        Returns True if there was anything to delete.
        """
        removed = self._storage.delete(scope_key(owner_id))
        if owner_id == self._owner_id:
            self._transactions = []
        if removed and self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.transactions_erased(
                owner_id=owner_id or GUEST_OWNER_ID,
            ))
        return removed

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add(self, draft: DraftLike) -> Transaction:
        """
        Validate a draft and insert it.

        Assigns an id when the draft has none and attaches the current owner.

        Raises:
            TransactionRejectedError: If required fields are missing or the
                id is already taken
            StorageError: If the write-back fails
        """
        draft = self._validated(draft)

        if draft.id is not None and self.get(draft.id) is not None:
            self._reject(ValidationResult(
                is_valid=False,
                issues=[ValidationIssue(
                    field="id",
                    issue_type="duplicate",
                    message=f"A transaction with id {draft.id} already exists",
                    severity="error",
                )],
            ))

        transaction = self._build(draft, draft.id if draft.id is not None else generate_transaction_id())
        self._commit(sort_by_date(self._transactions + [transaction]))

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.transaction_added(
                owner_id=self.owner_id,
                transaction_id=transaction.id,
                name=transaction.name,
                amount=str(transaction.amount),
            ))
        return transaction

    def update(self, draft: DraftLike) -> Optional[Transaction]:
        """
        Replace the record with the draft's id.

        Returns the updated record, or None when the id is unknown and the
        missing-update policy is "ignore".

        Raises:
            TransactionRejectedError: If the draft fails validation
            TransactionNotFoundError: If the id is unknown and the policy
                is "raise"
        """
        draft = self._validated(draft)

        if draft.id is None or self.get(draft.id) is None:
            if self._missing_update_policy == MissingUpdatePolicy.RAISE:
                raise TransactionNotFoundError(draft.id)
            return None

        transaction = self._build(draft, draft.id)
        replaced = [transaction if tx.id == draft.id else tx for tx in self._transactions]
        self._commit(sort_by_date(replaced))

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.transaction_updated(
                owner_id=self.owner_id,
                transaction_id=transaction.id,
                name=transaction.name,
                amount=str(transaction.amount),
            ))
        return transaction

    def remove(self, transaction_id: int) -> bool:
        """
        Delete a record by id.

        Asking the user to confirm is the caller's job. Removing an id
        that is not present changes nothing and returns False.
        """
        remaining = [tx for tx in self._transactions if tx.id != transaction_id]
        if len(remaining) == len(self._transactions):
            return False

        self._commit(remaining)

        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.transaction_removed(
                owner_id=self.owner_id,
                transaction_id=transaction_id,
            ))
        return True

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _read_collection(self, key: str, effective_owner: str) -> list[Transaction]:
        raw = self._storage.read_json(key) or []
        if not isinstance(raw, list):
            raise CorruptDataError(f"Value under '{key}' is not a list")

        for item in raw:
            if isinstance(item, dict) and "ownerId" not in item and "owner_id" not in item:
                # Records written before owner scoping carried userId instead
                item["ownerId"] = item.get("userId") or effective_owner

        try:
            return _TRANSACTION_LIST.validate_python(raw)
        except ValidationError as e:
            raise CorruptDataError(f"Stored transactions under '{key}' are invalid: {e}") from e

    def _validated(self, draft: DraftLike) -> TransactionDraft:
        if not isinstance(draft, TransactionDraft):
            try:
                draft = TransactionDraft.model_validate(draft)
            except ValidationError as e:
                self._reject(ValidationResult(
                    is_valid=False,
                    issues=[
                        ValidationIssue(
                            field=".".join(str(part) for part in error["loc"]) or "transaction",
                            issue_type="invalid_value",
                            message=f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}",
                            severity="error",
                        )
                        for error in e.errors()
                    ],
                ))

        result = self._validator.validate(draft)
        if not result.is_valid:
            self._reject(result)
        return draft

    def _reject(self, result: ValidationResult) -> None:
        if self._audit_logger:
            self._audit_logger.log(AuditEventBuilder.transaction_rejected(
                owner_id=self.owner_id,
                errors=result.error_messages,
            ))
        raise TransactionRejectedError(result)

    def _build(self, draft: TransactionDraft, transaction_id: int) -> Transaction:
        data = draft.model_dump(exclude={"id"})
        return Transaction(id=transaction_id, owner_id=self.owner_id, **data)

    def _commit(self, transactions: list[Transaction]) -> None:
        """Write back first; only then replace the in-memory collection."""
        payload = _TRANSACTION_LIST.dump_python(transactions, mode="json", by_alias=True)
        try:
            self._storage.write_json(self.scope_key, payload)
        except StorageError as e:
            if self._audit_logger:
                self._audit_logger.log_storage_error(self.scope_key, str(e))
            raise
        self._transactions = transactions
