"""Transaction domain service."""

import uuid
from typing import Optional
from datetime import date
from decimal import Decimal
from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Transaction as TransactionEntity
from ledgerkit.domain.errors import (
    NotFoundError,
    UnbalancedEntryError,
    ValidationError,
    account_not_found,
    too_many_decimal_places,
    unbalanced_entry,
)
from ledgerkit.logging_config import get_logger
from ledgerkit.utils.amount_parser import coerce_decimal, fits_places

log = get_logger(__name__)

# Scale of the stored amount column
AMOUNT_PLACES = 2


def _checked_amount(amount) -> Decimal:
    value = coerce_decimal(amount)
    if not fits_places(value, AMOUNT_PLACES):
        raise ValidationError(too_many_decimal_places("Amount", value, AMOUNT_PLACES))
    return value


class TransactionService:
    """Service for recording postings and journal entries."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_open_account(self, account_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        if account.archived:
            raise ValidationError(f"Account {account_id} is archived; unarchive it before posting")

    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: Decimal,
        description: Optional[str] = None,
        entry_id: Optional[str] = None,
    ) -> int:
        """Record a single posting.

        Used when importing ledgers whose other legs are recorded
        separately; prefer post_entry for new bookkeeping.

        Args:
            account_id: Account ID
            date: Posting date
            amount: Debit-positive amount
            description: Optional description
            entry_id: Optional journal entry the posting belongs to

        Returns:
            Transaction ID

        Raises:
            NotFoundError: If the account doesn't exist
            ValidationError: If the account is archived or the amount has
                more than two decimal places
        """
        value = _checked_amount(amount)
        self._require_open_account(account_id)
        return self.db.create_transaction(
            account_id=account_id,
            date=date,
            amount=value,
            description=description,
            entry_id=entry_id,
        )

    def post_entry(
        self,
        date: date,
        legs: list[tuple[int, Decimal]],
        description: Optional[str] = None,
    ) -> str:
        """Record a balanced journal entry.

        Args:
            date: Entry date, shared by every leg
            legs: (account_id, amount) pairs; debits positive, credits negative
            description: Optional description copied to every leg

        Returns:
            Entry ID grouping the created postings

        Raises:
            ValidationError: If there are fewer than two legs, a zero leg, a
                leg with more than two decimal places or an archived account
            NotFoundError: If a leg references an unknown account
            UnbalancedEntryError: If the legs do not sum to zero
        """
        if len(legs) < 2:
            raise ValidationError("A journal entry needs at least two legs")

        normalized: list[tuple[int, Decimal]] = []
        for account_id, amount in legs:
            value = _checked_amount(amount)
            if value == 0:
                raise ValidationError(f"Journal entry leg for account {account_id} has zero amount")
            self._require_open_account(account_id)
            normalized.append((account_id, value))

        difference = sum((value for _, value in normalized), Decimal("0"))
        if difference != 0:
            raise UnbalancedEntryError(unbalanced_entry(date, difference))

        entry_id = uuid.uuid4().hex
        self.db.create_journal_entry(
            entry_id=entry_id, date=date, legs=normalized, description=description
        )
        log.info("journal_entry_posted", entry_id=entry_id, legs=len(normalized), date=date.isoformat())
        return entry_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def get_entry(self, entry_id: str) -> list[TransactionEntity]:
        """Return the legs of a journal entry."""
        return self.db.list_transactions(entry_id=entry_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> list[TransactionEntity]:
        """List postings with filters.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            account_id: Optional account ID filter

        Returns:
            List of transaction entities ordered by date
        """
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
        )
