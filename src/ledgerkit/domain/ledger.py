"""Validated, indexed ledger snapshot and balance snapshot queries."""

from bisect import bisect_right
from collections.abc import Iterable
from datetime import date, timedelta
from decimal import Decimal
from typing import Optional

from ledgerkit.domain.entities import Account, AccountCategory, Transaction
from ledgerkit.domain.errors import (
    CyclicHierarchyError,
    UnknownAccountError,
    ValidationError,
    account_hierarchy_cycle,
    unknown_account_in_posting,
)
from ledgerkit.logging_config import get_logger
from ledgerkit.utils.amount_parser import coerce_decimal

log = get_logger(__name__)

ZERO = Decimal("0")


def balance_as_of(
    account_ids: Iterable[int],
    transactions: Iterable[Transaction],
    as_of_date: date,
) -> Decimal:
    """Sum raw amounts posted to the given accounts up to a date.

    No sign normalization is applied; callers convert with
    ``ledgerkit.domain.conventions``. This is a linear scan, use
    ``Ledger.balance_as_of`` when asking many questions of one snapshot.

    Args:
        account_ids: Accounts to include
        transactions: Postings to scan
        as_of_date: Inclusive cutoff date

    Returns:
        Raw balance
    """
    wanted = set(account_ids)
    return sum(
        (
            coerce_decimal(txn.amount)
            for txn in transactions
            if txn.account_id in wanted and txn.date <= as_of_date
        ),
        ZERO,
    )


def day_before(value: date) -> date:
    """Return the previous calendar day."""
    return value - timedelta(days=1)


def in_range(value: date, start_date: Optional[date], end_date: Optional[date]) -> bool:
    """Return True if value is within the inclusive, optionally open, range."""
    if start_date is not None and value < start_date:
        return False
    if end_date is not None and value > end_date:
        return False
    return True


class Ledger:
    """Immutable snapshot of a chart of accounts and its postings.

    Construction validates the snapshot: every posting must reference a
    known account and the parent graph must be acyclic. A parent ID that
    points at no account is tolerated; tree builders treat that account as
    a root.

    Postings are indexed per account, sorted by date, with running totals,
    so a balance at any date is a binary search.
    """

    def __init__(self, accounts: Iterable[Account], transactions: Iterable[Transaction]):
        self.accounts: tuple[Account, ...] = tuple(accounts)
        self.accounts_by_id: dict[int, Account] = {}
        for account in self.accounts:
            if account.id in self.accounts_by_id:
                raise ValidationError(f"Duplicate account ID {account.id} in snapshot")
            self.accounts_by_id[account.id] = account

        self.transactions: tuple[Transaction, ...] = tuple(transactions)
        for txn in self.transactions:
            if txn.account_id not in self.accounts_by_id:
                raise UnknownAccountError(unknown_account_in_posting(txn.id, txn.account_id))

        self._check_acyclic()
        self._dates: dict[int, list[date]] = {}
        self._running: dict[int, list[Decimal]] = {}
        self._build_index()

        log.debug(
            "ledger_snapshot_built",
            accounts=len(self.accounts),
            transactions=len(self.transactions),
        )

    def _check_acyclic(self) -> None:
        # 0 = unvisited, 1 = on current path, 2 = done
        state: dict[int, int] = {}
        for start in self.accounts_by_id:
            path: list[int] = []
            current: Optional[int] = start
            while current is not None and current in self.accounts_by_id:
                seen = state.get(current, 0)
                if seen == 2:
                    break
                if seen == 1:
                    cycle = path[path.index(current):] + [current]
                    raise CyclicHierarchyError(account_hierarchy_cycle(cycle))
                state[current] = 1
                path.append(current)
                current = self.accounts_by_id[current].parent_id
            for account_id in path:
                state[account_id] = 2

    def _build_index(self) -> None:
        postings: dict[int, list[tuple[date, int, Decimal]]] = {}
        for txn in self.transactions:
            postings.setdefault(txn.account_id, []).append(
                (txn.date, txn.id, coerce_decimal(txn.amount))
            )

        for account_id, rows in postings.items():
            rows.sort(key=lambda row: (row[0], row[1]))
            running = []
            total = ZERO
            for _, _, amount in rows:
                total += amount
                running.append(total)
            self._dates[account_id] = [row[0] for row in rows]
            self._running[account_id] = running

    def get_account(self, account_id: int) -> Optional[Account]:
        return self.accounts_by_id.get(account_id)

    def account_ids(
        self,
        categories: Optional[Iterable[AccountCategory]] = None,
        include_archived: bool = True,
    ) -> list[int]:
        """List account IDs, optionally filtered by category and archive flag."""
        wanted = set(categories) if categories is not None else None
        return [
            account.id
            for account in self.accounts
            if (wanted is None or account.category in wanted)
            and (include_archived or not account.archived)
        ]

    def account_balance_as_of(self, account_id: int, as_of_date: Optional[date]) -> Decimal:
        """Raw balance of one account up to and including a date.

        A ``None`` date means the full history.
        """
        running = self._running.get(account_id)
        if not running:
            return ZERO
        if as_of_date is None:
            return running[-1]
        index = bisect_right(self._dates[account_id], as_of_date)
        if index == 0:
            return ZERO
        return running[index - 1]

    def balance_as_of(self, account_ids: Iterable[int], as_of_date: Optional[date]) -> Decimal:
        """Raw combined balance of accounts up to and including a date."""
        return sum(
            (self.account_balance_as_of(account_id, as_of_date) for account_id in set(account_ids)),
            ZERO,
        )

    def account_opening_balance(self, account_id: int, start_date: Optional[date]) -> Decimal:
        """Raw balance of one account strictly before a date.

        Nothing precedes ``date.min`` or an open start, so both open at zero.
        """
        if start_date is None or start_date == date.min:
            return ZERO
        return self.account_balance_as_of(account_id, day_before(start_date))

    def opening_balance(self, account_ids: Iterable[int], start_date: Optional[date]) -> Decimal:
        """Raw combined balance of accounts strictly before a date."""
        return sum(
            (self.account_opening_balance(account_id, start_date) for account_id in set(account_ids)),
            ZERO,
        )

    def account_movement(
        self,
        account_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        """Raw movement of one account within an inclusive date range."""
        closing = self.account_balance_as_of(account_id, end_date)
        return closing - self.account_opening_balance(account_id, start_date)

    def movement(
        self,
        account_ids: Iterable[int],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Decimal:
        """Raw combined movement of accounts within an inclusive date range."""
        return sum(
            (
                self.account_movement(account_id, start_date, end_date)
                for account_id in set(account_ids)
            ),
            ZERO,
        )

    def sum_by_account(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> dict[int, Decimal]:
        """Raw movement per account for every account in the snapshot."""
        return {
            account.id: self.account_movement(account.id, start_date, end_date)
            for account in self.accounts
        }

    def transactions_between(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transaction]:
        """Postings dated within an inclusive, optionally open, range."""
        return [txn for txn in self.transactions if in_range(txn.date, start_date, end_date)]


def as_ledger(
    accounts: "Iterable[Account] | Ledger",
    transactions: Optional[Iterable[Transaction]] = None,
) -> Ledger:
    """Accept either a prepared Ledger or raw accounts and transactions."""
    if isinstance(accounts, Ledger):
        return accounts
    return Ledger(accounts, transactions or ())
