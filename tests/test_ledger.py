"""Tests for the ledger snapshot and balance queries."""

from datetime import date
from decimal import Decimal

import pytest

from builders import make_account, make_txn
from ledgerkit.domain.entities import AccountCategory, Transaction
from ledgerkit.domain.errors import CyclicHierarchyError, UnknownAccountError, ValidationError
from ledgerkit.domain.ledger import Ledger, as_ledger, balance_as_of, day_before, in_range


@pytest.fixture
def accounts():
    return [
        make_account(1, "Cash", "Asset", "1000"),
        make_account(2, "Sales", "Income", "4000"),
        make_account(3, "Rent", "Expense", "7060"),
    ]


@pytest.fixture
def transactions():
    return [
        make_txn(1, "2024-01-05", 1, 1000),
        make_txn(2, "2024-01-05", 2, -1000),
        make_txn(3, "2024-01-10", 1, -200),
        make_txn(4, "2024-01-10", 3, 200),
    ]


def test_balance_as_of_is_raw_and_inclusive(transactions):
    assert balance_as_of([1], transactions, date(2024, 1, 10)) == Decimal("800")
    assert balance_as_of([1], transactions, date(2024, 1, 9)) == Decimal("1000")
    assert balance_as_of([2], transactions, date(2024, 1, 31)) == Decimal("-1000")
    assert balance_as_of([1], transactions, date(2024, 1, 4)) == Decimal("0")


def test_balance_as_of_multiple_accounts(transactions):
    assert balance_as_of([1, 2, 3], transactions, date(2024, 1, 31)) == Decimal("0")


def test_ledger_balance_matches_linear_scan(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    for day in range(1, 32):
        as_of = date(2024, 1, day)
        for account_id in (1, 2, 3):
            assert ledger.account_balance_as_of(account_id, as_of) == balance_as_of(
                [account_id], transactions, as_of
            )


def test_ledger_none_date_means_full_history(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    assert ledger.account_balance_as_of(1, None) == Decimal("800")


def test_movement_is_inclusive_on_both_ends(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    assert ledger.movement([1], date(2024, 1, 5), date(2024, 1, 5)) == Decimal("1000")
    assert ledger.movement([1], date(2024, 1, 6), date(2024, 1, 10)) == Decimal("-200")
    assert ledger.movement([1], date(2024, 1, 11), date(2024, 1, 31)) == Decimal("0")


def test_movement_with_open_bounds(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    assert ledger.movement([1], None, date(2024, 1, 9)) == Decimal("1000")
    assert ledger.movement([1], date(2024, 1, 6), None) == Decimal("-200")
    assert ledger.movement([1]) == Decimal("800")


def test_earliest_date_is_a_valid_start(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    assert ledger.movement([1], date.min, date(2024, 1, 31)) == Decimal("800")
    assert ledger.movement([1], date.min, None) == ledger.movement([1])
    assert ledger.opening_balance([1, 2], date.min) == Decimal("0")
    assert ledger.opening_balance([1], date(2024, 1, 6)) == Decimal("1000")


def test_duplicate_ids_in_movement_are_counted_once(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    assert ledger.movement([1, 1]) == Decimal("800")


def test_account_without_postings_has_zero_balance(accounts):
    ledger = Ledger(accounts, [])
    assert ledger.account_balance_as_of(3, date(2024, 1, 1)) == Decimal("0")


def test_unknown_account_is_structural_error(accounts):
    with pytest.raises(UnknownAccountError, match="unknown account 99"):
        Ledger(accounts, [make_txn(1, "2024-01-01", 99, 10)])


def test_cycle_in_parent_graph_is_rejected():
    accounts = [
        make_account(1, "A", "Asset", parent_id=3),
        make_account(2, "B", "Asset", parent_id=1),
        make_account(3, "C", "Asset", parent_id=2),
    ]
    with pytest.raises(CyclicHierarchyError, match="cycle"):
        Ledger(accounts, [])


def test_self_parent_is_a_cycle():
    with pytest.raises(CyclicHierarchyError):
        Ledger([make_account(1, "A", "Asset", parent_id=1)], [])


def test_missing_parent_is_tolerated():
    ledger = Ledger([make_account(1, "A", "Asset", parent_id=42)], [])
    assert ledger.get_account(1).parent_id == 42


def test_duplicate_account_ids_rejected():
    with pytest.raises(ValidationError, match="Duplicate account ID"):
        Ledger([make_account(1, "A", "Asset"), make_account(1, "B", "Asset")], [])


def test_account_ids_filters(accounts):
    archived = make_account(4, "Old", "Asset", archived=True)
    ledger = Ledger(accounts + [archived], [])

    assert ledger.account_ids([AccountCategory.ASSET]) == [1, 4]
    assert ledger.account_ids([AccountCategory.ASSET], include_archived=False) == [1]


def test_transactions_between(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    ids = [txn.id for txn in ledger.transactions_between(date(2024, 1, 6), date(2024, 1, 10))]
    assert ids == [3, 4]


def test_float_amounts_are_coerced_exactly(accounts):
    txn = Transaction(id=1, date=date(2024, 1, 1), account_id=1, amount=0.1)
    ledger = Ledger(accounts, [txn, make_txn(2, "2024-01-01", 1, "0.2")])
    assert ledger.account_balance_as_of(1, None) == Decimal("0.3")


def test_as_ledger_passes_through(accounts, transactions):
    ledger = Ledger(accounts, transactions)
    assert as_ledger(ledger) is ledger
    assert isinstance(as_ledger(accounts, transactions), Ledger)


def test_date_helpers():
    assert day_before(date(2024, 3, 1)) == date(2024, 2, 29)
    assert in_range(date(2024, 1, 31), None, date(2024, 1, 31))
    assert not in_range(date(2024, 2, 1), None, date(2024, 1, 31))
    assert in_range(date(2000, 1, 1), None, None)
