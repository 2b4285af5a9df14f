"""Tests for profit and loss derivation."""

from datetime import date
from decimal import Decimal

import pytest

from builders import make_account, make_txn
from ledgerkit.domain.entities import AccountRole
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.statements import profit_and_loss
from ledgerkit.domain.statements.profit_and_loss import percent_of


@pytest.fixture
def accounts():
    return [
        make_account(1, "Cash", "Asset", "1000"),
        make_account(2, "Sales", "Income", "4000"),
        make_account(3, "Cost of Goods Sold", "Expense", "5000", role=AccountRole.COGS),
        make_account(4, "Freight In", "Expense", "5100", parent_id=3),
        make_account(5, "Rent", "Expense", "7060"),
    ]


@pytest.fixture
def transactions():
    return [
        make_txn(1, "2024-01-05", 1, 1000),
        make_txn(2, "2024-01-05", 2, -1000),
        make_txn(3, "2024-01-06", 3, 300),
        make_txn(4, "2024-01-06", 4, 100),
        make_txn(5, "2024-01-06", 1, -400),
        make_txn(6, "2024-01-10", 5, 200),
        make_txn(7, "2024-01-10", 1, -200),
        make_txn(8, "2024-02-01", 5, 999),
        make_txn(9, "2024-02-01", 1, -999),
    ]


def test_totals_for_period(accounts, transactions):
    report = profit_and_loss(accounts, transactions, date(2024, 1, 1), date(2024, 1, 31))

    assert report.total_income == Decimal("1000")
    assert report.total_cogs == Decimal("400")
    assert report.total_expenses == Decimal("600")
    assert report.gross_profit == Decimal("600")
    assert report.net_profit == Decimal("400")


def test_cogs_role_includes_children(accounts, transactions):
    report = profit_and_loss(accounts, transactions, date(2024, 1, 1), date(2024, 1, 31))

    cogs = report.expenses[0]
    assert cogs.role == AccountRole.COGS
    assert cogs.total == Decimal("400")
    assert cogs.children[0].name == "Freight In"


def test_cogs_role_only_counted_once_when_nested():
    accounts = [
        make_account(1, "Direct Costs", "Expense", "5000", role=AccountRole.COGS),
        make_account(2, "Materials", "Expense", "5010", parent_id=1, role=AccountRole.COGS),
    ]
    transactions = [make_txn(1, "2024-01-01", 2, 50), make_txn(2, "2024-01-01", 1, 25)]

    report = profit_and_loss(accounts, transactions, None, None)

    assert report.total_cogs == Decimal("75")


def test_common_size_lines(accounts, transactions):
    report = profit_and_loss(accounts, transactions, date(2024, 1, 1), date(2024, 1, 31))

    percents = {line.name: line.percent_of_income for line in report.lines}
    assert percents == {
        "Sales": Decimal("100.00"),
        "Cost of Goods Sold": Decimal("40.00"),
        "Freight In": Decimal("10.00"),
        "Rent": Decimal("20.00"),
    }
    assert [line.depth for line in report.lines] == [0, 0, 1, 0]


def test_open_ended_period_covers_everything(accounts, transactions):
    report = profit_and_loss(accounts, transactions, None, None)
    assert report.total_expenses == Decimal("1599")


def test_earliest_date_start_matches_open_start(accounts, transactions):
    report = profit_and_loss(accounts, transactions, date.min, date(2024, 12, 31))
    assert report.total_income == Decimal("1000")
    assert report.total_expenses == Decimal("1599")
    open_start = profit_and_loss(accounts, transactions, None, date(2024, 12, 31))
    assert report.lines == open_start.lines


def test_no_income_gives_zero_percentages(accounts):
    transactions = [make_txn(1, "2024-01-01", 5, 10), make_txn(2, "2024-01-01", 1, -10)]

    report = profit_and_loss(accounts, transactions, None, None)

    assert report.net_profit == Decimal("-10")
    assert all(line.percent_of_income == Decimal("0.00") for line in report.lines)


def test_archived_accounts_are_left_out(accounts, transactions):
    accounts[4] = make_account(5, "Rent", "Expense", "7060", archived=True)

    report = profit_and_loss(accounts, transactions, date(2024, 1, 1), date(2024, 1, 31))

    assert report.total_expenses == Decimal("400")


def test_start_after_end_is_rejected(accounts, transactions):
    with pytest.raises(ValidationError, match="after end date"):
        profit_and_loss(accounts, transactions, date(2024, 2, 1), date(2024, 1, 1))


def test_percent_of_rounds_half_up():
    assert percent_of(Decimal("1"), Decimal("8")) == Decimal("12.50")
    assert percent_of(Decimal("1"), Decimal("3")) == Decimal("33.33")
    assert percent_of(Decimal("5"), Decimal("0")) == Decimal("0.00")
