"""Tests for the statement of cash flows."""

from datetime import date
from decimal import Decimal

import pytest
from structlog.testing import capture_logs

from builders import make_account, make_txn
from ledgerkit.domain.entities import AccountRole
from ledgerkit.domain.errors import UnknownAccountError, ValidationError
from ledgerkit.domain.statements import cash_flow_statement

JAN_1 = date(2024, 1, 1)
JAN_31 = date(2024, 1, 31)

CASH = 1
RECEIVABLES = 2
EQUIPMENT = 3
PAYABLES = 4
LOAN = 5
CAPITAL = 6
SALES = 7
DEPRECIATION = 8
RENT = 9
PREPAID = 10
INVENTORY = 11


@pytest.fixture
def accounts():
    return [
        make_account(CASH, "Bank", "Asset", "1010", role=AccountRole.CASH),
        make_account(RECEIVABLES, "Receivables", "Asset", "1200", role=AccountRole.RECEIVABLE),
        make_account(INVENTORY, "Stock", "Asset", "1300", role=AccountRole.INVENTORY),
        make_account(PREPAID, "Prepaid Insurance", "Asset", "1400", role=AccountRole.PREPAYMENT),
        make_account(EQUIPMENT, "Equipment", "Asset", "1500"),
        make_account(PAYABLES, "Trade Creditors", "Liability", "2000", role=AccountRole.PAYABLE),
        make_account(LOAN, "Bank Loan", "Liability", "2500"),
        make_account(CAPITAL, "Owner's Capital", "Equity", "3000"),
        make_account(SALES, "Sales", "Income", "4000"),
        make_account(DEPRECIATION, "Depreciation", "Expense", "7300", role=AccountRole.DEPRECIATION),
        make_account(RENT, "Rent", "Expense", "7060"),
    ]


def _entry(transactions, on, *legs):
    for account_id, amount in legs:
        transactions.append(make_txn(len(transactions) + 1, on, account_id, amount))


@pytest.fixture
def transactions():
    txns = []
    _entry(txns, "2023-12-31", (CASH, 10000), (CAPITAL, -10000))
    _entry(txns, "2024-01-05", (RECEIVABLES, 1500), (SALES, -1500))
    _entry(txns, "2024-01-06", (CASH, 500), (SALES, -500))
    _entry(txns, "2024-01-10", (EQUIPMENT, 3000), (CASH, -3000))
    _entry(txns, "2024-01-15", (RENT, 400), (PAYABLES, -400))
    _entry(txns, "2024-01-20", (CASH, 2000), (LOAN, -2000))
    _entry(txns, "2024-01-25", (PREPAID, 300), (CASH, -300))
    _entry(txns, "2024-01-26", (INVENTORY, 700), (PAYABLES, -700))
    _entry(txns, "2024-01-31", (DEPRECIATION, 100), (EQUIPMENT, -100))
    _entry(txns, "2024-02-01", (CASH, 50), (SALES, -50))
    return txns


def test_operating_section(accounts, transactions):
    statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    assert statement.net_income == Decimal("1500")
    assert statement.depreciation_and_amortization == Decimal("100")
    assert statement.change_in_accounts_receivable == Decimal("-1500")
    assert statement.change_in_inventory == Decimal("-700")
    assert statement.change_in_prepayments == Decimal("-300")
    assert statement.change_in_accounts_payable == Decimal("1100")
    assert statement.cash_from_operations == Decimal("200")


def test_investing_and_financing(accounts, transactions):
    statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    # Equipment bought for cash; depreciation is not an investing flow
    assert statement.cash_from_investing == Decimal("-3000")
    assert statement.cash_from_financing == Decimal("2000")


def test_reconciles_to_cash_balances(accounts, transactions):
    statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    assert statement.start_cash == Decimal("10000")
    assert statement.end_cash == Decimal("9200")
    assert statement.net_change_in_cash == Decimal("-800")
    assert statement.is_reconciled
    assert statement.warnings == ()


def test_reconciles_for_any_window(accounts, transactions):
    windows = [
        (date(2023, 12, 31), date(2023, 12, 31)),
        (date(2024, 1, 6), date(2024, 1, 20)),
        (date(2023, 1, 1), date(2024, 12, 31)),
        (date(2024, 2, 1), date(2024, 2, 1)),
    ]
    for start, end in windows:
        assert cash_flow_statement(transactions, accounts, start, end).is_reconciled


def test_posting_on_start_date_is_a_flow_not_opening_cash(accounts):
    transactions = [
        make_txn(1, "2024-01-01", CASH, 1000),
        make_txn(2, "2024-01-01", CAPITAL, -1000),
    ]

    statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    assert statement.start_cash == Decimal("0")
    assert statement.end_cash == Decimal("1000")
    assert statement.cash_from_financing == Decimal("1000")


def test_earliest_date_start_opens_with_no_cash(accounts, transactions):
    statement = cash_flow_statement(transactions, accounts, date.min, JAN_31)

    assert statement.start_cash == Decimal("0")
    assert statement.end_cash == Decimal("9200")
    assert statement.cash_from_financing == Decimal("12000")
    assert statement.is_reconciled


def test_archived_accounts_still_count(accounts, transactions):
    accounts = [
        make_account(LOAN, "Bank Loan", "Liability", "2500", archived=True)
        if account.id == LOAN
        else account
        for account in accounts
    ]

    statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    assert statement.cash_from_financing == Decimal("2000")
    assert statement.is_reconciled


def test_no_cash_accounts_is_a_warning(accounts, transactions):
    accounts = [
        make_account(CASH, "Bank", "Asset", "1010") if account.id == CASH else account
        for account in accounts
    ]

    with capture_logs() as logs:
        statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    assert statement.start_cash == Decimal("0")
    assert statement.end_cash == Decimal("0")
    assert any("Cash role" in warning for warning in statement.warnings)
    assert any(entry["event"] == "cash_flow_no_cash_accounts" for entry in logs)


def test_unbalanced_ledger_is_reported_not_raised(accounts):
    transactions = [make_txn(1, "2024-01-10", CASH, 100)]

    with capture_logs() as logs:
        statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    assert not statement.is_reconciled
    assert statement.reconciliation_difference == Decimal("-100")
    assert any("does not match" in warning for warning in statement.warnings)
    unreconciled = [entry for entry in logs if entry["event"] == "cash_flow_unreconciled"]
    assert unreconciled[0]["difference"] == "-100"
    assert unreconciled[0]["log_level"] == "warning"


def test_role_on_wrong_category_is_ignored(accounts, transactions):
    accounts = [
        make_account(SALES, "Sales", "Income", "4000", role=AccountRole.CASH)
        if account.id == SALES
        else account
        for account in accounts
    ]

    statement = cash_flow_statement(transactions, accounts, JAN_1, JAN_31)

    assert statement.end_cash == Decimal("9200")
    assert statement.is_reconciled
    assert len(statement.warnings) == 1
    assert "treated as Other" in statement.warnings[0]


def test_start_after_end_is_rejected(accounts, transactions):
    with pytest.raises(ValidationError):
        cash_flow_statement(transactions, accounts, JAN_31, JAN_1)


def test_unknown_account_aborts(accounts):
    with pytest.raises(UnknownAccountError):
        cash_flow_statement([make_txn(1, "2024-01-01", 404, 1)], accounts, JAN_1, JAN_31)
