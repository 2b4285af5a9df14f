"""Statement of cash flows using the indirect method.

Operating cash flow starts from net income, adds back depreciation and
amortization and adjusts for movements in working capital. Investing and
financing flows are the movements of the remaining balance sheet accounts.
Because every non-cash account is counted exactly once, the derived net
change in cash equals the observed change in cash for any balanced ledger;
a mismatch is reported on the result, not raised.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ledgerkit.domain import conventions
from ledgerkit.domain.classification import group_by_role
from ledgerkit.domain.entities import (
    Account,
    AccountCategory,
    AccountRole,
    CashFlowStatement,
    Transaction,
)
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.ledger import Ledger
from ledgerkit.logging_config import get_logger

log = get_logger(__name__)

WORKING_CAPITAL_ASSET_ROLES = (
    AccountRole.RECEIVABLE,
    AccountRole.INVENTORY,
    AccountRole.PREPAYMENT,
)


def cash_flow_statement(
    transactions: Iterable[Transaction],
    accounts: Iterable[Account],
    start_date: date,
    end_date: date,
) -> CashFlowStatement:
    """Derive the statement of cash flows for an inclusive period."""
    return cash_flow_from_ledger(Ledger(accounts, transactions), start_date, end_date)


def cash_flow_from_ledger(ledger: Ledger, start_date: date, end_date: date) -> CashFlowStatement:
    """Derive the statement of cash flows from an already validated snapshot."""
    if start_date > end_date:
        raise ValidationError(f"Start date {start_date} is after end date {end_date}")

    warnings: list[str] = []
    roles = group_by_role(ledger.accounts, warnings)

    def movement(account_ids: Iterable[int]) -> Decimal:
        return ledger.movement(account_ids, start_date, end_date)

    net_income = conventions.net_income(
        movement(ledger.account_ids([AccountCategory.INCOME])),
        movement(ledger.account_ids([AccountCategory.EXPENSE])),
    )
    depreciation = conventions.normalize(
        AccountCategory.EXPENSE, movement(roles[AccountRole.DEPRECIATION])
    )

    # An increase in a working capital asset consumes cash.
    change_in_receivables = -movement(roles[AccountRole.RECEIVABLE])
    change_in_inventory = -movement(roles[AccountRole.INVENTORY])
    change_in_prepayments = -movement(roles[AccountRole.PREPAYMENT])
    # An increase in a payable provides cash.
    change_in_payables = conventions.normalize(
        AccountCategory.LIABILITY, movement(roles[AccountRole.PAYABLE])
    )

    cash_from_operations = (
        net_income
        + depreciation
        + change_in_receivables
        + change_in_inventory
        + change_in_prepayments
        + change_in_payables
    )

    cash_ids = set(roles[AccountRole.CASH])
    working_capital_ids = {
        account_id for role in WORKING_CAPITAL_ASSET_ROLES for account_id in roles[role]
    }
    investing_ids = [
        account_id
        for account_id in ledger.account_ids([AccountCategory.ASSET])
        if account_id not in cash_ids and account_id not in working_capital_ids
    ]
    # Asset movements are net of depreciation; the add-back above already covers it.
    cash_from_investing = -movement(investing_ids) - depreciation

    payable_ids = set(roles[AccountRole.PAYABLE])
    financing_ids = ledger.account_ids([AccountCategory.EQUITY]) + [
        account_id
        for account_id in ledger.account_ids([AccountCategory.LIABILITY])
        if account_id not in payable_ids
    ]
    cash_from_financing = -movement(financing_ids)

    if not cash_ids:
        warnings.append("No accounts have the Cash role; opening and closing cash are zero")
        log.warning("cash_flow_no_cash_accounts")

    start_cash = ledger.opening_balance(cash_ids, start_date)
    end_cash = ledger.balance_as_of(cash_ids, end_date)

    net_change = cash_from_operations + cash_from_investing + cash_from_financing
    difference = net_change - (end_cash - start_cash)
    if difference != 0:
        warnings.append(
            f"Net change in cash {net_change} does not match the change in cash "
            f"balances {end_cash - start_cash} (difference {difference})"
        )
        log.warning(
            "cash_flow_unreconciled",
            start_date=start_date.isoformat(),
            end_date=end_date.isoformat(),
            difference=str(difference),
        )

    return CashFlowStatement(
        start_date=start_date,
        end_date=end_date,
        net_income=net_income,
        depreciation_and_amortization=depreciation,
        change_in_accounts_receivable=change_in_receivables,
        change_in_inventory=change_in_inventory,
        change_in_prepayments=change_in_prepayments,
        change_in_accounts_payable=change_in_payables,
        cash_from_operations=cash_from_operations,
        cash_from_investing=cash_from_investing,
        cash_from_financing=cash_from_financing,
        start_cash=start_cash,
        end_cash=end_cash,
        warnings=tuple(warnings),
    )
