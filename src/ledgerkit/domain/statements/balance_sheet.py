"""Balance sheet derivation."""

from collections.abc import Iterable
from datetime import date

from ledgerkit.domain import conventions
from ledgerkit.domain.account_tree import sum_root_totals, tree_from_ledger
from ledgerkit.domain.entities import Account, AccountCategory, BalanceSheet, Transaction
from ledgerkit.domain.ledger import Ledger
from ledgerkit.logging_config import get_logger

log = get_logger(__name__)

BALANCE_SHEET_CATEGORIES = (
    AccountCategory.ASSET,
    AccountCategory.LIABILITY,
    AccountCategory.EQUITY,
)


def balance_sheet(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    as_of_date: date,
) -> BalanceSheet:
    """Derive the statement of financial position as of a date.

    Balances are cumulative since inception. Income and expenses not yet
    closed to an equity account are shown as retained earnings.
    """
    return balance_sheet_from_ledger(Ledger(accounts, transactions), as_of_date)


def balance_sheet_from_ledger(ledger: Ledger, as_of_date: date) -> BalanceSheet:
    """Derive the balance sheet from an already validated snapshot."""
    assets = tree_from_ledger(ledger, [AccountCategory.ASSET], end_date=as_of_date)
    liabilities = tree_from_ledger(ledger, [AccountCategory.LIABILITY], end_date=as_of_date)
    equity = tree_from_ledger(ledger, [AccountCategory.EQUITY], end_date=as_of_date)

    # Archived income and expense accounts still hold past profit.
    retained_earnings = conventions.net_income(
        ledger.balance_as_of(ledger.account_ids([AccountCategory.INCOME]), as_of_date),
        ledger.balance_as_of(ledger.account_ids([AccountCategory.EXPENSE]), as_of_date),
    )

    for account in ledger.accounts:
        if account.archived and account.category in BALANCE_SHEET_CATEGORIES:
            balance = ledger.account_balance_as_of(account.id, as_of_date)
            if balance != 0:
                log.warning(
                    "archived_account_has_balance",
                    account_id=account.id,
                    balance=str(balance),
                    as_of_date=as_of_date.isoformat(),
                )

    result = BalanceSheet(
        as_of_date=as_of_date,
        assets=tuple(assets),
        liabilities=tuple(liabilities),
        equity=tuple(equity),
        total_assets=sum_root_totals(assets),
        total_liabilities=sum_root_totals(liabilities),
        retained_earnings=retained_earnings,
        total_equity=sum_root_totals(equity) + retained_earnings,
    )
    if not result.is_balanced:
        log.warning(
            "balance_sheet_unbalanced",
            as_of_date=as_of_date.isoformat(),
            difference=str(result.difference),
        )
    return result
