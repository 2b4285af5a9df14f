"""Trial balance derivation."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ledgerkit.domain import conventions
from ledgerkit.domain.entities import Account, Transaction, TrialBalance, TrialBalanceRow
from ledgerkit.domain.ledger import Ledger
from ledgerkit.logging_config import get_logger

log = get_logger(__name__)

ZERO = Decimal("0")


def trial_balance(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    as_of_date: date,
) -> TrialBalance:
    """List every non-archived account's debit or credit balance as of a date.

    Debits and credits must agree for any ledger whose entries balance; a
    mismatch is returned on the result (``is_balanced``/``difference``)
    rather than raised.
    """
    return trial_balance_from_ledger(Ledger(accounts, transactions), as_of_date)


def trial_balance_from_ledger(ledger: Ledger, as_of_date: date) -> TrialBalance:
    """Derive the trial balance from an already validated snapshot."""
    rows: list[TrialBalanceRow] = []
    total_debits = ZERO
    total_credits = ZERO

    for account in sorted(ledger.accounts, key=lambda acc: acc.sort_key):
        if account.archived:
            continue
        balance = ledger.account_balance_as_of(account.id, as_of_date)
        if balance == 0:
            continue
        debit, credit = conventions.debit_credit(balance)
        rows.append(
            TrialBalanceRow(
                account=account,
                debit=debit,
                credit=credit,
                is_contra=conventions.is_contra_balance(account.category, balance),
            )
        )
        total_debits += debit
        total_credits += credit

    result = TrialBalance(
        as_of_date=as_of_date,
        rows=tuple(rows),
        total_debits=total_debits,
        total_credits=total_credits,
    )
    if not result.is_balanced:
        log.warning(
            "trial_balance_unbalanced",
            as_of_date=as_of_date.isoformat(),
            total_debits=str(total_debits),
            total_credits=str(total_credits),
        )
    return result
