"""Profit and loss derivation."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ledgerkit.domain.account_tree import flatten_tree, sum_root_totals, tree_from_ledger
from ledgerkit.domain.entities import (
    Account,
    AccountCategory,
    AccountReportNode,
    AccountRole,
    ProfitAndLoss,
    ProfitAndLossLine,
    Transaction,
)
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.ledger import Ledger

ZERO = Decimal("0")
HUNDRED = Decimal("100")
PERCENT_PLACES = Decimal("0.01")


def profit_and_loss(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    start_date: Optional[date],
    end_date: Optional[date],
) -> ProfitAndLoss:
    """Derive the income statement for an inclusive period."""
    return profit_and_loss_from_ledger(Ledger(accounts, transactions), start_date, end_date)


def profit_and_loss_from_ledger(
    ledger: Ledger,
    start_date: Optional[date],
    end_date: Optional[date],
) -> ProfitAndLoss:
    """Derive the income statement from an already validated snapshot."""
    if start_date is not None and end_date is not None and start_date > end_date:
        raise ValidationError(f"Start date {start_date} is after end date {end_date}")

    income = tree_from_ledger(ledger, [AccountCategory.INCOME], start_date, end_date)
    expenses = tree_from_ledger(ledger, [AccountCategory.EXPENSE], start_date, end_date)

    total_income = sum_root_totals(income)
    cogs_nodes = topmost_with_role(expenses, AccountRole.COGS)

    lines = tuple(
        ProfitAndLossLine(
            account_id=node.id,
            name=node.name,
            category=node.category,
            depth=node.depth,
            total=node.total,
            percent_of_income=percent_of(node.total, total_income),
        )
        for node in flatten_tree(income) + flatten_tree(expenses)
    )

    return ProfitAndLoss(
        start_date=start_date,
        end_date=end_date,
        income=tuple(income),
        expenses=tuple(expenses),
        total_income=total_income,
        total_cogs=sum_root_totals(cogs_nodes),
        total_expenses=sum_root_totals(expenses),
        lines=lines,
    )


def topmost_with_role(
    nodes: Sequence[AccountReportNode], role: AccountRole
) -> list[AccountReportNode]:
    """Nodes carrying a role whose ancestors do not carry it."""
    found: list[AccountReportNode] = []
    for node in nodes:
        if node.role == role:
            found.append(node)
        else:
            found.extend(topmost_with_role(node.children, role))
    return found


def percent_of(amount: Decimal, base: Decimal) -> Decimal:
    """Percentage of base rounded to two places; zero when base is zero."""
    if base == 0:
        return ZERO.quantize(PERCENT_PLACES)
    return (amount / base * HUNDRED).quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)
