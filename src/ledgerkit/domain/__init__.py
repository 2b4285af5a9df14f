"""Domain layer for ledgerkit application.

Services live in their own modules (ledgerkit.domain.account and so on)
since they depend on the database layer, which imports domain entities.
"""

from ledgerkit.domain.account_tree import build_account_tree
from ledgerkit.domain.ledger import Ledger, balance_as_of
from ledgerkit.domain.statements import (
    balance_sheet,
    cash_flow_statement,
    profit_and_loss,
    trial_balance,
    vat_return,
)

__all__ = [
    "Ledger",
    "balance_as_of",
    "build_account_tree",
    "trial_balance",
    "balance_sheet",
    "profit_and_loss",
    "cash_flow_statement",
    "vat_return",
]
