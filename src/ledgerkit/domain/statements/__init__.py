"""Financial statement derivers."""

from ledgerkit.domain.statements.balance_sheet import balance_sheet, balance_sheet_from_ledger
from ledgerkit.domain.statements.cash_flow import cash_flow_from_ledger, cash_flow_statement
from ledgerkit.domain.statements.profit_and_loss import (
    profit_and_loss,
    profit_and_loss_from_ledger,
)
from ledgerkit.domain.statements.trial_balance import trial_balance, trial_balance_from_ledger
from ledgerkit.domain.statements.vat_return import vat_return

__all__ = [
    "balance_sheet",
    "balance_sheet_from_ledger",
    "cash_flow_statement",
    "cash_flow_from_ledger",
    "profit_and_loss",
    "profit_and_loss_from_ledger",
    "trial_balance",
    "trial_balance_from_ledger",
    "vat_return",
]
