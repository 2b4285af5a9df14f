"""Report domain service."""

from collections.abc import Iterable
from datetime import date
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.account_tree import tree_from_ledger
from ledgerkit.domain.entities import (
    AccountCategory,
    AccountReportNode,
    BalanceSheet,
    CashFlowStatement,
    ProfitAndLoss,
    TrialBalance,
    VatReturn,
)
from ledgerkit.domain.ledger import Ledger
from ledgerkit.domain.statements import (
    balance_sheet_from_ledger,
    cash_flow_from_ledger,
    profit_and_loss_from_ledger,
    trial_balance_from_ledger,
    vat_return,
)


class ReportService:
    """Derive financial statements from the stored ledger.

    Every call reads one fresh snapshot of accounts and postings; the
    derivation itself never touches the database.
    """

    def __init__(self, db: Database):
        """Initialize report service.

        Args:
            db: Database instance
        """
        self.db = db

    def load_ledger(self) -> Ledger:
        """Read the chart of accounts and every posting into a Ledger."""
        return Ledger(self.db.list_accounts(), self.db.list_transactions())

    def account_tree(
        self,
        categories: Iterable[AccountCategory],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[AccountReportNode]:
        return tree_from_ledger(self.load_ledger(), categories, start_date, end_date)

    def trial_balance(self, as_of_date: date) -> TrialBalance:
        return trial_balance_from_ledger(self.load_ledger(), as_of_date)

    def balance_sheet(self, as_of_date: date) -> BalanceSheet:
        return balance_sheet_from_ledger(self.load_ledger(), as_of_date)

    def profit_and_loss(
        self, start_date: Optional[date], end_date: Optional[date]
    ) -> ProfitAndLoss:
        return profit_and_loss_from_ledger(self.load_ledger(), start_date, end_date)

    def cash_flow(self, start_date: date, end_date: date) -> CashFlowStatement:
        return cash_flow_from_ledger(self.load_ledger(), start_date, end_date)

    def vat_return(self, start_date: date, end_date: date) -> VatReturn:
        """Summarize output and input tax for documents dated in the period."""
        return vat_return(
            self.db.list_invoices(start_date=start_date, end_date=end_date),
            self.db.list_bills(start_date=start_date, end_date=end_date),
            self.db.list_tax_codes(),
            start_date,
            end_date,
        )
