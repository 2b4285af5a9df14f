"""Domain model entities for ledgerkit.

These are pure data classes representing business concepts, independent of
database schema. The derivation engine only ever sees these frozen entities,
so a report can never mutate the snapshot it was computed from.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountCategory(str, Enum):
    """Top-level classification of an account in the chart of accounts."""

    ASSET = "Asset"
    LIABILITY = "Liability"
    EQUITY = "Equity"
    INCOME = "Income"
    EXPENSE = "Expense"

    @classmethod
    def parse(cls, value: "str | AccountCategory") -> "AccountCategory":
        """Parse a category from its value or name, case-insensitively.

        Raises:
            ValueError: If the value names no category
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown account category '{value}'. Valid categories: {valid}")


class NormalSide(str, Enum):
    """Side on which an account category naturally carries its balance."""

    DEBIT = "Debit"
    CREDIT = "Credit"


class AccountRole(str, Enum):
    """Role an account plays in statement derivation.

    Set when the account is created and consulted by the cash flow and
    profit & loss derivers instead of matching on account names.
    """

    CASH = "Cash"
    RECEIVABLE = "Receivable"
    INVENTORY = "Inventory"
    PREPAYMENT = "Prepayment"
    PAYABLE = "Payable"
    DEPRECIATION = "Depreciation"
    COGS = "COGS"
    OTHER = "Other"

    @classmethod
    def parse(cls, value: "str | AccountRole") -> "AccountRole":
        """Parse a role from its value or name, case-insensitively.

        Raises:
            ValueError: If the value names no role
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value.lower(), member.name.lower()):
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Unknown account role '{value}'. Valid roles: {valid}")


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: int
    name: str
    category: AccountCategory
    account_number: Optional[str] = None
    parent_id: Optional[int] = None
    archived: bool = False
    role: AccountRole = AccountRole.OTHER
    description: Optional[str] = None

    @property
    def sort_key(self) -> tuple[str, int]:
        """Ordering used by every report: account number, then ID."""
        return (self.account_number or "", self.id)


@dataclass(frozen=True)
class Transaction:
    """A single signed posting against one account.

    Amounts are debit-positive: a debit is positive, a credit negative.
    """

    id: int
    date: date
    account_id: int
    amount: Decimal
    description: Optional[str] = None
    entry_id: Optional[str] = None


@dataclass(frozen=True)
class AccountReportNode:
    """One account in a derived report tree.

    ``total`` includes all descendants; ``own_total`` only the account's own
    postings. Both carry the report sign of the account's category.
    """

    id: int
    name: str
    account_number: Optional[str]
    category: AccountCategory
    role: AccountRole
    parent_id: Optional[int]
    total: Decimal
    own_total: Decimal
    depth: int
    children: tuple["AccountReportNode", ...] = ()

    def walk(self):
        """Yield this node and all descendants in display order."""
        yield self
        for child in self.children:
            yield from child.walk()


@dataclass(frozen=True)
class TrialBalanceRow:
    """Debit or credit balance for a single account."""

    account: Account
    debit: Decimal
    credit: Decimal
    is_contra: bool = False

    @property
    def balance(self) -> Decimal:
        """Raw (debit-positive) balance of the row."""
        return self.debit - self.credit


@dataclass(frozen=True)
class TrialBalance:
    """Trial balance as of a date."""

    as_of_date: date
    rows: tuple[TrialBalanceRow, ...]
    total_debits: Decimal
    total_credits: Decimal

    @property
    def difference(self) -> Decimal:
        """Return total_debits minus total_credits."""
        return self.total_debits - self.total_credits

    @property
    def is_balanced(self) -> bool:
        return self.difference == 0


@dataclass(frozen=True)
class BalanceSheet:
    """Statement of financial position as of a date.

    ``total_equity`` includes ``retained_earnings``, the income less
    expenses accumulated since inception that has not been closed to an
    equity account.
    """

    as_of_date: date
    assets: tuple[AccountReportNode, ...]
    liabilities: tuple[AccountReportNode, ...]
    equity: tuple[AccountReportNode, ...]
    total_assets: Decimal
    total_liabilities: Decimal
    retained_earnings: Decimal
    total_equity: Decimal

    @property
    def total_liabilities_and_equity(self) -> Decimal:
        return self.total_liabilities + self.total_equity

    @property
    def difference(self) -> Decimal:
        """Return total assets minus liabilities and equity."""
        return self.total_assets - self.total_liabilities_and_equity

    @property
    def is_balanced(self) -> bool:
        return self.difference == 0


@dataclass(frozen=True)
class ProfitAndLossLine:
    """Common-size line of the profit & loss statement."""

    account_id: int
    name: str
    category: AccountCategory
    depth: int
    total: Decimal
    percent_of_income: Decimal


@dataclass(frozen=True)
class ProfitAndLoss:
    """Income statement for a period."""

    start_date: Optional[date]
    end_date: Optional[date]
    income: tuple[AccountReportNode, ...]
    expenses: tuple[AccountReportNode, ...]
    total_income: Decimal
    total_cogs: Decimal
    total_expenses: Decimal
    lines: tuple[ProfitAndLossLine, ...] = ()

    @property
    def gross_profit(self) -> Decimal:
        return self.total_income - self.total_cogs

    @property
    def net_profit(self) -> Decimal:
        return self.total_income - self.total_expenses


@dataclass(frozen=True)
class CashFlowStatement:
    """Statement of cash flows derived with the indirect method."""

    start_date: date
    end_date: date
    net_income: Decimal
    depreciation_and_amortization: Decimal
    change_in_accounts_receivable: Decimal
    change_in_inventory: Decimal
    change_in_prepayments: Decimal
    change_in_accounts_payable: Decimal
    cash_from_operations: Decimal
    cash_from_investing: Decimal
    cash_from_financing: Decimal
    start_cash: Decimal
    end_cash: Decimal
    warnings: tuple[str, ...] = ()

    @property
    def net_change_in_cash(self) -> Decimal:
        return self.cash_from_operations + self.cash_from_investing + self.cash_from_financing

    @property
    def reconciliation_difference(self) -> Decimal:
        """Return derived net change minus the observed change in cash."""
        return self.net_change_in_cash - (self.end_cash - self.start_cash)

    @property
    def is_reconciled(self) -> bool:
        return self.reconciliation_difference == 0


@dataclass(frozen=True)
class TaxCode:
    """Sales tax / VAT code with a decimal rate (0.05 for 5%)."""

    id: int
    name: str
    rate: Decimal
    jurisdiction: Optional[str] = None


@dataclass(frozen=True)
class LineItem:
    """Invoice or bill line."""

    quantity: Decimal
    unit_price: Decimal
    tax_code_id: Optional[int] = None
    description: Optional[str] = None

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass(frozen=True)
class Invoice:
    """Sales document issued to a customer."""

    id: int
    number: str
    party_name: str
    date: date
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Bill:
    """Purchase document received from a vendor."""

    id: int
    number: str
    party_name: str
    date: date
    line_items: tuple[LineItem, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class VatCodeSummary:
    """Taxable amounts and tax per tax code."""

    tax_code: TaxCode
    sales_total: Decimal
    output_tax: Decimal
    purchases_total: Decimal
    input_tax: Decimal


@dataclass(frozen=True)
class VatReturn:
    """VAT / sales tax return for a period."""

    start_date: date
    end_date: date
    sales_total: Decimal
    output_tax: Decimal
    purchases_total: Decimal
    input_tax: Decimal
    by_tax_code: tuple[VatCodeSummary, ...] = ()

    @property
    def net_vat_payable(self) -> Decimal:
        return self.output_tax - self.input_tax
