"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date
from decimal import Decimal

# Import entities directly; domain/__init__.py never imports the database layer.
from ledgerkit.domain.entities import (
    Account,
    AccountCategory,
    AccountRole,
    Bill,
    Invoice,
    LineItem,
    TaxCode,
    Transaction,
)


class Database(ABC):
    """Abstract database interface for ledgerkit.

    Implementations supply snapshots of the chart of accounts and postings
    to the report layer and persist validated writes from the services.
    Validation belongs to the services; implementations only store.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: str,
        category: AccountCategory,
        account_number: Optional[str] = None,
        parent_id: Optional[int] = None,
        role: AccountRole = AccountRole.OTHER,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_number(self, account_number: str) -> Optional[Account]:
        """Get account by account number."""
        pass

    @abstractmethod
    def list_accounts(self, include_archived: bool = True) -> list[Account]:
        """List accounts ordered by account number, then ID."""
        pass

    @abstractmethod
    def update_account_parent(self, account_id: int, parent_id: Optional[int]) -> None:
        """Move an account under a new parent (None makes it a root)."""
        pass

    @abstractmethod
    def set_account_archived(self, account_id: int, archived: bool) -> None:
        """Archive or unarchive an account."""
        pass

    @abstractmethod
    def set_account_role(self, account_id: int, role: AccountRole) -> None:
        """Change the statement role of an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Get count of postings against an account."""
        pass

    @abstractmethod
    def get_account_child_count(self, account_id: int) -> int:
        """Get count of accounts whose parent is this account."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: Decimal,
        description: Optional[str] = None,
        entry_id: Optional[str] = None,
    ) -> int:
        """Create a single posting. Returns transaction ID."""
        pass

    @abstractmethod
    def create_journal_entry(
        self,
        entry_id: str,
        date: date,
        legs: list[tuple[int, Decimal]],
        description: Optional[str] = None,
    ) -> list[int]:
        """Create all legs of a journal entry atomically. Returns posting IDs."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        entry_id: Optional[str] = None,
    ) -> list[Transaction]:
        """List postings with optional filters, ordered by date then ID."""
        pass

    # Tax code operations
    @abstractmethod
    def create_tax_code(
        self, name: str, rate: Decimal, jurisdiction: Optional[str] = None
    ) -> int:
        """Create a tax code. Returns tax code ID."""
        pass

    @abstractmethod
    def get_tax_code(self, tax_code_id: int) -> Optional[TaxCode]:
        """Get tax code by ID."""
        pass

    @abstractmethod
    def get_tax_code_by_name(self, name: str) -> Optional[TaxCode]:
        """Get tax code by name."""
        pass

    @abstractmethod
    def list_tax_codes(self) -> list[TaxCode]:
        """List all tax codes."""
        pass

    # Invoice and bill operations
    @abstractmethod
    def create_invoice(
        self, number: str, party_name: str, date: date, line_items: list[LineItem]
    ) -> int:
        """Create an invoice with its lines. Returns invoice ID."""
        pass

    @abstractmethod
    def create_bill(
        self, number: str, party_name: str, date: date, line_items: list[LineItem]
    ) -> int:
        """Create a bill with its lines. Returns bill ID."""
        pass

    @abstractmethod
    def get_invoice_by_number(self, number: str) -> Optional[Invoice]:
        """Get invoice by its document number."""
        pass

    @abstractmethod
    def get_bill_by_number(self, number: str) -> Optional[Bill]:
        """Get bill by its document number."""
        pass

    @abstractmethod
    def list_invoices(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Invoice]:
        """List invoices dated within an optional inclusive range."""
        pass

    @abstractmethod
    def list_bills(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Bill]:
        """List bills dated within an optional inclusive range."""
        pass
