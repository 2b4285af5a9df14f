"""Shared pytest fixtures for ledgerkit tests."""

import logging
import os
import tempfile

import pytest
import structlog

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.reports import ReportService
from ledgerkit.domain.tax import TaxService
from ledgerkit.domain.transaction import TransactionService


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if type(handler) is logging.StreamHandler:
            root.removeHandler(handler)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def tax_service(temp_db):
    """Create a TaxService with a temporary database."""
    return TaxService(temp_db)


@pytest.fixture
def report_service(temp_db):
    """Create a ReportService with a temporary database."""
    return ReportService(temp_db)


@pytest.fixture
def sample_chart(account_service):
    """Create a small chart of accounts and return IDs by account number."""
    specs = [
        ("1000", "Bank Accounts", "Asset", None, "Cash"),
        ("1010", "Business Checking", "Asset", "1000", "Cash"),
        ("1200", "Accounts Receivable", "Asset", None, "Receivable"),
        ("1500", "Equipment", "Asset", None, "Other"),
        ("2000", "Accounts Payable", "Liability", None, "Payable"),
        ("2500", "Loans", "Liability", None, "Other"),
        ("3000", "Owner's Equity", "Equity", None, "Other"),
        ("4000", "Sales Revenue", "Income", None, "Other"),
        ("5000", "Cost of Goods Sold", "Expense", None, "COGS"),
        ("7060", "Rent & Lease", "Expense", None, "Other"),
        ("7300", "Depreciation", "Expense", None, "Depreciation"),
    ]
    ids = {}
    for number, name, category, parent, role in specs:
        ids[number] = account_service.create_account(
            name=name,
            category=category,
            account_number=number,
            parent_id=ids[parent] if parent else None,
            role=role,
        )
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
