"""Mapper functions to convert SQLAlchemy models to domain entities.

The derivation engine only sees frozen domain entities; this layer is the
one place that knows both shapes.
"""

from ledgerkit.domain import entities as domain
from ledgerkit.utils.amount_parser import coerce_decimal
from ledgerkit.database.models import (
    BILL,
    Account as ORMAccount,
    Document as ORMDocument,
    DocumentLine as ORMDocumentLine,
    TaxCode as ORMTaxCode,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        category=domain.AccountCategory.parse(orm_account.category),
        account_number=orm_account.account_number,
        parent_id=orm_account.parent_id,
        archived=bool(orm_account.archived),
        role=domain.AccountRole.parse(orm_account.role or domain.AccountRole.OTHER.value),
        description=orm_account.description,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        date=orm_transaction.date,
        account_id=orm_transaction.account_id,
        amount=coerce_decimal(orm_transaction.amount),
        description=orm_transaction.description,
        entry_id=orm_transaction.entry_id,
    )


def tax_code_to_domain(orm_tax_code: ORMTaxCode) -> domain.TaxCode:
    """Convert SQLAlchemy TaxCode model to domain TaxCode entity."""
    return domain.TaxCode(
        id=orm_tax_code.id,
        name=orm_tax_code.name,
        rate=coerce_decimal(orm_tax_code.rate),
        jurisdiction=orm_tax_code.jurisdiction,
    )


def line_item_to_domain(orm_line: ORMDocumentLine) -> domain.LineItem:
    return domain.LineItem(
        quantity=coerce_decimal(orm_line.quantity),
        unit_price=coerce_decimal(orm_line.unit_price),
        tax_code_id=orm_line.tax_code_id,
        description=orm_line.description,
    )


def document_to_domain(orm_document: ORMDocument) -> domain.Invoice | domain.Bill:
    """Convert a Document row to an Invoice or Bill depending on its kind."""
    entity = domain.Bill if orm_document.kind == BILL else domain.Invoice
    return entity(
        id=orm_document.id,
        number=orm_document.number,
        party_name=orm_document.party_name,
        date=orm_document.date,
        line_items=tuple(line_item_to_domain(line) for line in orm_document.lines),
    )
