"""Shared domain error messages and error types."""

from datetime import date
from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


class StructuralError(DomainError):
    """Snapshot violates referential integrity; derivation must abort."""


class UnknownAccountError(StructuralError):
    """A posting references an account that is not in the chart of accounts."""


class CyclicHierarchyError(StructuralError):
    """The account parent graph contains a cycle."""


class UnknownTaxCodeError(StructuralError):
    """An invoice or bill line references a tax code that does not exist."""


class UnbalancedEntryError(ValidationError):
    """Journal entry legs do not sum to zero."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def parent_account_not_found(parent_id: int) -> str:
    """Return message for missing parent account."""
    return f"Parent account {parent_id} not found"


def tax_code_not_found(tax_code_id: int) -> str:
    """Return message for missing tax code."""
    return f"Tax code {tax_code_id} not found"


def unknown_account_in_posting(transaction_id: int, account_id: int) -> str:
    """Return message for a posting against an account missing from the snapshot."""
    return f"Transaction {transaction_id} references unknown account {account_id}"


def unknown_tax_code_on_line(document_number: str, tax_code_id: int) -> str:
    """Return message for a document line with an unknown tax code."""
    return f"Document '{document_number}' references unknown tax code {tax_code_id}"


def account_hierarchy_cycle(account_ids: list[int]) -> str:
    """Return message for a cycle in the parent graph."""
    path = " -> ".join(str(account_id) for account_id in account_ids)
    return f"Account hierarchy contains a cycle: {path}"


def duplicate_account_number(account_number: str) -> str:
    """Return message for a duplicate account number."""
    return f"Account number '{account_number}' already exists"


def unbalanced_entry(entry_date: date, difference: Decimal) -> str:
    """Return message when journal entry legs do not net to zero."""
    return f"Journal entry on {entry_date} is unbalanced by {difference}"


def account_delete_blocked(account_id: int, transaction_count: int) -> str:
    """Return message when account has dependent postings."""
    return (
        f"Cannot delete account {account_id}: it has {transaction_count} "
        f"posting{'s' if transaction_count != 1 else ''}. Archive it instead."
    )


def account_has_children(account_id: int, child_count: int) -> str:
    """Return message when account still has sub-accounts."""
    return (
        f"Cannot delete account {account_id}: it has {child_count} "
        f"sub-account{'s' if child_count != 1 else ''}. Move them first."
    )


def account_move_creates_cycle(account_id: int, parent_id: int) -> str:
    """Return message when a move would make an account its own ancestor."""
    return f"Cannot move account {account_id} under {parent_id}: {parent_id} is itself below {account_id}"


def duplicate_document_number(kind: str, number: str) -> str:
    """Return message for a duplicate invoice or bill number."""
    return f"{kind.capitalize()} '{number}' already exists"


def too_many_decimal_places(label: str, value: Decimal, places: int) -> str:
    """Return message for a value more precise than its column stores."""
    return f"{label} {value} has more than {places} decimal places"
