"""Entity builders for pure engine tests."""

from datetime import date
from decimal import Decimal

from ledgerkit.domain.entities import Account, AccountCategory, AccountRole, Transaction


def make_account(
    account_id,
    name,
    category,
    number=None,
    parent_id=None,
    archived=False,
    role=AccountRole.OTHER,
):
    """Build an Account entity for pure engine tests."""
    return Account(
        id=account_id,
        name=name,
        category=AccountCategory.parse(category),
        account_number=number,
        parent_id=parent_id,
        archived=archived,
        role=role,
    )


def make_txn(txn_id, on, account_id, amount):
    """Build a Transaction entity for pure engine tests."""
    return Transaction(
        id=txn_id,
        date=on if isinstance(on, date) else date.fromisoformat(on),
        account_id=account_id,
        amount=Decimal(str(amount)),
    )
