"""Account role resolution.

Derivers look accounts up by their explicit ``AccountRole``. The name
keyword rules below are only used to suggest a role when an account is
created without one; they never run during report derivation.
"""

from collections.abc import Iterable
from typing import Optional

from ledgerkit.domain.entities import Account, AccountCategory, AccountRole
from ledgerkit.logging_config import get_logger

log = get_logger(__name__)

ROLE_CATEGORIES: dict[AccountRole, Optional[AccountCategory]] = {
    AccountRole.CASH: AccountCategory.ASSET,
    AccountRole.RECEIVABLE: AccountCategory.ASSET,
    AccountRole.INVENTORY: AccountCategory.ASSET,
    AccountRole.PREPAYMENT: AccountCategory.ASSET,
    AccountRole.PAYABLE: AccountCategory.LIABILITY,
    AccountRole.DEPRECIATION: AccountCategory.EXPENSE,
    AccountRole.COGS: AccountCategory.EXPENSE,
    AccountRole.OTHER: None,
}

# (category, role, keywords) for suggesting a role from an account name
NAME_RULES: tuple[tuple[AccountCategory, AccountRole, tuple[str, ...]], ...] = (
    (AccountCategory.ASSET, AccountRole.CASH, ("bank", "cash")),
    (AccountCategory.ASSET, AccountRole.RECEIVABLE, ("receivable",)),
    (AccountCategory.ASSET, AccountRole.INVENTORY, ("inventory",)),
    (AccountCategory.ASSET, AccountRole.PREPAYMENT, ("prepayment", "prepaid")),
    (AccountCategory.LIABILITY, AccountRole.PAYABLE, ("payable",)),
    (AccountCategory.EXPENSE, AccountRole.DEPRECIATION, ("depreciation", "amortization")),
    (AccountCategory.EXPENSE, AccountRole.COGS, ("cost of goods sold",)),
)


def role_allowed(role: AccountRole, category: AccountCategory) -> bool:
    """Return True if the role may be carried by an account of the category."""
    required = ROLE_CATEGORIES[role]
    return required is None or required == category


def matching_roles(name: str, category: AccountCategory) -> list[AccountRole]:
    """Return every role whose keywords appear in the account name."""
    lowered = name.lower()
    return [
        role
        for rule_category, role, keywords in NAME_RULES
        if rule_category == category and any(keyword in lowered for keyword in keywords)
    ]


def suggest_role(name: str, category: AccountCategory) -> AccountRole:
    """Suggest a role for a new account from its name.

    An ambiguous name (one matching several rules, such as
    "Inventory Receivable") is logged and falls back to OTHER so a person
    can set the role explicitly.
    """
    matches = matching_roles(name, category)
    if len(matches) == 1:
        return matches[0]
    if len(matches) > 1:
        log.warning(
            "account_role_ambiguous",
            account_name=name,
            category=category.value,
            matches=[role.value for role in matches],
        )
    return AccountRole.OTHER


def effective_role(account: Account, warnings: Optional[list[str]] = None) -> AccountRole:
    """Return the role used for derivation.

    A role carried by an account of the wrong category is reported and
    treated as OTHER.
    """
    if role_allowed(account.role, account.category):
        return account.role
    message = (
        f"Account {account.id} '{account.name}' is a {account.category.value} account "
        f"but has role {account.role.value}; treated as {AccountRole.OTHER.value}"
    )
    log.warning(
        "account_role_mismatch",
        account_id=account.id,
        category=account.category.value,
        role=account.role.value,
    )
    if warnings is not None:
        warnings.append(message)
    return AccountRole.OTHER


def group_by_role(
    accounts: Iterable[Account],
    warnings: Optional[list[str]] = None,
) -> dict[AccountRole, list[int]]:
    """Map every role to the IDs of the accounts that effectively carry it."""
    groups: dict[AccountRole, list[int]] = {role: [] for role in AccountRole}
    for account in accounts:
        groups[effective_role(account, warnings)].append(account.id)
    return groups
