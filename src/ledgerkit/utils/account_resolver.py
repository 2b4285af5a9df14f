"""Utility for resolving account references to IDs."""

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import NotFoundError, ValidationError


def resolve_account(account_service: AccountService, account: str | int) -> int:
    """Resolve an account ID, account number or name to an account ID.

    Lookup order for strings: account number, then exact name, then a
    numeric string as an ID. Account numbers win over IDs because users
    see numbers in every report.

    Args:
        account_service: AccountService instance
        account: Account ID, account number or name

    Returns:
        Account ID

    Raises:
        NotFoundError: If no account matches
        ValidationError: If a name matches more than one account
    """
    if isinstance(account, int):
        if account_service.get_account(account) is None:
            raise NotFoundError(f"Account ID {account} not found")
        return account

    reference = account.strip()
    accounts = account_service.list_accounts()

    for acc in accounts:
        if acc.account_number and acc.account_number == reference:
            return acc.id

    named = [acc for acc in accounts if acc.name == reference]
    if len(named) == 1:
        return named[0].id
    if len(named) > 1:
        numbers = ", ".join(acc.account_number or str(acc.id) for acc in named)
        raise ValidationError(
            f"Account name '{reference}' is ambiguous ({numbers}); use the account number"
        )

    try:
        account_id = int(reference)
    except ValueError:
        raise NotFoundError(f"Account '{reference}' not found")

    if account_service.get_account(account_id) is None:
        raise NotFoundError(f"Account ID {account_id} not found")
    return account_id
