"""Account domain service."""

from typing import Optional
from ledgerkit.database.base import Database
from ledgerkit.domain.classification import role_allowed, suggest_role
from ledgerkit.domain.entities import Account as AccountEntity, AccountCategory, AccountRole
from ledgerkit.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_has_children,
    account_move_creates_cycle,
    account_not_found,
    duplicate_account_number,
    parent_account_not_found,
)
from ledgerkit.logging_config import get_logger

log = get_logger(__name__)


def _parse_category(category: str | AccountCategory) -> AccountCategory:
    try:
        return AccountCategory.parse(category)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def _parse_role(role: str | AccountRole) -> AccountRole:
    try:
        return AccountRole.parse(role)
    except ValueError as e:
        raise ValidationError(str(e)) from e


def _check_role(role: AccountRole, category: AccountCategory) -> None:
    if not role_allowed(role, category):
        raise ValidationError(
            f"Role {role.value} cannot be used on a {category.value} account"
        )


class AccountService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        category: str | AccountCategory,
        account_number: Optional[str] = None,
        parent_id: Optional[int] = None,
        role: Optional[str | AccountRole] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account.

        When no role is given one is suggested from the account name
        ("Business Checking Bank" becomes Cash, "Accounts Payable" Payable).

        Args:
            name: Account name
            category: Asset, Liability, Equity, Income or Expense
            account_number: Optional unique account number used for ordering
            parent_id: Optional parent account ID
            role: Optional statement role
            description: Optional description

        Returns:
            Account ID

        Raises:
            ValidationError: If name, category or role is invalid
            ConflictError: If the account number is already used
            NotFoundError: If the parent account does not exist
        """
        name = name.strip()
        if not name:
            raise ValidationError("Account name cannot be empty")

        parsed_category = _parse_category(category)

        number = account_number.strip() if account_number else None
        if number:
            if self.db.get_account_by_number(number) is not None:
                raise ConflictError(duplicate_account_number(number))
        else:
            number = None

        if parent_id is not None and self.db.get_account(parent_id) is None:
            raise NotFoundError(parent_account_not_found(parent_id))

        if role is None:
            parsed_role = suggest_role(name, parsed_category)
        else:
            parsed_role = _parse_role(role)
            _check_role(parsed_role, parsed_category)

        account_id = self.db.create_account(
            name=name,
            category=parsed_category,
            account_number=number,
            parent_id=parent_id,
            role=parsed_role,
            description=description,
        )
        log.info(
            "account_created",
            account_id=account_id,
            category=parsed_category.value,
            role=parsed_role.value,
        )
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def get_account_by_number(self, account_number: str) -> Optional[AccountEntity]:
        return self.db.get_account_by_number(account_number)

    def list_accounts(self, include_archived: bool = True) -> list[AccountEntity]:
        """List accounts ordered by account number.

        Args:
            include_archived: Whether to include archived accounts

        Returns:
            List of account entities
        """
        return self.db.list_accounts(include_archived=include_archived)

    def _require(self, account_id: int) -> AccountEntity:
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def archive_account(self, account_id: int) -> None:
        """Archive an account.

        Archived accounts are hidden from report trees but their postings
        still count towards retained earnings and cash flow.

        Raises:
            NotFoundError: If the account does not exist
        """
        self._require(account_id)
        self.db.set_account_archived(account_id, True)

    def unarchive_account(self, account_id: int) -> None:
        """Restore an archived account.

        Raises:
            NotFoundError: If the account does not exist
        """
        self._require(account_id)
        self.db.set_account_archived(account_id, False)

    def move_account(self, account_id: int, parent_id: Optional[int]) -> None:
        """Move an account under a new parent, or to the top level.

        Raises:
            NotFoundError: If either account does not exist
            ValidationError: If the move would create a cycle
        """
        self._require(account_id)
        if parent_id is None:
            self.db.update_account_parent(account_id, None)
            return

        if self.db.get_account(parent_id) is None:
            raise NotFoundError(parent_account_not_found(parent_id))

        # Walk up from the new parent; reaching the account itself means a cycle.
        current: Optional[int] = parent_id
        seen: set[int] = set()
        while current is not None and current not in seen:
            if current == account_id:
                raise ValidationError(account_move_creates_cycle(account_id, parent_id))
            seen.add(current)
            ancestor = self.db.get_account(current)
            current = ancestor.parent_id if ancestor is not None else None

        self.db.update_account_parent(account_id, parent_id)

    def set_role(self, account_id: int, role: str | AccountRole) -> None:
        """Change an account's statement role.

        Raises:
            NotFoundError: If the account does not exist
            ValidationError: If the role does not fit the account's category
        """
        account = self._require(account_id)
        parsed_role = _parse_role(role)
        _check_role(parsed_role, account.category)
        self.db.set_account_role(account_id, parsed_role)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            NotFoundError: If the account does not exist
            DependencyError: If the account has postings or sub-accounts
        """
        self._require(account_id)

        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        child_count = self.db.get_account_child_count(account_id)
        if child_count > 0:
            raise DependencyError(account_has_children(account_id, child_count))

        self.db.delete_account(account_id)
