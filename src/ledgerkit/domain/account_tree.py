"""Hierarchical account totals for report rendering."""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerkit.domain import conventions
from ledgerkit.domain.entities import Account, AccountCategory, AccountReportNode, Transaction
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.ledger import Ledger

ZERO = Decimal("0")


def build_account_tree(
    accounts: Iterable[Account],
    transactions: Iterable[Transaction],
    categories: Iterable[AccountCategory],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[AccountReportNode]:
    """Aggregate postings into a tree of per-account and rolled-up totals.

    Args:
        accounts: Full chart of accounts, archived accounts included
        transactions: Full ledger; date filtering happens here
        categories: Categories to include (at least one)
        start_date: Optional inclusive lower bound
        end_date: Optional inclusive upper bound

    Returns:
        Root nodes sorted by account number, children nested

    Raises:
        UnknownAccountError: If a posting references an unknown account
        CyclicHierarchyError: If the parent graph has a cycle
        ValidationError: If no category is requested
    """
    return tree_from_ledger(Ledger(accounts, transactions), categories, start_date, end_date)


def tree_from_ledger(
    ledger: Ledger,
    categories: Iterable[AccountCategory],
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> list[AccountReportNode]:
    """Build the account tree from an already validated snapshot."""
    wanted = set(categories)
    if not wanted:
        raise ValidationError("At least one account category is required")

    included = {
        account.id: account
        for account in ledger.accounts
        if account.category in wanted and not account.archived
    }

    children_ids: dict[int, list[int]] = {account_id: [] for account_id in included}
    root_ids: list[int] = []
    for account in included.values():
        if account.parent_id is not None and account.parent_id in included:
            children_ids[account.parent_id].append(account.id)
        else:
            root_ids.append(account.id)

    def sort_ids(ids: list[int]) -> list[int]:
        return sorted(ids, key=lambda account_id: included[account_id].sort_key)

    root_ids = sort_ids(root_ids)
    for account_id, ids in children_ids.items():
        children_ids[account_id] = sort_ids(ids)

    # Pre-order walk assigns depth; reversing it gives children before parents.
    depth: dict[int, int] = {}
    pre_order: list[int] = []
    stack = [(account_id, 0) for account_id in reversed(root_ids)]
    while stack:
        account_id, level = stack.pop()
        depth[account_id] = level
        pre_order.append(account_id)
        for child_id in reversed(children_ids[account_id]):
            stack.append((child_id, level + 1))

    own_raw = {
        account_id: ledger.account_movement(account_id, start_date, end_date)
        for account_id in included
    }
    total_raw: dict[int, Decimal] = {}
    nodes: dict[int, AccountReportNode] = {}
    for account_id in reversed(pre_order):
        account = included[account_id]
        total_raw[account_id] = own_raw[account_id] + sum(
            (total_raw[child_id] for child_id in children_ids[account_id]), ZERO
        )
        nodes[account_id] = AccountReportNode(
            id=account.id,
            name=account.name,
            account_number=account.account_number,
            category=account.category,
            role=account.role,
            parent_id=account.parent_id,
            total=conventions.normalize(account.category, total_raw[account_id]),
            own_total=conventions.normalize(account.category, own_raw[account_id]),
            depth=depth[account_id],
            children=tuple(nodes[child_id] for child_id in children_ids[account_id]),
        )

    return [nodes[account_id] for account_id in root_ids]


def sum_root_totals(nodes: Sequence[AccountReportNode]) -> Decimal:
    """Sum the rolled-up totals of root nodes."""
    return sum((node.total for node in nodes), ZERO)


def flatten_tree(nodes: Sequence[AccountReportNode]) -> list[AccountReportNode]:
    """List every node in display order (parents before children)."""
    flat: list[AccountReportNode] = []
    for node in nodes:
        flat.extend(node.walk())
    return flat


def find_node(nodes: Sequence[AccountReportNode], account_id: int) -> Optional[AccountReportNode]:
    """Find a node by account ID anywhere in the tree."""
    for node in flatten_tree(nodes):
        if node.id == account_id:
            return node
    return None
