"""Sign conventions shared by every statement.

The ledger stores debit-positive amounts: debits are positive, credits are
negative and the legs of a balanced journal entry sum to zero. Reports show
each account with its normal balance as a positive number, so credit-normal
categories are negated for presentation.

Every deriver goes through this module. Keep it the only copy of the table.
"""

from decimal import Decimal

from ledgerkit.domain.entities import AccountCategory, NormalSide

ZERO = Decimal("0")

SIGN_CONVENTIONS: dict[AccountCategory, tuple[NormalSide, int]] = {
    AccountCategory.ASSET: (NormalSide.DEBIT, 1),
    AccountCategory.EXPENSE: (NormalSide.DEBIT, 1),
    AccountCategory.LIABILITY: (NormalSide.CREDIT, -1),
    AccountCategory.EQUITY: (NormalSide.CREDIT, -1),
    AccountCategory.INCOME: (NormalSide.CREDIT, -1),
}


def normal_side(category: AccountCategory) -> NormalSide:
    """Return the side on which the category carries its natural balance."""
    return SIGN_CONVENTIONS[category][0]


def presentation_sign(category: AccountCategory) -> int:
    """Return the multiplier that turns a raw amount into a report amount."""
    return SIGN_CONVENTIONS[category][1]


def normalize(category: AccountCategory, raw: Decimal) -> Decimal:
    """Convert a raw ledger amount to its report sign."""
    if presentation_sign(category) < 0:
        return -raw
    return raw


def debit_credit(raw: Decimal) -> tuple[Decimal, Decimal]:
    """Split a raw balance into a (debit, credit) pair of magnitudes."""
    if raw > 0:
        return raw, ZERO
    if raw < 0:
        return ZERO, -raw
    return ZERO, ZERO


def is_contra_balance(category: AccountCategory, raw: Decimal) -> bool:
    """Return True when a balance sits on the side opposite its normal side."""
    return normalize(category, raw) < 0


def net_income(income_raw: Decimal, expense_raw: Decimal) -> Decimal:
    """Profit for a set of raw income and expense movements.

    Income less expenses, each converted to its report sign first.
    """
    return normalize(AccountCategory.INCOME, income_raw) - normalize(
        AccountCategory.EXPENSE, expense_raw
    )
