"""Tests for the shared sign convention table."""

from decimal import Decimal

import pytest

from ledgerkit.domain import conventions
from ledgerkit.domain.entities import AccountCategory, NormalSide


@pytest.mark.parametrize(
    "category, side, sign",
    [
        (AccountCategory.ASSET, NormalSide.DEBIT, 1),
        (AccountCategory.EXPENSE, NormalSide.DEBIT, 1),
        (AccountCategory.LIABILITY, NormalSide.CREDIT, -1),
        (AccountCategory.EQUITY, NormalSide.CREDIT, -1),
        (AccountCategory.INCOME, NormalSide.CREDIT, -1),
    ],
)
def test_table_covers_every_category(category, side, sign):
    assert conventions.normal_side(category) == side
    assert conventions.presentation_sign(category) == sign


def test_every_category_has_an_entry():
    assert set(conventions.SIGN_CONVENTIONS) == set(AccountCategory)


def test_normalize_flips_credit_normal_categories():
    assert conventions.normalize(AccountCategory.INCOME, Decimal("-1000")) == Decimal("1000")
    assert conventions.normalize(AccountCategory.EXPENSE, Decimal("200")) == Decimal("200")
    assert conventions.normalize(AccountCategory.LIABILITY, Decimal("-50")) == Decimal("50")


def test_debit_credit_split():
    assert conventions.debit_credit(Decimal("800")) == (Decimal("800"), Decimal("0"))
    assert conventions.debit_credit(Decimal("-1000")) == (Decimal("0"), Decimal("1000"))
    assert conventions.debit_credit(Decimal("0")) == (Decimal("0"), Decimal("0"))


def test_contra_balance_detection():
    # Overdrawn bank account: credit balance on a debit-normal account
    assert conventions.is_contra_balance(AccountCategory.ASSET, Decimal("-10"))
    assert not conventions.is_contra_balance(AccountCategory.ASSET, Decimal("10"))
    # Refund exceeding sales: debit balance on income
    assert conventions.is_contra_balance(AccountCategory.INCOME, Decimal("5"))
    assert not conventions.is_contra_balance(AccountCategory.INCOME, Decimal("-5"))


def test_net_income_uses_report_signs():
    # Sales credited 1000, rent debited 200
    assert conventions.net_income(Decimal("-1000"), Decimal("200")) == Decimal("800")
    assert conventions.net_income(Decimal("0"), Decimal("300")) == Decimal("-300")
