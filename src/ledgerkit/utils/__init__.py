"""Utility functions for ledgerkit."""

from ledgerkit.utils.date_parser import parse_date
from ledgerkit.utils.amount_parser import coerce_decimal, parse_amount

__all__ = ["parse_date", "parse_amount", "coerce_decimal"]
