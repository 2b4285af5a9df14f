"""Tax code, invoice and bill domain service."""

from datetime import date
from decimal import Decimal
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Bill, Invoice, LineItem, TaxCode
from ledgerkit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    duplicate_document_number,
    tax_code_not_found,
    too_many_decimal_places,
)
from ledgerkit.utils.amount_parser import coerce_decimal, fits_places

ZERO = Decimal("0")
ONE = Decimal("1")

# Scales of the stored columns
RATE_PLACES = 6
LINE_PLACES = 4


def _checked(label: str, raw, places: int) -> Decimal:
    value = coerce_decimal(raw)
    if not fits_places(value, places):
        raise ValidationError(too_many_decimal_places(label, value, places))
    return value


class TaxService:
    """Service for managing tax codes and the documents they apply to."""

    def __init__(self, db: Database):
        self.db = db

    def create_tax_code(
        self, name: str, rate: Decimal, jurisdiction: Optional[str] = None
    ) -> int:
        """Create a tax code.

        Args:
            name: Unique code name, e.g. "VAT20"
            rate: Rate as a fraction between 0 and 1 (0.2 for 20%)
            jurisdiction: Optional jurisdiction label

        Returns:
            Tax code ID

        Raises:
            ValidationError: If the name is empty or the rate is out of range
                or has more than six decimal places
            ConflictError: If the name is taken
        """
        name = name.strip()
        if not name:
            raise ValidationError("Tax code name cannot be empty")
        value = _checked("Tax rate", rate, RATE_PLACES)
        if value < ZERO or value > ONE:
            raise ValidationError(f"Tax rate {value} must be between 0 and 1")
        if self.db.get_tax_code_by_name(name) is not None:
            raise ConflictError(f"Tax code '{name}' already exists")
        return self.db.create_tax_code(name=name, rate=value, jurisdiction=jurisdiction)

    def get_tax_code(self, tax_code_id: int) -> Optional[TaxCode]:
        return self.db.get_tax_code(tax_code_id)

    def get_tax_code_by_name(self, name: str) -> Optional[TaxCode]:
        return self.db.get_tax_code_by_name(name)

    def list_tax_codes(self) -> list[TaxCode]:
        return self.db.list_tax_codes()

    def _validate_lines(self, line_items: list[LineItem]) -> list[LineItem]:
        if not line_items:
            raise ValidationError("A document needs at least one line")
        known = {code.id for code in self.db.list_tax_codes()}
        validated = []
        for line in line_items:
            quantity = _checked("Line quantity", line.quantity, LINE_PLACES)
            unit_price = _checked("Unit price", line.unit_price, LINE_PLACES)
            if quantity < ZERO:
                raise ValidationError(f"Line quantity {quantity} cannot be negative")
            if line.tax_code_id is not None and line.tax_code_id not in known:
                raise NotFoundError(tax_code_not_found(line.tax_code_id))
            validated.append(
                LineItem(
                    quantity=quantity,
                    unit_price=unit_price,
                    tax_code_id=line.tax_code_id,
                    description=line.description,
                )
            )
        return validated

    @staticmethod
    def _check_header(number: str, party_name: str) -> tuple[str, str]:
        number = number.strip()
        party_name = party_name.strip()
        if not number:
            raise ValidationError("Document number cannot be empty")
        if not party_name:
            raise ValidationError("Party name cannot be empty")
        return number, party_name

    def create_invoice(
        self, number: str, party_name: str, date: date, line_items: list[LineItem]
    ) -> int:
        """Record a sales invoice.

        Raises:
            ValidationError: If the header or a line is invalid
            NotFoundError: If a line references an unknown tax code
            ConflictError: If the invoice number is taken
        """
        number, party_name = self._check_header(number, party_name)
        lines = self._validate_lines(line_items)
        if self.db.get_invoice_by_number(number) is not None:
            raise ConflictError(duplicate_document_number("invoice", number))
        return self.db.create_invoice(number, party_name, date, lines)

    def create_bill(
        self, number: str, party_name: str, date: date, line_items: list[LineItem]
    ) -> int:
        """Record a purchase bill.

        Raises:
            ValidationError: If the header or a line is invalid
            NotFoundError: If a line references an unknown tax code
            ConflictError: If the bill number is taken
        """
        number, party_name = self._check_header(number, party_name)
        lines = self._validate_lines(line_items)
        if self.db.get_bill_by_number(number) is not None:
            raise ConflictError(duplicate_document_number("bill", number))
        return self.db.create_bill(number, party_name, date, lines)

    def list_invoices(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Invoice]:
        return self.db.list_invoices(start_date=start_date, end_date=end_date)

    def list_bills(
        self, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> list[Bill]:
        return self.db.list_bills(start_date=start_date, end_date=end_date)
