"""VAT / sales tax return derivation."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from ledgerkit.domain.entities import Bill, Invoice, TaxCode, VatCodeSummary, VatReturn
from ledgerkit.domain.errors import (
    UnknownTaxCodeError,
    ValidationError,
    unknown_tax_code_on_line,
)
from ledgerkit.domain.ledger import in_range

ZERO = Decimal("0")


def vat_return(
    invoices: Iterable[Invoice],
    bills: Iterable[Bill],
    tax_codes: Iterable[TaxCode],
    start_date: date,
    end_date: date,
) -> VatReturn:
    """Summarize output tax on invoices and input tax on bills for a period.

    Documents are selected by their own date (inclusive range). Lines without
    a tax code count towards the taxable totals but carry no tax.

    Raises:
        UnknownTaxCodeError: If a line references a tax code not supplied
        ValidationError: If start_date is after end_date
    """
    if start_date > end_date:
        raise ValidationError(f"Start date {start_date} is after end date {end_date}")

    codes = {code.id: code for code in tax_codes}
    # tax code id -> [sales, output tax, purchases, input tax]
    per_code: dict[int, list[Decimal]] = {}

    def accumulate(documents, offset: int) -> tuple[Decimal, Decimal]:
        taxable_total = ZERO
        tax_total = ZERO
        for document in documents:
            if not in_range(document.date, start_date, end_date):
                continue
            for line in document.line_items:
                line_total = line.line_total
                taxable_total += line_total
                if line.tax_code_id is None:
                    continue
                code = codes.get(line.tax_code_id)
                if code is None:
                    raise UnknownTaxCodeError(
                        unknown_tax_code_on_line(document.number, line.tax_code_id)
                    )
                tax = line_total * code.rate
                tax_total += tax
                bucket = per_code.setdefault(code.id, [ZERO, ZERO, ZERO, ZERO])
                bucket[offset] += line_total
                bucket[offset + 1] += tax
        return taxable_total, tax_total

    sales_total, output_tax = accumulate(invoices, 0)
    purchases_total, input_tax = accumulate(bills, 2)

    by_tax_code = tuple(
        VatCodeSummary(
            tax_code=codes[code_id],
            sales_total=bucket[0],
            output_tax=bucket[1],
            purchases_total=bucket[2],
            input_tax=bucket[3],
        )
        for code_id, bucket in sorted(per_code.items())
    )

    return VatReturn(
        start_date=start_date,
        end_date=end_date,
        sales_total=sales_total,
        output_tax=output_tax,
        purchases_total=purchases_total,
        input_tax=input_tax,
        by_tax_code=by_tax_code,
    )
