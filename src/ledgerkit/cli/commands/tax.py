"""Tax code, invoice and bill commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.entities import LineItem
from ledgerkit.domain.errors import DomainError, NotFoundError
from ledgerkit.domain.tax import TaxService
from ledgerkit.utils.amount_parser import parse_amount, parse_rate
from ledgerkit.utils.date_parser import parse_date


def resolve_tax_code(service: TaxService, reference: str) -> int:
    """Resolve a tax code name or ID to its ID.

    Raises:
        NotFoundError: If no tax code matches
    """
    code = service.get_tax_code_by_name(reference)
    if code is not None:
        return code.id
    try:
        code = service.get_tax_code(int(reference))
    except ValueError:
        code = None
    if code is None:
        raise NotFoundError(f"Tax code '{reference}' not found")
    return code.id


def format_percent(rate) -> str:
    """Render a fractional rate as a percentage without trailing zeros."""
    return f"{(rate * 100).normalize():f}%"


def parse_line(service: TaxService, spec: str) -> LineItem:
    """Parse DESCRIPTION;QUANTITY;UNIT_PRICE[;TAX_CODE] into a line item."""
    parts = [part.strip() for part in spec.split(";")]
    if len(parts) not in (3, 4):
        raise click.BadParameter(
            f"Expected DESCRIPTION;QUANTITY;UNIT_PRICE[;TAX_CODE], got '{spec}'",
            param_hint="--line",
        )
    try:
        quantity = parse_amount(parts[1])
        unit_price = parse_amount(parts[2])
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--line")
    tax_code_id = None
    if len(parts) == 4 and parts[3]:
        tax_code_id = resolve_tax_code(service, parts[3])
    return LineItem(
        quantity=quantity,
        unit_price=unit_price,
        tax_code_id=tax_code_id,
        description=parts[0] or None,
    )


@click.group("tax-code")
def tax_code_group():
    """Manage sales tax / VAT codes."""
    pass


@tax_code_group.command("create")
@click.argument("name", metavar="NAME")
@click.argument("rate", metavar="RATE")
@click.option("--jurisdiction", help="Jurisdiction label, e.g. UAE or US-CA")
@click.pass_context
def create_tax_code(ctx, name: str, rate: str, jurisdiction: str | None):
    """Create a tax code.

    RATE is a fraction (0.05) or a percentage (5%).

    Examples:
        ledgerkit tax-code create "UAE VAT 5%" 5% --jurisdiction UAE
        ledgerkit tax-code create "Zero Rated" 0
    """
    service = TaxService(ctx.obj["db"])
    try:
        parsed_rate = parse_rate(rate)
    except ValueError as e:
        click.echo(f"Error: Invalid rate: {e}", err=True)
        ctx.exit(1)
    try:
        tax_code_id = service.create_tax_code(name, parsed_rate, jurisdiction)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created tax code '{name}' (ID: {tax_code_id}) at {format_percent(parsed_rate)}")


@tax_code_group.command("list")
@click.pass_context
def list_tax_codes(ctx):
    """List tax codes."""
    service = TaxService(ctx.obj["db"])
    codes = service.list_tax_codes()
    if not codes:
        click.echo("No tax codes found.")
        return
    click.echo("\nTax codes:")
    click.echo("-" * 60)
    for code in codes:
        click.echo(
            f"ID: {code.id:3d} | {code.name:24s} | {format_percent(code.rate):>9s} | {code.jurisdiction or ''}"
        )


def _document_group(kind: str, party_label: str):
    """Build the click group for invoices or bills."""

    @click.group(kind)
    def group():
        pass

    group.help = f"Record {kind}s for the VAT return."

    @group.command("add")
    @click.argument("number", metavar="NUMBER")
    @click.option("--party", required=True, help=f"{party_label} name")
    @click.option("--date", "document_date", required=True, help="Document date")
    @click.option(
        "--line",
        "lines",
        multiple=True,
        required=True,
        help="DESCRIPTION;QUANTITY;UNIT_PRICE[;TAX_CODE]. Repeat for each line.",
    )
    @click.pass_context
    def add(ctx, number: str, party: str, document_date: str, lines: tuple[str, ...]):
        service = TaxService(ctx.obj["db"])
        try:
            dated = parse_date(document_date)
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)
        try:
            items = [parse_line(service, spec) for spec in lines]
            create = service.create_invoice if kind == "invoice" else service.create_bill
            document_id = create(number, party, dated, items)
        except DomainError as e:
            handle_domain_error(ctx, e)
        total = sum(item.line_total for item in items)
        click.echo(f"Created {kind} '{number}' (ID: {document_id}) for {party}")
        click.echo(f"  Date: {dated}")
        click.echo(f"  Lines: {len(items)}, total before tax {total:,.2f}")

    add.help = f"Add a {kind}.\n\nExample:\n    ledgerkit {kind} add {kind.upper()}-001 --party Acme --date 2024-01-15 --line \"Widgets;2;25.00;VAT20\""

    @group.command("list")
    @click.pass_context
    def list_documents(ctx):
        service = TaxService(ctx.obj["db"])
        documents = service.list_invoices() if kind == "invoice" else service.list_bills()
        if not documents:
            click.echo(f"No {kind}s found.")
            return
        for document in documents:
            total = sum(line.line_total for line in document.line_items)
            click.echo(
                f"{document.date} | {document.number:12s} | {document.party_name:24s} | {total:>12,.2f}"
            )

    list_documents.help = f"List {kind}s."
    return group


invoice_group = _document_group("invoice", "Customer")
bill_group = _document_group("bill", "Vendor")


def register_commands(cli):
    """Register tax commands with main CLI."""
    cli.add_command(tax_code_group, name="tax-code")
    cli.add_command(invoice_group, name="invoice")
    cli.add_command(bill_group, name="bill")
