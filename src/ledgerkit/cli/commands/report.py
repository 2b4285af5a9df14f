"""Financial report commands."""

from datetime import date
from decimal import Decimal

import click
from ledgerkit.cli.date_filters import period_options, resolve_as_of_date, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.reports import ReportService
from ledgerkit.utils.date_parser import get_date_range

INDENT_SIZE = 4
NAME_WIDTH = 50
AMOUNT_WIDTH = 16
RULE = "-" * (NAME_WIDTH + AMOUNT_WIDTH + 1)


def _money(amount: Decimal) -> str:
    return f"{amount:,.2f}"


def _line(label: str, amount: Decimal, indent: int = 0) -> None:
    indent_str = " " * (INDENT_SIZE * indent)
    label_width = NAME_WIDTH - (INDENT_SIZE * indent)
    click.echo(f"{indent_str}{label:<{label_width}} {_money(amount):>{AMOUNT_WIDTH}}")


def _display_tree(nodes, show_zero: bool, indent: int = 0) -> None:
    """Recursively display report nodes in account-number order."""
    for node in nodes:
        if node.total == 0 and not show_zero:
            continue
        label = f"{node.account_number} {node.name}" if node.account_number else node.name
        _line(label, node.total, indent)
        _display_tree(node.children, show_zero, indent + 1)


def _heading(title: str, subtitle: str) -> None:
    click.echo(f"\n{title}")
    click.echo(subtitle)
    click.echo("=" * len(RULE))


def _total(label: str, amount: Decimal) -> None:
    click.echo(RULE)
    _line(label, amount)


def _service(ctx) -> ReportService:
    return ReportService(ctx.obj["db"])


@click.group("report")
def report_group():
    """Derive financial statements."""
    pass


@report_group.command("trial-balance")
@click.option("--as-of", help="Report date (defaults to today)")
@click.pass_context
def trial_balance(ctx, as_of: str | None):
    """Show debit and credit balances of every account."""
    as_of_date = resolve_as_of_date(ctx, as_of)
    try:
        result = _service(ctx).trial_balance(as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _heading("Trial Balance", f"As of {as_of_date}")
    click.echo(f"{'Account':<{NAME_WIDTH - AMOUNT_WIDTH}} {'Debit':>{AMOUNT_WIDTH}} {'Credit':>{AMOUNT_WIDTH}}")
    click.echo(RULE)
    for row in result.rows:
        acc = row.account
        label = f"{acc.account_number} {acc.name}" if acc.account_number else acc.name
        if row.is_contra:
            label += " *"
        debit = _money(row.debit) if row.debit else ""
        credit = _money(row.credit) if row.credit else ""
        click.echo(
            f"{label:<{NAME_WIDTH - AMOUNT_WIDTH}} {debit:>{AMOUNT_WIDTH}} {credit:>{AMOUNT_WIDTH}}"
        )
    click.echo(RULE)
    click.echo(
        f"{'Total':<{NAME_WIDTH - AMOUNT_WIDTH}} "
        f"{_money(result.total_debits):>{AMOUNT_WIDTH}} {_money(result.total_credits):>{AMOUNT_WIDTH}}"
    )
    if any(row.is_contra for row in result.rows):
        click.echo("* balance on the opposite side of the account's normal balance")
    if not result.is_balanced:
        click.echo(f"Warning: debits and credits differ by {_money(result.difference)}", err=True)


@report_group.command("balance-sheet")
@click.option("--as-of", help="Report date (defaults to today)")
@click.option("--show-zero", is_flag=True, help="Show accounts with zero balance")
@click.pass_context
def balance_sheet(ctx, as_of: str | None, show_zero: bool):
    """Show assets, liabilities and equity."""
    as_of_date = resolve_as_of_date(ctx, as_of)
    try:
        result = _service(ctx).balance_sheet(as_of_date)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _heading("Balance Sheet", f"As of {as_of_date}")
    click.echo("Assets")
    _display_tree(result.assets, show_zero, indent=1)
    _total("Total Assets", result.total_assets)

    click.echo("\nLiabilities")
    _display_tree(result.liabilities, show_zero, indent=1)
    _total("Total Liabilities", result.total_liabilities)

    click.echo("\nEquity")
    _display_tree(result.equity, show_zero, indent=1)
    _line("Retained Earnings", result.retained_earnings, indent=1)
    _total("Total Equity", result.total_equity)

    click.echo()
    _total("Total Liabilities & Equity", result.total_liabilities_and_equity)
    if not result.is_balanced:
        click.echo(f"Warning: balance sheet is out of balance by {_money(result.difference)}", err=True)


@report_group.command("profit-and-loss")
@period_options
@click.option("--show-zero", is_flag=True, help="Show accounts with zero balance")
@click.option("--percent", is_flag=True, help="Show each line as a percentage of income")
@click.pass_context
def profit_and_loss(
    ctx,
    start_date: str | None,
    end_date: str | None,
    show_zero: bool,
    percent: bool,
    **period_flags: bool,
):
    """Show income and expenses for a period (defaults to this year)."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_range=get_date_range("this-year"),
    )
    try:
        result = _service(ctx).profit_and_loss(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _heading("Profit & Loss", f"{start or 'Beginning'} to {end or 'today'}")

    if percent:
        click.echo(f"{'':<{NAME_WIDTH}} {'Amount':>{AMOUNT_WIDTH}} {'% of Income':>12}")
        for line in result.lines:
            if line.total == 0 and not show_zero:
                continue
            indent_str = " " * (INDENT_SIZE * line.depth)
            label_width = NAME_WIDTH - INDENT_SIZE * line.depth
            click.echo(
                f"{indent_str}{line.name:<{label_width}} {_money(line.total):>{AMOUNT_WIDTH}} "
                f"{line.percent_of_income:>11}%"
            )
        click.echo(RULE)
    else:
        click.echo("Income")
        _display_tree(result.income, show_zero, indent=1)
        _total("Total Income", result.total_income)
        click.echo("\nExpenses")
        _display_tree(result.expenses, show_zero, indent=1)
        _total("Total Expenses", result.total_expenses)
        click.echo()

    _line("Gross Profit", result.gross_profit)
    _line("Net Profit", result.net_profit)


@report_group.command("cash-flow")
@period_options
@click.pass_context
def cash_flow(ctx, start_date: str | None, end_date: str | None, **period_flags: bool):
    """Show the statement of cash flows (indirect method, defaults to this year)."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_range=get_date_range("this-year"),
    )
    end = end or date.today()
    if start is None:
        click.echo("Error: The cash flow statement needs a start date.", err=True)
        ctx.exit(1)
    try:
        result = _service(ctx).cash_flow(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _heading("Statement of Cash Flows", f"{start} to {end}")
    click.echo("Operating Activities")
    _line("Net Income", result.net_income, 1)
    _line("Depreciation & Amortization", result.depreciation_and_amortization, 1)
    _line("Change in Accounts Receivable", result.change_in_accounts_receivable, 1)
    _line("Change in Inventory", result.change_in_inventory, 1)
    _line("Change in Prepayments", result.change_in_prepayments, 1)
    _line("Change in Accounts Payable", result.change_in_accounts_payable, 1)
    _total("Cash from Operating Activities", result.cash_from_operations)
    click.echo()
    _line("Cash from Investing Activities", result.cash_from_investing)
    _line("Cash from Financing Activities", result.cash_from_financing)
    click.echo(RULE)
    _line("Net Change in Cash", result.net_change_in_cash)
    _line("Cash at Beginning of Period", result.start_cash)
    _line("Cash at End of Period", result.end_cash)
    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)


@report_group.command("vat")
@period_options
@click.pass_context
def vat(ctx, start_date: str | None, end_date: str | None, **period_flags: bool):
    """Show the VAT / sales tax return (defaults to this quarter)."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_range=get_date_range("this-quarter"),
    )
    start = start or date.min
    end = end or date.today()
    try:
        result = _service(ctx).vat_return(start, end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    _heading("VAT Return", f"{start} to {end}")
    _line("Total Sales", result.sales_total)
    _line("Output Tax", result.output_tax)
    _line("Total Purchases", result.purchases_total)
    _line("Input Tax", result.input_tax)
    _total("Net VAT Payable", result.net_vat_payable)

    if result.by_tax_code:
        click.echo("\nBy tax code")
        for summary in result.by_tax_code:
            click.echo(f"    {summary.tax_code.name}")
            _line("Sales", summary.sales_total, 2)
            _line("Output Tax", summary.output_tax, 2)
            _line("Purchases", summary.purchases_total, 2)
            _line("Input Tax", summary.input_tax, 2)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
