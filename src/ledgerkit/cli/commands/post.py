"""Post journal entry command."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.transaction import TransactionService
from ledgerkit.utils.amount_parser import parse_amount
from ledgerkit.utils.date_parser import parse_date


def parse_leg(spec: str) -> tuple[str, str]:
    """Split an ACCOUNT=AMOUNT leg; the last '=' separates the amount."""
    account, sep, amount = spec.rpartition("=")
    if not sep or not account.strip() or not amount.strip():
        raise click.BadParameter(f"Expected ACCOUNT=AMOUNT, got '{spec}'", param_hint="--leg")
    return account.strip(), amount.strip()


@click.command("post")
@click.option(
    "--date",
    "entry_date",
    required=True,
    help="Entry date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option(
    "--leg",
    "legs",
    multiple=True,
    required=True,
    help="ACCOUNT=AMOUNT; debits positive, credits negative. Repeat for each leg.",
)
@click.option("--description", help="Entry description")
@click.pass_context
def post_entry(ctx, entry_date: str, legs: tuple[str, ...], description: str | None):
    """Post a balanced journal entry.

    ACCOUNT in each leg can be an account number, name or ID. The amounts
    of all legs must sum to zero.

    Examples:
        ledgerkit post --date 2024-01-05 --leg 1010=1000 --leg 4000=-1000 --description "Invoice paid"
        ledgerkit post --date today --leg "Rent & Lease=200" --leg "Business Checking=-200"
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)

    try:
        posted_on = parse_date(entry_date)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    resolved = []
    for spec in legs:
        account, amount = parse_leg(spec)
        account_id = resolve_account_or_exit(ctx, account_service, account)
        try:
            value = parse_amount(amount)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
        resolved.append((account_id, value))

    try:
        entry_id = transaction_service.post_entry(posted_on, resolved, description)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Posted entry {entry_id}")
    click.echo(f"  Date: {posted_on}")
    for account_id, value in resolved:
        acc = account_service.get_account(account_id)
        number = acc.account_number or str(acc.id)
        click.echo(f"  {number:>6} {acc.name:30s} {value:>14,.2f}")
    if description:
        click.echo(f"  Description: {description}")


def register_commands(cli):
    """Register post command with main CLI."""
    cli.add_command(post_entry)
