"""Initialize default chart of accounts."""

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountCategory as C, AccountRole as R
from ledgerkit.domain.errors import DomainError


# (number, name, category, parent number, role); parents come before children
INITIAL_ACCOUNTS = [
    ("1000", "Bank Accounts", C.ASSET, None, R.CASH),
    ("1010", "Business Checking", C.ASSET, "1000", R.CASH),
    ("1020", "Business Savings", C.ASSET, "1000", R.CASH),
    ("1200", "Accounts Receivable", C.ASSET, None, R.RECEIVABLE),
    ("1300", "Inventory Asset", C.ASSET, None, R.INVENTORY),
    ("1400", "Prepaid Expenses", C.ASSET, None, R.PREPAYMENT),
    ("1500", "Equipment", C.ASSET, None, R.OTHER),
    ("1510", "Accumulated Depreciation", C.ASSET, "1500", R.OTHER),
    ("2000", "Accounts Payable", C.LIABILITY, None, R.PAYABLE),
    ("2100", "Credit Cards", C.LIABILITY, None, R.OTHER),
    ("2200", "Sales Tax Payable", C.LIABILITY, None, R.PAYABLE),
    ("2500", "Loans", C.LIABILITY, None, R.OTHER),
    ("3000", "Owner's Equity", C.EQUITY, None, R.OTHER),
    ("4000", "Sales Revenue", C.INCOME, None, R.OTHER),
    ("4010", "Product Sales", C.INCOME, "4000", R.OTHER),
    ("4100", "Consulting Income", C.INCOME, None, R.OTHER),
    ("4900", "Interest Income", C.INCOME, None, R.OTHER),
    ("4999", "Other Income", C.INCOME, None, R.OTHER),
    ("5000", "Cost of Goods Sold", C.EXPENSE, None, R.COGS),
    ("6000", "Operating Expenses", C.EXPENSE, None, R.OTHER),
    ("6010", "Advertising & Marketing", C.EXPENSE, "6000", R.OTHER),
    ("6100", "Contractors & Freelancers", C.EXPENSE, "6000", R.OTHER),
    ("7000", "General & Administrative", C.EXPENSE, "6000", R.OTHER),
    ("7010", "Bank Fees", C.EXPENSE, "7000", R.OTHER),
    ("7020", "Insurance", C.EXPENSE, "7000", R.OTHER),
    ("7030", "Legal & Professional Services", C.EXPENSE, "7000", R.OTHER),
    ("7040", "Meals & Entertainment", C.EXPENSE, "7000", R.OTHER),
    ("7050", "Office Supplies & Expenses", C.EXPENSE, "7000", R.OTHER),
    ("7060", "Rent & Lease", C.EXPENSE, "7000", R.OTHER),
    ("7070", "Repairs & Maintenance", C.EXPENSE, "7000", R.OTHER),
    ("7080", "Software & Subscriptions", C.EXPENSE, "7000", R.OTHER),
    ("7090", "Travel Expenses", C.EXPENSE, "7000", R.OTHER),
    ("7100", "Utilities", C.EXPENSE, "7000", R.OTHER),
    ("7200", "Salaries & Wages", C.EXPENSE, "7000", R.OTHER),
    ("7300", "Depreciation & Amortization", C.EXPENSE, "6000", R.DEPRECIATION),
    ("7999", "Other Business Expenses", C.EXPENSE, "6000", R.OTHER),
    ("8000", "Foreign Exchange Gain/Loss", C.EXPENSE, "6000", R.OTHER),
]


@click.command("init-accounts")
@click.option("--force", is_flag=True, help="Add default accounts even if accounts exist")
@click.pass_context
def init_accounts(ctx, force: bool):
    """Initialize database with a default small-business chart of accounts.

    Accounts whose number already exists are skipped.
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    if service.list_accounts() and not force:
        click.echo("Accounts already exist. Use --force to add missing defaults.")
        return

    click.echo("Creating default chart of accounts...")

    created = 0
    skipped = 0
    for number, name, category, parent_number, role in INITIAL_ACCOUNTS:
        if service.get_account_by_number(number) is not None:
            skipped += 1
            continue
        parent_id = None
        if parent_number is not None:
            parent = service.get_account_by_number(parent_number)
            parent_id = parent.id if parent is not None else None
        try:
            service.create_account(
                name=name,
                category=category,
                account_number=number,
                parent_id=parent_id,
                role=role,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        created += 1

    if skipped == 0:
        click.echo(f"Successfully created {created} accounts.")
    else:
        click.echo(f"Created {created} accounts, skipped {skipped} existing.")


def register_commands(cli):
    """Register init-accounts command with main CLI."""
    cli.add_command(init_accounts)
