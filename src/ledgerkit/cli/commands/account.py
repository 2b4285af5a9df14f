"""Account management commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountCategory, AccountRole
from ledgerkit.domain.errors import DomainError

CATEGORY_CHOICES = [category.value for category in AccountCategory]
ROLE_CHOICES = [role.value for role in AccountRole]


def _depths(accounts) -> dict[int, int]:
    """Depth of every account in the parent graph, for indented listings."""
    parents = {acc.id: acc.parent_id for acc in accounts}
    depths: dict[int, int] = {}
    for account_id in parents:
        depth = 0
        current = parents[account_id]
        seen = {account_id}
        while current is not None and current in parents and current not in seen:
            seen.add(current)
            depth += 1
            current = parents[current]
        depths[account_id] = depth
    return depths


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option(
    "--category",
    required=True,
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    help="Account category",
)
@click.option("--number", "account_number", help="Account number (sorts reports)")
@click.option("--parent", help="Parent account number, name or ID")
@click.option(
    "--role",
    type=click.Choice(ROLE_CHOICES, case_sensitive=False),
    help="Statement role (suggested from the name if omitted)",
)
@click.option("--description", help="Account description")
@click.pass_context
def create_account(
    ctx,
    name: str,
    category: str,
    account_number: str | None,
    parent: str | None,
    role: str | None,
    description: str | None,
):
    """Create a new account.

    Examples:
        ledgerkit account create "Business Checking" --category Asset --number 1010 --parent 1000 --role Cash
        ledgerkit account create "Accounts Payable" --category Liability --number 2000
    """
    db = ctx.obj["db"]
    service = AccountService(db)

    parent_id = resolve_account_or_exit(ctx, service, parent) if parent else None

    try:
        account_id = service.create_account(
            name=name,
            category=category,
            account_number=account_number,
            parent_id=parent_id,
            role=role,
            description=description,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    created = service.get_account(account_id)
    click.echo(f"Created account '{created.name}' (ID: {account_id})")
    click.echo(f"  Category: {created.category.value}")
    click.echo(f"  Role: {created.role.value}")


@account_group.command("list")
@click.option("--all", "include_archived", is_flag=True, help="Include archived accounts")
@click.pass_context
def list_accounts(ctx, include_archived: bool):
    """List the chart of accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)

    accounts = service.list_accounts(include_archived=include_archived)
    if not accounts:
        click.echo("No accounts found.")
        return

    depths = _depths(accounts)
    by_parent: dict[int | None, list] = {}
    known = {acc.id for acc in accounts}
    for acc in accounts:
        parent_key = acc.parent_id if acc.parent_id in known else None
        by_parent.setdefault(parent_key, []).append(acc)

    click.echo("\nAccounts:")
    click.echo("-" * 78)

    def show(parent_key):
        for acc in by_parent.get(parent_key, []):
            indent = "  " * depths[acc.id]
            label = f"{indent}{acc.name}"
            flag = " (archived)" if acc.archived else ""
            click.echo(
                f"{acc.account_number or '':>6s} | {label:36s} | {acc.category.value:9s} | "
                f"{acc.role.value}{flag}"
            )
            show(acc.id)

    show(None)


def _set_archived(ctx, account: str, archived: bool) -> None:
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        if archived:
            service.archive_account(account_id)
        else:
            service.unarchive_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    action = "Archived" if archived else "Unarchived"
    click.echo(f"{action} account '{service.get_account(account_id).name}'")


@account_group.command("archive")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def archive_account(ctx, account: str) -> None:
    """Archive an account.

    Archived accounts are hidden from reports, but their history still
    counts towards retained earnings and cash flow.
    """
    _set_archived(ctx, account, True)


@account_group.command("unarchive")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def unarchive_account(ctx, account: str) -> None:
    """Restore an archived account."""
    _set_archived(ctx, account, False)


@account_group.command("move")
@click.argument("account", metavar="ACCOUNT")
@click.option("--parent", help="New parent account number, name or ID")
@click.option("--top-level", is_flag=True, help="Make the account a top-level account")
@click.pass_context
def move_account(ctx, account: str, parent: str | None, top_level: bool) -> None:
    """Move an account under another account.

    Examples:
        ledgerkit account move 7060 --parent 7000
        ledgerkit account move "Rent & Lease" --top-level
    """
    if (parent is None) == (not top_level):
        click.echo("Error: Specify exactly one of --parent or --top-level.", err=True)
        ctx.exit(1)

    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    parent_id = resolve_account_or_exit(ctx, service, parent) if parent else None

    try:
        service.move_account(account_id, parent_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if parent_id is None:
        click.echo(f"Moved account {account_id} to the top level")
    else:
        click.echo(f"Moved account {account_id} under '{service.get_account(parent_id).name}'")


@account_group.command("set-role")
@click.argument("account", metavar="ACCOUNT")
@click.argument("role", type=click.Choice(ROLE_CHOICES, case_sensitive=False))
@click.pass_context
def set_role(ctx, account: str, role: str) -> None:
    """Set the statement role of an account.

    Examples:
        ledgerkit account set-role 1010 Cash
        ledgerkit account set-role "Depreciation" Depreciation
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    try:
        service.set_role(account_id, role)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Account {account_id} now has role {AccountRole.parse(role).value}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    Only accounts without postings or sub-accounts can be deleted; archive
    the others instead.
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
