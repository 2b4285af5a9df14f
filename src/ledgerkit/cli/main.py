"""Main CLI entry point."""

import click
from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.logging_config import DEFAULT_LOG_LEVEL, configure_logging

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    init_accounts,
    post,
    report,
    tax,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=DEFAULT_LOG_LEVEL,
    show_default=True,
    help="Log level for diagnostics on stderr (overrides LEDGERKIT_LOG_LEVEL)",
    envvar="LEDGERKIT_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """ledgerkit - Ledger aggregation and financial statements.

    Keep a chart of accounts, post balanced journal entries and derive a
    trial balance, balance sheet, profit & loss, cash flow statement and
    VAT return for any period.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
account.register_commands(cli)
init_accounts.register_commands(cli)
post.register_commands(cli)
report.register_commands(cli)
tax.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
