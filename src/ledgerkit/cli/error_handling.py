"""CLI error handling helpers."""

import click

from ledgerkit.domain.errors import DomainError, StructuralError
from ledgerkit.logging_config import get_logger

log = get_logger(__name__)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    if isinstance(error, StructuralError):
        log.error("ledger_structure_invalid", error=str(error), kind=type(error).__name__)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
