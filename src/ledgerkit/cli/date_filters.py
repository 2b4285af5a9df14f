"""CLI helpers for date range resolution."""

from datetime import date

import click

from ledgerkit.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(func):
    """Add --start-date/--end-date and one flag per named period to a command.

    Period flags arrive as keyword arguments named after the period
    (``this_month``, ``last_quarter``, ...).
    """
    for period in reversed(PERIODS):
        func = click.option(
            f"--{period}",
            is_flag=True,
            help=f"Report on {period.replace('-', ' ')}",
        )(func)
    func = click.option(
        "--end-date", help="End date (YYYY-MM-DD or relative like 'today')"
    )(func)
    func = click.option(
        "--start-date", help="Start date (YYYY-MM-DD or relative like 'this quarter')"
    )(func)
    return func


def selected_periods(period_flags: dict[str, bool]) -> list[str]:
    """Return the period names whose flag is set.

    Keys may be period names ("this-month") or click keyword names
    ("this_month").
    """
    return [
        period
        for period in PERIODS
        if period_flags.get(period) or period_flags.get(period.replace("-", "_"))
    ]


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve CLI date range from period flags or explicit dates."""
    periods = selected_periods(period_flags)
    flags = ", ".join(f"--{period}" for period in PERIODS)

    if len(periods) > 1:
        click.echo(f"Error: Only one period option ({flags}) can be specified at a time.", err=True)
        ctx.exit(1)

    if periods and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if periods:
        return get_date_range(periods[0])

    start = None
    end = None

    if start_date:
        try:
            start = parse_date(start_date)
        except ValueError as e:
            click.echo(f"Error: Invalid start date: {e}", err=True)
            ctx.exit(1)

    if end_date:
        try:
            end = parse_date(end_date)
        except ValueError as e:
            click.echo(f"Error: Invalid end date: {e}", err=True)
            ctx.exit(1)

    if start is None and end is None and default_range is not None:
        start, end = default_range

    if start is not None and end is not None and start > end:
        click.echo(f"Error: Start date {start} is after end date {end}.", err=True)
        ctx.exit(1)

    return start, end


def resolve_as_of_date(ctx, as_of: str | None) -> date:
    """Parse an --as-of option, defaulting to today."""
    if not as_of:
        return date.today()
    try:
        return parse_date(as_of)
    except ValueError as e:
        click.echo(f"Error: Invalid date: {e}", err=True)
        ctx.exit(1)
