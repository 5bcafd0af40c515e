"""Date range options shared by listing commands."""

from datetime import date

import click

from ledgerbook.cli.error_handling import fail
from ledgerbook.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(command):
    """Attach one boolean flag per named period (--this-month, --last-week ...)."""
    for period in reversed(PERIODS):
        command = click.option(
            f"--{period}",
            period.replace("-", "_"),
            is_flag=True,
            help=f"Limit to {period.replace('-', ' ')}",
        )(command)
    return command


def resolve_cli_date_range(
    ctx,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
) -> tuple[date, date]:
    """Turn period flags or --start-date/--end-date into an inclusive range.

    A period flag and explicit dates are mutually exclusive. A missing
    bound stays open (``date.min`` / ``date.max``).
    """
    selected = [period for period, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        fail(ctx, "Only one period option can be specified at a time.")
    if selected and (start_date or end_date):
        fail(ctx, "Period options cannot be combined with --start-date or --end-date.")
    if selected:
        return get_date_range(selected[0])

    start, end = date.min, date.max
    try:
        if start_date:
            start = parse_date(start_date)
        if end_date:
            end = parse_date(end_date)
    except ValueError as e:
        fail(ctx, f"Invalid date: {e}")

    if start > end:
        fail(ctx, "--start-date must not be after --end-date.")
    return start, end
