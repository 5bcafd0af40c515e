"""CLI error reporting helpers."""

import click

from ledgerbook.domain.errors import DomainError, StorageError


def fail(ctx: click.Context, message: str) -> None:
    """Print ``Error: <message>`` to stderr and exit with status 1."""
    click.echo(f"Error: {message}", err=True)
    ctx.exit(1)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a rejected posting, lookup or update and exit."""
    fail(ctx, str(error))


def handle_storage_error(ctx: click.Context, error: StorageError | Exception) -> None:
    """Render a store that could not be opened or read and exit."""
    fail(ctx, f"Storage unavailable: {error}")
