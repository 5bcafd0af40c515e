"""Main CLI entry point."""

import click

from ledgerbook.database.factories import BACKENDS, resolve_home
from ledgerbook.logging_config import configure_logging

# Import and register all commands at module level
from ledgerbook.cli.commands import account, post, report, store


@click.group()
@click.option(
    "--home",
    type=click.Path(file_okay=False),
    help="Data directory (overrides LEDGERBOOK_HOME environment variable)",
    envvar="LEDGERBOOK_HOME",
)
@click.option(
    "--backend",
    type=click.Choice(BACKENDS),
    default="auto",
    show_default=True,
    envvar="LEDGERBOOK_BACKEND",
    help="Record store backend for 'store' commands",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    envvar="LEDGERBOOK_LOG_LEVEL",
    help="Logging level (default: WARNING)",
)
@click.pass_context
def cli(ctx, home: str | None, backend: str, log_level: str | None):
    """Ledgerbook - double-entry bookkeeping for small businesses.

    Post transactions against a chart of accounts, report trial balance
    and net income, and back up the record store.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Resolve the data home only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        ctx.obj["home"] = resolve_home(home)
        ctx.obj["backend"] = backend


# Register all commands
account.register_commands(cli)
post.register_commands(cli)
report.register_commands(cli)
store.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
