"""Main CLI entry point."""

import click
from ledgerkit.cli.logging_setup import setup_logging
from ledgerkit.config import DB_PATH_ENV, RULES_PATH_ENV
from ledgerkit.database.factories import create_sqlite_database

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    import_cmd,
    template,
    classify,
    patterns,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV} environment variable)",
    envvar=DB_PATH_ENV,
)
@click.option(
    "--rules",
    "rules_path",
    type=click.Path(exists=True, dir_okay=False),
    help=f"YAML classification rules file (overrides {RULES_PATH_ENV} environment variable)",
    envvar=RULES_PATH_ENV,
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--log-json", is_flag=True, help="Emit logs as JSON lines")
@click.pass_context
def cli(ctx, db_path: str | None, rules_path: str | None, verbose: bool, log_json: bool):
    """Ledgerkit - Chart of accounts import and transaction classification.

    Import chart-of-accounts exports from QuickBooks, Xero, Sage, Tally or
    generic CSV files, and classify receipt and invoice line items into
    journal entries.
    """
    ctx.ensure_object(dict)
    setup_logging(verbose=verbose, json_output=log_json)
    ctx.obj["rules_path"] = rules_path

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
account.register_commands(cli)
import_cmd.register_commands(cli)
template.register_commands(cli)
classify.register_commands(cli)
patterns.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
