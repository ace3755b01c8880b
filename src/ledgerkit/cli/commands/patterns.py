"""Mapping pattern history commands."""

import click
from ledgerkit.domain.patterns import PatternHistoryService


@click.group()
def patterns_group():
    """Review recorded classification patterns."""
    pass


@patterns_group.command("list")
@click.option("--vendor", help="Only show patterns for this vendor")
@click.pass_context
def list_patterns(ctx, vendor: str | None):
    """List recorded classifications, newest first."""
    db = ctx.obj["db"]
    service = PatternHistoryService(db)

    patterns = service.list_patterns(vendor=vendor)
    if not patterns:
        click.echo("No patterns recorded.")
        return

    click.echo("\nMapping patterns:")
    click.echo("-" * 90)
    for pattern in patterns:
        click.echo(
            f"ID: {pattern.id:3d} | {pattern.vendor or '-':20s} | {pattern.category or '-':12s} | "
            f"{pattern.mapped_account_code} {pattern.mapped_account_name} | "
            f"{pattern.confidence:.2f} | {pattern.document_type}"
        )


def register_commands(cli):
    """Register pattern commands with main CLI."""
    cli.add_command(patterns_group, name="patterns")
