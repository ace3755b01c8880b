"""Chart-of-accounts import command."""

import json

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.coa_import import ChartImportService, decode_text
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.formats import AUTO_DETECT, FORMATS


def _parse_mappings(ctx: click.Context, mappings: tuple[str, ...]) -> dict[str, str]:
    """Parse HEADER=FIELD options into a mapping."""
    field_mapping = {}
    for item in mappings:
        header, sep, field_name = item.rpartition("=")
        if not sep or not header:
            click.echo(f"Error: Invalid mapping '{item}', expected HEADER=FIELD", err=True)
            ctx.exit(1)
        field_mapping[header] = field_name
    return field_mapping


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--format",
    "file_format",
    default=AUTO_DETECT,
    show_default=True,
    type=click.Choice(list(FORMATS) + [AUTO_DETECT]),
    help="Source accounting software format",
)
@click.option("--no-headers", is_flag=True, help="File has no header row")
@click.option("--skip-rows", default=0, type=click.IntRange(min=0), help="Leading rows to ignore")
@click.option(
    "--map",
    "mappings",
    multiple=True,
    metavar="HEADER=FIELD",
    help="Explicit column mapping (repeatable); disables format detection",
)
@click.option("--commit", is_flag=True, help="Add parsed accounts to the chart (default: preview only)")
@click.option("--json", "as_json", is_flag=True, help="Print the import result as JSON")
@click.pass_context
def import_chart(
    ctx,
    csv_file: str,
    file_format: str,
    no_headers: bool,
    skip_rows: int,
    mappings: tuple[str, ...],
    commit: bool,
    as_json: bool,
):
    """Import a chart of accounts from a CSV export.

    Examples:
        ledgerkit import quickbooks_export.csv
        ledgerkit import ledger.csv --format tally --commit
        ledgerkit import raw.csv --no-headers --map column_0=code --map column_1=name
    """
    db = ctx.obj["db"]
    service = ChartImportService(db)
    field_mapping = _parse_mappings(ctx, mappings)

    with open(csv_file, "rb") as f:
        content = decode_text(f.read())

    try:
        result, summary = service.import_chart(
            content,
            file_format=file_format,
            field_mapping=field_mapping or None,
            has_headers=not no_headers,
            skip_rows=skip_rows,
            preview=not commit,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    if as_json:
        payload = result.to_dict()
        if summary is not None:
            payload["committed"] = {
                "created": list(summary.created),
                "skipped": list(summary.skipped),
                "review": list(summary.review),
            }
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"\nDetected format: {result.detected_format}")
    click.echo("Field mapping:")
    for header, canonical in result.suggested_field_mapping.items():
        click.echo(f"  {header} -> {canonical.value}")

    click.echo(f"\nParsed {result.parsed_accounts} accounts from {result.total_rows} rows")
    for acc in result.accounts:
        click.echo(f"  {acc.code:12s} | {acc.name:30s} | {acc.type or '-':15s} | {acc.balance:>12,.2f}")

    if result.warnings:
        click.echo(f"\nWarnings: {len(result.warnings)}")
        for warning in result.warnings:
            click.echo(f"  Row {warning.row}: {warning.message}")
    if result.errors:
        click.echo(f"\nErrors: {len(result.errors)}")
        for error in result.errors:
            click.echo(f"  Row {error.row}: {error.message}", err=True)

    if summary is not None:
        click.echo("\nImport complete:")
        click.echo(f"  Created: {len(summary.created)} accounts")
        click.echo(f"  Skipped: {len(summary.skipped)} existing")
        if summary.review:
            click.echo(f"  Needs review: {len(summary.review)} (account type unclear, not created)")
            for code in summary.review:
                click.echo(f"    {code}")
    else:
        click.echo("\nPreview only. Use --commit to add these accounts to the chart.")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_chart)
