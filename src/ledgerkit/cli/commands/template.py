"""Import template command."""

import click
from ledgerkit.domain.formats import GENERIC, TEMPLATES, template_for


@click.command("template")
@click.argument("file_format", default=GENERIC, type=click.Choice(list(TEMPLATES)))
@click.option("--mapping", is_flag=True, help="Also show how template columns map to account fields")
def show_template(file_format: str, mapping: bool):
    """Print a CSV template for a supported import format.

    Examples:
        ledgerkit template quickbooks > chart.csv
    """
    template = template_for(file_format)
    click.echo(template["csv_template"])

    if mapping:
        click.echo("")
        for header, field_name in template["field_mapping"].items():
            click.echo(f"# {header} -> {field_name}")


def register_commands(cli):
    """Register template command with main CLI."""
    cli.add_command(show_template)
