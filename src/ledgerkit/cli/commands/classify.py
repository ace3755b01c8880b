"""Line item classification command."""

import json

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.config import load_rules
from ledgerkit.domain.classifier import DOCUMENT_TYPES, ClassificationService
from ledgerkit.domain.entities import ClassificationRequest
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_amount


@click.command("classify")
@click.argument("description")
@click.option("--amount", required=True, help="Line item amount (e.g. 1,250.00)")
@click.option("--vendor", help="Vendor name")
@click.option("--category", help="Category hint from the document (e.g. 'Food')")
@click.option(
    "--document-type",
    default="receipt",
    show_default=True,
    type=click.Choice(DOCUMENT_TYPES),
    help="Source document type",
)
@click.option("--json", "as_json", is_flag=True, help="Print the classification as JSON")
@click.pass_context
def classify_line_item(
    ctx,
    description: str,
    amount: str,
    vendor: str | None,
    category: str | None,
    document_type: str,
    as_json: bool,
):
    """Classify a line item and show its journal entries.

    Examples:
        ledgerkit classify "vegetables" --amount 1250 --vendor "Fresh Valley Farms"
        ledgerkit classify "monthly rent" --amount 45,000.00 --document-type invoice
    """
    db = ctx.obj["db"]

    try:
        rules = load_rules(ctx.obj.get("rules_path"))
        service = ClassificationService(db, rules)
        request = ClassificationRequest(
            description=description,
            amount=parse_amount(amount),
            vendor=vendor,
            category=category,
            document_type=document_type,
        )
        outcome = service.classify(request)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)
        return

    result = outcome.result
    if as_json:
        payload = result.to_dict()
        payload["journal_entries"] = [entry.to_dict() for entry in outcome.journal_entries]
        payload["pattern_id"] = outcome.pattern_id
        click.echo(json.dumps(payload, indent=2))
        return

    primary = result.primary_account
    click.echo(f"\nAccount: {primary.code} {primary.name}")
    click.echo(f"  Type: {primary.type.value} ({primary.category})")
    click.echo(f"  Confidence: {primary.confidence:.2f} ({result.tier} rule)")

    click.echo("\nReasoning:")
    for line in result.reasoning:
        click.echo(f"  - {line}")
    for rule in result.business_rules:
        click.echo(f"  - {rule}")

    if result.alternative_accounts:
        click.echo("\nAlternatives:")
        for alt in result.alternative_accounts:
            click.echo(f"  {alt.code} {alt.name} ({alt.confidence:.2f}) - {alt.reason}")

    click.echo("\nJournal entries:")
    for entry in outcome.journal_entries:
        if entry.debit is not None:
            click.echo(f"  Dr {entry.account_code} {entry.account_name:30s} {entry.debit:>12,.2f}")
        else:
            click.echo(f"  Cr {entry.account_code} {entry.account_name:30s} {entry.credit:>12,.2f}")


def register_commands(cli):
    """Register classify command with main CLI."""
    cli.add_command(classify_line_item)
