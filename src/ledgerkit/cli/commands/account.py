"""Chart of accounts management commands."""

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import ChartOfAccountsService
from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.amount_parser import parse_amount


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("create")
@click.argument("code")
@click.argument("name")
@click.option(
    "--type",
    "account_type",
    required=True,
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    help="Account type",
)
@click.option(
    "--no-posting",
    is_flag=True,
    default=False,
    help="Mark as a summary account that cannot receive postings",
)
@click.option("--balance", default="0", help="Opening balance (e.g. 1,234.56 or (500.00))")
@click.option("--description", help="Account description")
@click.option("--parent", "parent_code", help="Parent account code")
@click.pass_context
def create_account(
    ctx,
    code: str,
    name: str,
    account_type: str,
    no_posting: bool,
    balance: str,
    description: str | None,
    parent_code: str | None,
):
    """Create a new chart account.

    Examples:
        ledgerkit account create 5001000 "Food Materials - Vegetables" --type COST_OF_SALES
        ledgerkit account create 6000000 "Operating Expenses" --type DIRECT_EXPENSE --no-posting
    """
    db = ctx.obj["db"]
    service = ChartOfAccountsService(db)

    try:
        account_id = service.create_account(
            code=code,
            name=name,
            account_type=account_type,
            posting_allowed=not no_posting,
            balance=parse_amount(balance),
            description=description,
            parent_code=parent_code,
        )
        click.echo(f"Created account '{code}' {name} (ID: {account_id})")
        if no_posting:
            click.echo("Postings disabled for this account")
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List all active chart accounts."""
    db = ctx.obj["db"]
    service = ChartOfAccountsService(db)

    accounts = service.list_accounts()
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nChart of accounts:")
    click.echo("-" * 90)
    for acc in accounts:
        posting = "" if acc.posting_allowed else " (no posting)"
        click.echo(
            f"{acc.code:10s} | {acc.name:30s} | {acc.type.value:21s} | "
            f"{acc.balance:>12,.2f}{posting}"
        )


@account_group.command("structure")
@click.pass_context
def show_structure(ctx):
    """Show the chart grouped by account type."""
    db = ctx.obj["db"]
    service = ChartOfAccountsService(db)

    structure = service.structure()
    for account_type, accounts in structure.items():
        click.echo(
            f"\n{account_type.category_label} ({account_type.code_range}): {len(accounts)}"
        )
        for acc in accounts:
            click.echo(f"  {acc.code} {acc.name}")


@account_group.command("posting")
@click.argument("code")
@click.option("--allow/--block", default=True, help="Allow or block postings")
@click.pass_context
def set_posting(ctx, code: str, allow: bool):
    """Allow or block postings to an account."""
    db = ctx.obj["db"]
    service = ChartOfAccountsService(db)

    try:
        service.set_posting_allowed(code, allow)
        click.echo(f"Postings {'allowed' if allow else 'blocked'} for account '{code}'")
    except DomainError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
