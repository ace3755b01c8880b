"""Journal entry generation for classified line items."""

from decimal import Decimal
from typing import Optional

from ledgerkit.domain.entities import JournalEntry, PrimaryAccount

ACCOUNTS_PAYABLE_CODE = "2000001"
ACCOUNTS_PAYABLE_NAME = "Accounts Payable - Trade"


def generate_journal_entries(
    primary_account: PrimaryAccount,
    amount: Decimal,
    vendor: Optional[str] = None,
    description: Optional[str] = None,
) -> tuple[JournalEntry, JournalEntry]:
    """Build the balanced debit/credit pair for a classified line item.

    The classified account is debited and trade accounts payable credited
    with the same amount.

    Args:
        primary_account: Account chosen by the classifier
        amount: Line item amount
        vendor: Vendor name for the payable description
        description: Line item description for the debit side

    Returns:
        Tuple of (debit entry, credit entry)
    """
    amount = Decimal(amount)
    debit = JournalEntry(
        account_code=primary_account.code,
        account_name=primary_account.name,
        debit=amount,
        description=description or "Generated entry",
    )
    credit = JournalEntry(
        account_code=ACCOUNTS_PAYABLE_CODE,
        account_name=ACCOUNTS_PAYABLE_NAME,
        credit=amount,
        description=f"Payment due: {vendor or 'Vendor'}",
    )
    return debit, credit
