"""Chart-of-accounts domain service."""

from decimal import Decimal
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import Account as AccountEntity, AccountType
from ledgerkit.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    chart_account_not_found,
    duplicate_chart_account,
)
from ledgerkit.domain.account_types import parse_account_type
from ledgerkit.domain.normalizer import sanitize_code


class ChartOfAccountsService:
    """Service for managing the chart of accounts."""

    def __init__(self, db: Database):
        """Initialize chart of accounts service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        code: str,
        name: str,
        account_type: AccountType | str,
        posting_allowed: bool = True,
        balance: Decimal = Decimal("0"),
        description: Optional[str] = None,
        parent_code: Optional[str] = None,
    ) -> int:
        """Create a new chart account.

        Args:
            code: Account code, restricted to letters, digits, '-' and '_'
            name: Account name
            account_type: Account type (enum or its name, case-insensitive)
            posting_allowed: Whether journal postings may target this account
            balance: Opening balance
            description: Optional description
            parent_code: Optional parent account code

        Returns:
            Account ID

        Raises:
            ValidationError: If code, name or type are invalid
            ConflictError: If an account with the same code already exists
        """
        if not code or sanitize_code(code) != code:
            raise ValidationError(
                f"Invalid account code '{code}': use letters, digits, '-' and '_' only"
            )
        if not name or not name.strip():
            raise ValidationError("Account name must not be empty")

        account_type = parse_account_type(account_type)

        if self.db.get_chart_account_by_code(code) is not None:
            raise ConflictError(duplicate_chart_account(code))

        return self.db.create_chart_account(
            code=code,
            name=name.strip(),
            account_type=account_type,
            posting_allowed=posting_allowed,
            balance=balance,
            description=description,
            parent_code=parent_code,
        )

    def get_account(self, code: str) -> Optional[AccountEntity]:
        """Get chart account by code.

        Args:
            code: Account code

        Returns:
            Account entity or None if not found
        """
        return self.db.get_chart_account_by_code(code)

    def list_accounts(self) -> list[AccountEntity]:
        """List active chart accounts ordered by code.

        This is the chart snapshot handed to the classifier.

        Returns:
            List of account entities
        """
        return self.db.list_chart_accounts()

    def set_posting_allowed(self, code: str, posting_allowed: bool) -> None:
        """Allow or block postings to an account.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        if self.db.get_chart_account_by_code(code) is None:
            raise NotFoundError(chart_account_not_found(code))
        self.db.update_chart_account_posting(code, posting_allowed)

    def structure(self) -> dict[AccountType, list[AccountEntity]]:
        """Group the chart by account type, in account type order."""
        structure: dict[AccountType, list[AccountEntity]] = {t: [] for t in AccountType}
        for account in self.list_accounts():
            structure[account.type].append(account)
        return structure
