"""Abstract database interface.

The domain core reads the chart of accounts through this interface and writes
classification patterns for later review; nothing else is persisted.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from ledgerkit.domain.entities import Account, AccountType, MappingPattern


class Database(ABC):
    """Abstract database interface for ledgerkit."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Chart of accounts operations
    @abstractmethod
    def create_chart_account(
        self,
        code: str,
        name: str,
        account_type: AccountType,
        posting_allowed: bool = True,
        balance: Decimal = Decimal("0"),
        description: Optional[str] = None,
        is_active: bool = True,
        parent_code: Optional[str] = None,
    ) -> int:
        """Create a chart account. Returns account ID."""
        pass

    @abstractmethod
    def get_chart_account_by_code(self, code: str) -> Optional[Account]:
        """Get chart account by code."""
        pass

    @abstractmethod
    def list_chart_accounts(self, active_only: bool = True) -> list[Account]:
        """List chart accounts ordered by code."""
        pass

    @abstractmethod
    def update_chart_account_posting(self, code: str, posting_allowed: bool) -> None:
        """Allow or block postings to a chart account."""
        pass

    # Mapping pattern operations
    @abstractmethod
    def record_mapping_pattern(
        self,
        vendor: Optional[str],
        category: Optional[str],
        mapped_account_code: str,
        mapped_account_name: str,
        confidence: float,
        document_type: str,
    ) -> int:
        """Record a classification pattern. Returns pattern ID."""
        pass

    @abstractmethod
    def list_mapping_patterns(self, vendor: Optional[str] = None) -> list[MappingPattern]:
        """List recorded patterns, newest first, optionally filtered by vendor."""
        pass
