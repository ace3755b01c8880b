"""Domain model entities for ledgerkit.

These are pure data classes representing business concepts, independent of
database schema. Import and classification results are built once per call
and never mutated afterwards.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional


class CanonicalField(str, Enum):
    """Normalized account attributes every export format is mapped onto."""

    CODE = "code"
    NAME = "name"
    TYPE = "type"
    CATEGORY = "category"
    DESCRIPTION = "description"
    BALANCE = "balance"
    IS_ACTIVE = "is_active"
    PARENT_CODE = "parent_code"
    LEVEL = "level"


FieldMapping = dict[str, CanonicalField]


def _freeze_mapping(instance: Any, name: str) -> None:
    """Replace a mapping field of a frozen dataclass with a read-only copy."""
    object.__setattr__(instance, name, MappingProxyType(dict(getattr(instance, name))))


class AccountType(str, Enum):
    """Chart-of-accounts account types."""

    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    EQUITY = "EQUITY"
    REVENUE = "REVENUE"
    COST_OF_SALES = "COST_OF_SALES"
    DIRECT_EXPENSE = "DIRECT_EXPENSE"
    INDIRECT_EXPENSE = "INDIRECT_EXPENSE"
    TAX_EXPENSE = "TAX_EXPENSE"
    EXTRAORDINARY_EXPENSE = "EXTRAORDINARY_EXPENSE"

    @property
    def category_label(self) -> str:
        """Human-readable category label, e.g. 'Cost of Sales'."""
        return _CATEGORY_LABELS[self]

    @property
    def code_range(self) -> str:
        """Account code range reserved for this type."""
        first_digit = list(AccountType).index(self) + 1
        return f"{first_digit}000000-{first_digit}999999"


_CATEGORY_LABELS = {
    AccountType.ASSET: "Assets",
    AccountType.LIABILITY: "Liabilities",
    AccountType.EQUITY: "Equity",
    AccountType.REVENUE: "Revenue",
    AccountType.COST_OF_SALES: "Cost of Sales",
    AccountType.DIRECT_EXPENSE: "Direct Expenses",
    AccountType.INDIRECT_EXPENSE: "Indirect Expenses",
    AccountType.TAX_EXPENSE: "Tax Expenses",
    AccountType.EXTRAORDINARY_EXPENSE: "Extraordinary Expenses",
}


@dataclass(frozen=True)
class ParsedAccount:
    """Account row normalized from an external export."""

    code: str
    name: str
    source_row_number: int
    raw_data: Mapping[str, str]
    type: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    balance: Decimal = Decimal("0")
    is_active: bool = True
    parent_code: Optional[str] = None
    level: int = 0

    def __post_init__(self):
        _freeze_mapping(self, "raw_data")

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "name": self.name,
            "type": self.type,
            "category": self.category,
            "description": self.description,
            "balance": str(self.balance),
            "is_active": self.is_active,
            "parent_code": self.parent_code,
            "level": self.level,
            "source_row_number": self.source_row_number,
            "raw_data": dict(self.raw_data),
        }


@dataclass(frozen=True)
class RowIssue:
    """Row-level error or warning collected during an import."""

    row: int
    message: str
    raw_data: Mapping[str, str]

    def __post_init__(self):
        _freeze_mapping(self, "raw_data")

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "message": self.message, "raw_data": dict(self.raw_data)}


@dataclass(frozen=True)
class ImportResult:
    """Outcome of parsing one chart-of-accounts export."""

    total_rows: int
    accounts: tuple[ParsedAccount, ...]
    errors: tuple[RowIssue, ...]
    warnings: tuple[RowIssue, ...]
    detected_format: str
    suggested_field_mapping: Mapping[str, CanonicalField]

    def __post_init__(self):
        _freeze_mapping(self, "suggested_field_mapping")

    @property
    def parsed_accounts(self) -> int:
        return len(self.accounts)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to plain JSON-compatible types."""
        return {
            "total_rows": self.total_rows,
            "parsed_accounts": self.parsed_accounts,
            "accounts": [account.to_dict() for account in self.accounts],
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
            "detected_format": self.detected_format,
            "suggested_field_mapping": {
                header: canonical.value
                for header, canonical in self.suggested_field_mapping.items()
            },
        }


@dataclass(frozen=True)
class ImportSummary:
    """Result of writing parsed accounts into the chart of accounts."""

    created: tuple[str, ...]
    skipped: tuple[str, ...]
    review: tuple[str, ...] = ()


@dataclass(frozen=True)
class Account:
    """Chart-of-accounts entry domain entity."""

    code: str
    name: str
    type: AccountType
    posting_allowed: bool = True
    balance: Decimal = Decimal("0")
    id: Optional[int] = None
    description: Optional[str] = None
    is_active: bool = True
    parent_code: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class ClassificationRequest:
    """Free-text line item to classify against a chart of accounts."""

    description: str
    amount: Decimal
    vendor: Optional[str] = None
    category: Optional[str] = None
    document_type: str = "receipt"
    base_confidence: float = 0.8


@dataclass(frozen=True)
class PrimaryAccount:
    """Account chosen by the classification cascade."""

    code: str
    name: str
    type: AccountType
    category: str
    confidence: float


@dataclass(frozen=True)
class AlternativeAccount:
    """Runner-up account suggestion."""

    code: str
    name: str
    confidence: float
    reason: str


@dataclass(frozen=True)
class ClassificationResult:
    """Classification decision with its explanatory trail."""

    primary_account: PrimaryAccount
    alternative_accounts: tuple[AlternativeAccount, ...]
    reasoning: tuple[str, ...]
    business_rules: tuple[str, ...]
    tier: str

    def to_dict(self) -> dict[str, Any]:
        primary = self.primary_account
        return {
            "primary_account": {
                "code": primary.code,
                "name": primary.name,
                "type": primary.type.value,
                "category": primary.category,
                "confidence": primary.confidence,
            },
            "alternative_accounts": [
                {
                    "code": alt.code,
                    "name": alt.name,
                    "confidence": alt.confidence,
                    "reason": alt.reason,
                }
                for alt in self.alternative_accounts
            ],
            "reasoning": list(self.reasoning),
            "business_rules": list(self.business_rules),
            "tier": self.tier,
        }


@dataclass(frozen=True)
class JournalEntry:
    """One side of a journal posting. Exactly one of debit/credit is set."""

    account_code: str
    account_name: str
    description: str
    debit: Optional[Decimal] = None
    credit: Optional[Decimal] = None

    def to_dict(self) -> dict[str, Any]:
        entry = {
            "account_code": self.account_code,
            "account_name": self.account_name,
            "description": self.description,
        }
        if self.debit is not None:
            entry["debit"] = str(self.debit)
        if self.credit is not None:
            entry["credit"] = str(self.credit)
        return entry


@dataclass(frozen=True)
class MappingPattern:
    """Recorded classification kept for later human review."""

    id: int
    vendor: Optional[str]
    category: Optional[str]
    mapped_account_code: str
    mapped_account_name: str
    confidence: float
    document_type: str
    created_at: datetime
