"""Rule-based account type inference for imported accounts."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import ValidationError


@dataclass(frozen=True)
class TypeInference:
    """Inferred account type with confidence and reasoning."""

    account_type: AccountType
    confidence: float
    reasoning: str


def _contains(text: str, *needles: str) -> bool:
    return any(needle in text for needle in needles)


def infer_account_type(
    original_type: Optional[str], name: str, balance: Optional[Decimal] = None
) -> TypeInference:
    """Infer an account type from an imported row.

    Checks asset, liability, equity, revenue, cost of sales and expense
    patterns in that order. A credit (negative) balance hints at revenue and
    a debit balance at an expense.

    Args:
        original_type: Type text from the source system, if any
        name: Account name
        balance: Account balance, if known

    Returns:
        TypeInference, DIRECT_EXPENSE at 0.50 when nothing matches
    """
    if original_type:
        normalized = "_".join(original_type.upper().split())
        if normalized in AccountType.__members__:
            return TypeInference(AccountType[normalized], 1.0, "Source type is a ledger account type")

    name = name.lower()
    orig_type = (original_type or "").lower()

    if _contains(orig_type, "asset", "plant", "sundry debtors") or _contains(
        name, "cash", "bank", "receivable", "inventory", "equipment", "machinery", "debtors"
    ):
        return TypeInference(AccountType.ASSET, 0.95, "Common asset account patterns detected")

    if _contains(orig_type, "liability", "sundry creditors") or _contains(
        name, "payable", "creditors", "loan", "accrued", "debt"
    ):
        return TypeInference(AccountType.LIABILITY, 0.95, "Common liability account patterns detected")

    if _contains(orig_type, "equity") or _contains(name, "capital", "retained", "owner", "stock"):
        return TypeInference(AccountType.EQUITY, 0.95, "Common equity account patterns detected")

    if (
        _contains(orig_type, "revenue", "income")
        or _contains(name, "sales", "revenue", "income")
        or (balance is not None and balance < 0)
    ):
        return TypeInference(
            AccountType.REVENUE, 0.90, "Revenue patterns or credit balance detected"
        )

    if _contains(name, "cost of", "cogs", "food cost", "beverage cost", "materials"):
        return TypeInference(AccountType.COST_OF_SALES, 0.92, "Cost of sales patterns detected")

    if (
        _contains(orig_type, "expense")
        or _contains(name, "expense", "wages", "salary", "rent", "utilities")
        or (balance is not None and balance > 0)
    ):
        if _contains(name, "tax", "fica"):
            return TypeInference(AccountType.TAX_EXPENSE, 0.94, "Tax-related expense detected")
        if _contains(name, "marketing", "insurance", "office", "administrative"):
            return TypeInference(
                AccountType.INDIRECT_EXPENSE, 0.88, "Indirect expense patterns detected"
            )
        return TypeInference(AccountType.DIRECT_EXPENSE, 0.85, "General expense patterns detected")

    return TypeInference(
        AccountType.DIRECT_EXPENSE, 0.50, "Default mapping - requires manual review"
    )


def parse_account_type(value: AccountType | str) -> AccountType:
    """Parse an account type name case-insensitively.

    Raises:
        ValidationError: If the value names no account type
    """
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType("_".join(str(value).upper().split()))
    except ValueError:
        raise ValidationError(
            f"Invalid account type '{value}'. "
            f"Must be one of: {', '.join(t.value for t in AccountType)}"
        )
