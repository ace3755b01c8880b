"""Rule-based classification of line items against a chart of accounts.

The engine runs a fixed cascade of tiers (vendor, keyword, category,
default); the first tier that resolves an account decides. Rule tables are
passed in as an immutable ``ClassificationRules`` object, so the engine has
no global state and identical inputs always give identical results.
"""

import logging
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Mapping, Optional, Sequence

from ledgerkit.domain.entities import (
    Account,
    AccountType,
    AlternativeAccount,
    ClassificationRequest,
    ClassificationResult,
    PrimaryAccount,
)

logger = logging.getLogger(__name__)

MAX_ALTERNATIVES = 3
ALTERNATIVE_CONFIDENCE_STEP = 0.1


@dataclass(frozen=True)
class VendorRule:
    """Known vendor mapped to an account type."""

    account_type: AccountType
    confidence: float
    subtype: Optional[str] = None


@dataclass(frozen=True)
class KeywordRule:
    """Description keyword mapped to a specific account code."""

    keyword: str
    account_code: str
    account_type: AccountType
    confidence: float


@dataclass(frozen=True)
class ClassificationRules:
    """Immutable rule set driving the classification cascade."""

    vendors: Mapping[str, VendorRule] = field(default_factory=dict)
    keywords: tuple[KeywordRule, ...] = ()
    food_category_terms: tuple[str, ...] = ("food", "ingredient")
    category_confidence: float = 0.75
    default_confidence: float = 0.60
    default_account_code: str = "6000000"
    default_account_name: str = "General Expense"

    def __post_init__(self):
        vendors = {name.lower(): rule for name, rule in self.vendors.items()}
        object.__setattr__(self, "vendors", MappingProxyType(vendors))
        keywords = tuple(replace(rule, keyword=rule.keyword.lower()) for rule in self.keywords)
        object.__setattr__(self, "keywords", keywords)
        if isinstance(self.food_category_terms, str):
            raise TypeError("food_category_terms must be a sequence of strings, not a string")
        terms = tuple(term.lower() for term in self.food_category_terms)
        object.__setattr__(self, "food_category_terms", terms)

    def vendor_rule(self, vendor: str) -> Optional[VendorRule]:
        return self.vendors.get(vendor.strip().lower())


DEFAULT_RULES = ClassificationRules(
    vendors={
        "fresh valley farms": VendorRule(AccountType.COST_OF_SALES, 0.95, "vegetables"),
        "premium meats": VendorRule(AccountType.COST_OF_SALES, 0.95, "meat"),
        "dairy fresh": VendorRule(AccountType.COST_OF_SALES, 0.95, "dairy"),
        "electricity board": VendorRule(AccountType.DIRECT_EXPENSE, 0.90, "utilities"),
        "gas supplier": VendorRule(AccountType.DIRECT_EXPENSE, 0.90, "utilities"),
        "zomato": VendorRule(AccountType.DIRECT_EXPENSE, 0.85, "platform_fees"),
        "swiggy": VendorRule(AccountType.DIRECT_EXPENSE, 0.85, "platform_fees"),
        "google ads": VendorRule(AccountType.INDIRECT_EXPENSE, 0.90, "marketing"),
        "insurance company": VendorRule(AccountType.INDIRECT_EXPENSE, 0.90, "insurance"),
    },
    keywords=(
        KeywordRule("vegetables", "5001000", AccountType.COST_OF_SALES, 0.90),
        KeywordRule("spices", "5002000", AccountType.COST_OF_SALES, 0.90),
        KeywordRule("meat", "5005000", AccountType.COST_OF_SALES, 0.90),
        KeywordRule("dairy", "5006000", AccountType.COST_OF_SALES, 0.90),
        KeywordRule("rent", "6003000", AccountType.DIRECT_EXPENSE, 0.95),
        KeywordRule("salary", "6001000", AccountType.DIRECT_EXPENSE, 0.95),
        KeywordRule("wages", "6002000", AccountType.DIRECT_EXPENSE, 0.95),
        KeywordRule("electricity", "6004000", AccountType.DIRECT_EXPENSE, 0.90),
        KeywordRule("gas", "6005000", AccountType.DIRECT_EXPENSE, 0.90),
        KeywordRule("marketing", "7001000", AccountType.INDIRECT_EXPENSE, 0.85),
        KeywordRule("advertising", "7001000", AccountType.INDIRECT_EXPENSE, 0.85),
        KeywordRule("insurance", "7002000", AccountType.INDIRECT_EXPENSE, 0.85),
        KeywordRule("tax", "8001000", AccountType.TAX_EXPENSE, 0.95),
        KeywordRule("legal", "9001000", AccountType.EXTRAORDINARY_EXPENSE, 0.80),
    ),
)


@dataclass(frozen=True)
class TierMatch:
    """Account chosen by a tier, with its provenance."""

    account: Account
    confidence: float
    reasoning: str
    business_rule: str


@dataclass(frozen=True)
class ClassificationTier:
    """One stage of the cascade: a predicate plus a resolver.

    The resolver only runs when the predicate holds and may still return
    None, in which case the next tier is tried.
    """

    name: str
    applies: Callable[[ClassificationRequest], bool]
    resolve: Callable[[ClassificationRequest, Sequence[Account]], Optional[TierMatch]]


def _first_posting_account(
    chart: Sequence[Account], account_type: AccountType
) -> Optional[Account]:
    for account in chart:
        if account.type == account_type and account.posting_allowed:
            return account
    return None


def _clamp(value: float) -> float:
    return round(min(1.0, max(0.0, value)), 4)


class ClassificationEngine:
    """Classify line items with an ordered rule cascade."""

    def __init__(self, rules: ClassificationRules = DEFAULT_RULES):
        """Initialize classification engine.

        Args:
            rules: Rule set to classify with
        """
        self.rules = rules
        self.tiers: tuple[ClassificationTier, ...] = (
            ClassificationTier("vendor", self._has_vendor, self._resolve_vendor),
            ClassificationTier("keyword", self._has_description, self._resolve_keyword),
            ClassificationTier("category", self._has_food_category, self._resolve_category),
            ClassificationTier("default", lambda request: True, self._resolve_default),
        )

    def classify(
        self, request: ClassificationRequest, chart: Sequence[Account]
    ) -> ClassificationResult:
        """Pick the primary account for a line item.

        Args:
            request: Line item to classify
            chart: Chart-of-accounts snapshot, in chart order

        Returns:
            ClassificationResult; never fails, at worst the default tier's
            low-confidence generic expense
        """
        for tier in self.tiers:
            if not tier.applies(request):
                continue
            match = tier.resolve(request, chart)
            if match is not None:
                logger.debug(
                    "Classified %r via %s tier as %s", request.description, tier.name, match.account.code
                )
                return self._build_result(tier.name, match, chart)

        # Unreachable while the default tier always resolves
        raise AssertionError("default classification tier did not resolve")

    def _has_vendor(self, request: ClassificationRequest) -> bool:
        return bool(request.vendor)

    def _resolve_vendor(
        self, request: ClassificationRequest, chart: Sequence[Account]
    ) -> Optional[TierMatch]:
        rule = self.rules.vendor_rule(request.vendor)
        if rule is None:
            return None
        account = _first_posting_account(chart, rule.account_type)
        if account is None:
            return None
        return TierMatch(
            account=account,
            confidence=rule.confidence,
            reasoning=f'Vendor "{request.vendor}" is known {rule.account_type.value} supplier',
            business_rule=(
                f"Vendor Rule: {rule.account_type.value} vendors map to range "
                f"{rule.account_type.code_range}"
            ),
        )

    def _has_description(self, request: ClassificationRequest) -> bool:
        return bool(request.description)

    def _resolve_keyword(
        self, request: ClassificationRequest, chart: Sequence[Account]
    ) -> Optional[TierMatch]:
        description = request.description.lower()
        by_code = {}
        for account in chart:
            by_code.setdefault(account.code, account)

        for rule in self.rules.keywords:
            if rule.keyword not in description:
                continue
            account = by_code.get(rule.account_code)
            if account is None:
                continue
            return TierMatch(
                account=account,
                confidence=rule.confidence,
                reasoning=(
                    f'Description contains "{rule.keyword}" indicating {rule.account_type.value}'
                ),
                business_rule=f'Keyword Rule: "{rule.keyword}" maps to {rule.account_type.value}',
            )
        return None

    def _has_food_category(self, request: ClassificationRequest) -> bool:
        if not request.category:
            return False
        category = request.category.lower()
        return any(term in category for term in self.rules.food_category_terms)

    def _resolve_category(
        self, request: ClassificationRequest, chart: Sequence[Account]
    ) -> Optional[TierMatch]:
        account = _first_posting_account(chart, AccountType.COST_OF_SALES)
        if account is None:
            return None
        return TierMatch(
            account=account,
            confidence=self.rules.category_confidence,
            reasoning=f'Category "{request.category}" indicates food-related expense',
            business_rule="Category Rule: Food categories default to Cost of Sales",
        )

    def _resolve_default(
        self, request: ClassificationRequest, chart: Sequence[Account]
    ) -> TierMatch:
        account = _first_posting_account(chart, AccountType.DIRECT_EXPENSE)
        if account is not None:
            reasoning = "No specific rule matched, using default Direct Expense account"
        else:
            account = Account(
                code=self.rules.default_account_code,
                name=self.rules.default_account_name,
                type=AccountType.DIRECT_EXPENSE,
            )
            reasoning = "No specific rule matched and chart has no Direct Expense account"
        return TierMatch(
            account=account,
            confidence=self.rules.default_confidence,
            reasoning=reasoning,
            business_rule="Fallback Rule: Unknown expenses default to Direct Expense",
        )

    def _build_result(
        self, tier_name: str, match: TierMatch, chart: Sequence[Account]
    ) -> ClassificationResult:
        primary = match.account
        confidence = _clamp(match.confidence)

        alternatives = []
        for account in chart:
            if len(alternatives) == MAX_ALTERNATIVES:
                break
            if account.code == primary.code or not account.posting_allowed:
                continue
            alternatives.append(
                AlternativeAccount(
                    code=account.code,
                    name=account.name,
                    confidence=_clamp(confidence - ALTERNATIVE_CONFIDENCE_STEP),
                    reason=f"Alternative {account.type.value} account",
                )
            )

        return ClassificationResult(
            primary_account=PrimaryAccount(
                code=primary.code,
                name=primary.name,
                type=primary.type,
                category=primary.type.category_label,
                confidence=confidence,
            ),
            alternative_accounts=tuple(alternatives),
            reasoning=(match.reasoning,),
            business_rules=(match.business_rule,),
            tier=tier_name,
        )
