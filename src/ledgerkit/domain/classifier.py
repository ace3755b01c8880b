"""Line item classification domain service."""

import logging
from dataclasses import dataclass

from ledgerkit.database.base import Database
from ledgerkit.domain.account import ChartOfAccountsService
from ledgerkit.domain.classification import (
    DEFAULT_RULES,
    ClassificationEngine,
    ClassificationRules,
)
from ledgerkit.domain.entities import ClassificationRequest, ClassificationResult, JournalEntry
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.journal import generate_journal_entries
from ledgerkit.domain.patterns import PatternHistoryService

logger = logging.getLogger(__name__)

DOCUMENT_TYPES = ("receipt", "invoice", "expense", "purchase_order")


@dataclass(frozen=True)
class ClassificationOutcome:
    """Classification, its journal entries and the recorded pattern ID."""

    result: ClassificationResult
    journal_entries: tuple[JournalEntry, JournalEntry]
    pattern_id: int


class ClassificationService:
    """Service that classifies line items against the stored chart."""

    def __init__(self, db: Database, rules: ClassificationRules = DEFAULT_RULES):
        """Initialize classification service.

        Args:
            db: Database instance
            rules: Classification rule set
        """
        self.db = db
        self.engine = ClassificationEngine(rules)
        self.chart_service = ChartOfAccountsService(db)
        self.pattern_service = PatternHistoryService(db)

    def classify(self, request: ClassificationRequest) -> ClassificationOutcome:
        """Classify a line item, generate its entries and record the pattern.

        Args:
            request: Line item to classify

        Returns:
            ClassificationOutcome

        Raises:
            ValidationError: If the request is malformed
        """
        if not request.description or not request.description.strip():
            raise ValidationError("Description must not be empty")
        if request.document_type not in DOCUMENT_TYPES:
            raise ValidationError(
                f"Invalid document type '{request.document_type}'. "
                f"Must be one of: {', '.join(DOCUMENT_TYPES)}"
            )

        chart = self.chart_service.list_accounts()
        result = self.engine.classify(request, chart)
        entries = generate_journal_entries(
            result.primary_account,
            request.amount,
            vendor=request.vendor,
            description=request.description,
        )
        pattern_id = self.pattern_service.record(request, result.primary_account)

        logger.info(
            "Classified line item to %s (%s tier, confidence %.2f)",
            result.primary_account.code,
            result.tier,
            result.primary_account.confidence,
        )
        return ClassificationOutcome(result=result, journal_entries=entries, pattern_id=pattern_id)
