"""Mapping pattern history domain service."""

from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.entities import ClassificationRequest, MappingPattern, PrimaryAccount


class PatternHistoryService:
    """Records classifications so they can be reviewed by a person later.

    Patterns are only stored, never fed back into the classification rules.
    """

    def __init__(self, db: Database):
        """Initialize pattern history service.

        Args:
            db: Database instance
        """
        self.db = db

    def record(self, request: ClassificationRequest, primary_account: PrimaryAccount) -> int:
        """Record the account a request was classified to.

        Returns:
            Pattern ID
        """
        return self.db.record_mapping_pattern(
            vendor=request.vendor,
            category=request.category,
            mapped_account_code=primary_account.code,
            mapped_account_name=primary_account.name,
            confidence=primary_account.confidence,
            document_type=request.document_type,
        )

    def list_patterns(self, vendor: Optional[str] = None) -> list[MappingPattern]:
        """List recorded patterns, newest first."""
        return self.db.list_mapping_patterns(vendor=vendor)
