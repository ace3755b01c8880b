"""Chart-of-accounts import domain service."""

import base64
import binascii
import logging
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain.account_types import infer_account_type
from ledgerkit.domain.entities import FieldMapping, ImportResult, ImportSummary, ParsedAccount
from ledgerkit.domain.errors import ImportPayloadError, ValidationError
from ledgerkit.domain.formats import (
    AUTO_DETECT,
    build_field_mapping,
    coerce_field_mapping,
    detect_format,
    get_format,
)
from ledgerkit.domain.normalizer import normalize_rows
from ledgerkit.utils.csv_parser import parse_csv

logger = logging.getLogger(__name__)

BASE64_MARKER = "base64,"
CUSTOM_FORMAT = "custom"

TEXT_ENCODINGS = ("utf-8-sig", "cp1252")

# Inferred types below this confidence are held back for manual review
REVIEW_CONFIDENCE_THRESHOLD = 0.75


def decode_text(raw: bytes) -> str:
    """Decode file bytes as UTF-8, falling back to Windows-1252, then Latin-1."""
    for encoding in TEXT_ENCODINGS:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            logger.debug("File content is not %s", encoding)
    # Latin-1 maps every byte
    return raw.decode("latin-1")


def decode_payload(content: str) -> str:
    """Decode file content, unwrapping base64 data after a 'base64,' marker.

    Whitespace inside the base64 data (MIME line wrapping) is ignored, and
    the decoded bytes go through ``decode_text``.

    Raises:
        ImportPayloadError: If the base64 payload is invalid
    """
    if BASE64_MARKER not in content:
        return content

    encoded = "".join(content.split(BASE64_MARKER, 1)[1].split())
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, ValueError):
        raise ImportPayloadError("Invalid base64 file content")

    return decode_text(raw)


class ChartImportService:
    """Service for importing chart-of-accounts exports."""

    def __init__(self, db: Optional[Database] = None):
        """Initialize chart import service.

        Args:
            db: Database instance; only needed to commit imports
        """
        self.db = db

    def parse(
        self,
        content: str,
        file_format: str = AUTO_DETECT,
        field_mapping: Optional[dict[str, str]] = None,
        has_headers: bool = True,
        skip_rows: int = 0,
    ) -> ImportResult:
        """Parse an export into canonical account records.

        Args:
            content: File content, plain text or containing a base64 payload
            file_format: Registered format ID, or ``auto_detect``
            field_mapping: Explicit header -> field mapping; bypasses format
                detection and header mapping
            has_headers: Whether the first row after ``skip_rows`` is a header
            skip_rows: Number of leading rows to ignore

        Returns:
            ImportResult

        Raises:
            ImportPayloadError: If the payload cannot be decoded or has no rows
            ValidationError: If the format, mapping or options are invalid
        """
        if skip_rows < 0:
            raise ValidationError("skip_rows must not be negative")

        rows = parse_csv(decode_payload(content))
        logger.info("Parsed %d rows", len(rows))
        if not rows:
            raise ImportPayloadError("No data found in file")

        header_index = min(skip_rows, len(rows) - 1)
        header = rows[header_index] if has_headers else ()

        mapping: FieldMapping
        if field_mapping:
            mapping = coerce_field_mapping(field_mapping)
            detected_format = file_format if file_format != AUTO_DETECT else CUSTOM_FORMAT
            if detected_format != CUSTOM_FORMAT:
                get_format(detected_format)
        else:
            if file_format == AUTO_DETECT:
                detected_format = detect_format(rows[header_index])
            else:
                detected_format = get_format(file_format).id
            mapping = build_field_mapping(detected_format, header)
        logger.info("Using %s format with mapping %s", detected_format, mapping)

        accounts, errors, warnings = normalize_rows(
            rows, mapping, has_headers=has_headers, skip_rows=skip_rows
        )

        total_rows = max(0, len(rows) - skip_rows - (1 if has_headers else 0))
        logger.info(
            "Parsed %d accounts from %d rows (%d errors)", len(accounts), total_rows, len(errors)
        )
        for error in errors[:3]:
            logger.debug("Row %d: %s", error.row, error.message)

        return ImportResult(
            total_rows=total_rows,
            accounts=tuple(accounts),
            errors=tuple(errors),
            warnings=tuple(warnings),
            detected_format=detected_format,
            suggested_field_mapping=mapping,
        )

    def import_chart(
        self,
        content: str,
        file_format: str = AUTO_DETECT,
        field_mapping: Optional[dict[str, str]] = None,
        has_headers: bool = True,
        skip_rows: int = 0,
        preview: bool = True,
    ) -> tuple[ImportResult, Optional[ImportSummary]]:
        """Parse an export and, unless previewing, add it to the chart.

        Returns:
            Tuple of (import result, commit summary or None when previewing)

        Raises:
            ImportPayloadError: If the payload cannot be decoded or has no rows
            ValidationError: If options are invalid or no database is set
        """
        result = self.parse(
            content,
            file_format=file_format,
            field_mapping=field_mapping,
            has_headers=has_headers,
            skip_rows=skip_rows,
        )
        if preview:
            return result, None
        return result, self.commit(result.accounts)

    def commit(self, accounts: tuple[ParsedAccount, ...]) -> ImportSummary:
        """Write parsed accounts to the chart, skipping codes already present.

        Accounts whose type can only be guessed (inference confidence below
        ``REVIEW_CONFIDENCE_THRESHOLD``) are not written; their codes are
        returned in ``ImportSummary.review``.

        Raises:
            ValidationError: If the service has no database
        """
        if self.db is None:
            raise ValidationError("A database is required to commit an import")

        created = []
        skipped = []
        review = []
        seen = set()
        for account in accounts:
            if not account.code or account.code in seen:
                skipped.append(account.code)
                continue
            seen.add(account.code)

            if self.db.get_chart_account_by_code(account.code) is not None:
                skipped.append(account.code)
                continue

            inference = infer_account_type(account.type, account.name, account.balance)
            if inference.confidence < REVIEW_CONFIDENCE_THRESHOLD:
                logger.info(
                    "Holding back %s for review (%.2f): %s",
                    account.code,
                    inference.confidence,
                    inference.reasoning,
                )
                review.append(account.code)
                continue

            self.db.create_chart_account(
                code=account.code,
                name=account.name,
                account_type=inference.account_type,
                balance=account.balance,
                description=account.description,
                is_active=account.is_active,
                parent_code=account.parent_code,
            )
            created.append(account.code)

        logger.info(
            "Committed %d accounts, skipped %d, %d need review",
            len(created),
            len(skipped),
            len(review),
        )
        return ImportSummary(created=tuple(created), skipped=tuple(skipped), review=tuple(review))
