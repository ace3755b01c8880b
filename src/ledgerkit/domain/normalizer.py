"""Normalize parsed CSV rows into canonical account records."""

import re
from decimal import Decimal
from typing import Any, Sequence

from ledgerkit.domain.entities import CanonicalField, FieldMapping, ParsedAccount, RowIssue
from ledgerkit.domain.errors import missing_code_and_name
from ledgerkit.utils.amount_parser import parse_balance

MAX_DERIVED_CODE_LENGTH = 20

ACTIVE_TOKENS = frozenset({"true", "active", "yes", "1"})
INACTIVE_TOKENS = frozenset({"false", "inactive", "no", "0"})

_INVALID_CODE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def parse_active(value: str) -> bool:
    """Map common boolean spellings to a bool, defaulting to active."""
    lowered = value.strip().lower()
    if lowered in ACTIVE_TOKENS:
        return True
    if lowered in INACTIVE_TOKENS:
        return False
    return True


def parse_level(value: str) -> int:
    """Parse a hierarchy level, defaulting to 0."""
    try:
        return int(value.strip())
    except ValueError:
        return 0


def sanitize_code(code: str) -> str:
    """Remove every character outside [A-Za-z0-9_-]."""
    return _INVALID_CODE_CHARS.sub("", code)


def clean_field_value(value: str, canonical: CanonicalField) -> Any:
    """Coerce a raw cell into the type of its canonical field."""
    if canonical is CanonicalField.BALANCE:
        return parse_balance(value)
    if canonical is CanonicalField.IS_ACTIVE:
        return parse_active(value)
    if canonical is CanonicalField.LEVEL:
        return parse_level(value)
    return value.strip()


def normalize_rows(
    rows: Sequence[Sequence[str]],
    field_mapping: FieldMapping,
    has_headers: bool = True,
    skip_rows: int = 0,
) -> tuple[list[ParsedAccount], list[RowIssue], list[RowIssue]]:
    """Turn parsed rows into account records.

    A bad row never aborts the import: it is reported in the error list and
    the remaining rows are still processed.

    Args:
        rows: Parsed rows, including any header and skipped rows
        field_mapping: Header (or ``column_N`` key) -> canonical field
        has_headers: Whether the first row after ``skip_rows`` is a header
        skip_rows: Number of leading rows to ignore

    Returns:
        Tuple of (accounts, errors, warnings)
    """
    accounts: list[ParsedAccount] = []
    errors: list[RowIssue] = []
    warnings: list[RowIssue] = []

    start_row = skip_rows
    headers: Sequence[str] = ()
    if has_headers and len(rows) > skip_rows:
        headers = rows[skip_rows]
        start_row = skip_rows + 1

    for index in range(start_row, len(rows)):
        row = rows[index]
        row_num = index + 1

        # Skip empty rows
        if all(not cell.strip() for cell in row):
            continue

        if has_headers:
            raw_data = {header: row[i] for i, header in enumerate(headers) if i < len(row)}
            if len(row) < len(headers):
                warnings.append(
                    RowIssue(
                        row=row_num,
                        message=f"Row has {len(row)} fields but header has {len(headers)}",
                        raw_data=raw_data,
                    )
                )
        else:
            raw_data = {f"column_{i}": value for i, value in enumerate(row)}

        values: dict[CanonicalField, Any] = {}
        for source, canonical in field_mapping.items():
            raw_value = raw_data.get(source)
            # Empty cells count as absent
            if raw_value is None or not raw_value.strip():
                continue
            values[canonical] = clean_field_value(raw_value, canonical)

        code = values.get(CanonicalField.CODE, "")
        name = values.get(CanonicalField.NAME, "")

        if not code and not name:
            errors.append(RowIssue(row=row_num, message=missing_code_and_name(), raw_data=raw_data))
            continue

        if not code:
            code = name[:MAX_DERIVED_CODE_LENGTH]
            warnings.append(
                RowIssue(row=row_num, message=f"Code derived from name: '{code}'", raw_data=raw_data)
            )
        elif not name:
            name = code
            warnings.append(
                RowIssue(row=row_num, message=f"Name derived from code: '{code}'", raw_data=raw_data)
            )

        sanitized = sanitize_code(code)
        if sanitized != code:
            warnings.append(
                RowIssue(
                    row=row_num,
                    message=f"Code '{code}' sanitized to '{sanitized}'",
                    raw_data=raw_data,
                )
            )

        accounts.append(
            ParsedAccount(
                code=sanitized,
                name=name,
                source_row_number=row_num,
                raw_data=raw_data,
                type=values.get(CanonicalField.TYPE),
                category=values.get(CanonicalField.CATEGORY),
                description=values.get(CanonicalField.DESCRIPTION),
                balance=values.get(CanonicalField.BALANCE, Decimal("0")),
                is_active=values.get(CanonicalField.IS_ACTIVE, True),
                parent_code=values.get(CanonicalField.PARENT_CODE),
                level=values.get(CanonicalField.LEVEL, 0),
            )
        )

    return accounts, errors, warnings
