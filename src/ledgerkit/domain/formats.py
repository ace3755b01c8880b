"""Registry of known accounting software export formats.

Each format carries a detection signature (header tokens that must all be
present) and an ordered list of header rules mapping source columns onto
canonical account fields. Detection and mapping both resolve through
``get_format`` so the per-format knowledge lives in exactly one place.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ledgerkit.domain.entities import CanonicalField, FieldMapping
from ledgerkit.domain.errors import ValidationError, unknown_canonical_field, unknown_format

logger = logging.getLogger(__name__)

AUTO_DETECT = "auto_detect"
GENERIC = "generic"

F = CanonicalField


@dataclass(frozen=True)
class ExportFormat:
    """Known export format."""

    id: str
    label: str
    signature: frozenset[str]
    header_rules: tuple[tuple[str, CanonicalField], ...]

    def lookup(self, header: str) -> Optional[CanonicalField]:
        """Return the canonical field for an exact header pattern."""
        for pattern, canonical in self.header_rules:
            if pattern == header:
                return canonical
        return None

    def matches(self, header_text: str) -> bool:
        """Return True if every signature token occurs in the header text."""
        return bool(self.signature) and all(token in header_text for token in self.signature)


# Ordered by detection priority; generic has no signature and always comes last.
FORMATS: dict[str, ExportFormat] = {
    fmt.id: fmt
    for fmt in (
        ExportFormat(
            id="quickbooks",
            label="QuickBooks",
            signature=frozenset({"account code", "detail type"}),
            header_rules=(
                ("Account Code", F.CODE),
                ("Account", F.NAME),
                ("Type", F.TYPE),
                ("Detail Type", F.CATEGORY),
                ("Description", F.DESCRIPTION),
                ("Balance", F.BALANCE),
                ("Active", F.IS_ACTIVE),
            ),
        ),
        ExportFormat(
            id="xero",
            label="Xero",
            signature=frozenset({"code", "tax type"}),
            header_rules=(
                ("Code", F.CODE),
                ("Name", F.NAME),
                ("Type", F.TYPE),
                ("Tax Type", F.CATEGORY),
                ("Description", F.DESCRIPTION),
                ("Balance", F.BALANCE),
                ("Status", F.IS_ACTIVE),
            ),
        ),
        ExportFormat(
            id="sage",
            label="Sage",
            signature=frozenset({"a/c", "department"}),
            header_rules=(
                ("A/C", F.CODE),
                ("Name", F.NAME),
                ("Type", F.TYPE),
                ("Department", F.CATEGORY),
                ("Balance", F.BALANCE),
            ),
        ),
        ExportFormat(
            id="tally",
            label="Tally",
            signature=frozenset({"guid", "primarygroup", "closing_balance"}),
            header_rules=(
                ("guid", F.CODE),
                ("name", F.NAME),
                ("gl code name", F.NAME),
                ("parent", F.TYPE),
                ("primarygroup", F.CATEGORY),
                ("closing_balance", F.BALANCE),
                ("opening_balance", F.BALANCE),
                ("description", F.DESCRIPTION),
                ("notes", F.DESCRIPTION),
            ),
        ),
        ExportFormat(
            id=GENERIC,
            label="Generic CSV",
            signature=frozenset(),
            header_rules=(
                ("code", F.CODE),
                ("account_code", F.CODE),
                ("account_number", F.CODE),
                ("guid", F.CODE),
                ("name", F.NAME),
                ("account_name", F.NAME),
                ("title", F.NAME),
                ("type", F.TYPE),
                ("account_type", F.TYPE),
                ("category", F.CATEGORY),
                ("parent", F.TYPE),
                ("primarygroup", F.CATEGORY),
                ("description", F.DESCRIPTION),
                ("notes", F.DESCRIPTION),
                ("balance", F.BALANCE),
                ("current_balance", F.BALANCE),
                ("opening_balance", F.BALANCE),
                ("closing_balance", F.BALANCE),
                ("active", F.IS_ACTIVE),
                ("is_active", F.IS_ACTIVE),
                ("status", F.IS_ACTIVE),
                ("parent_code", F.PARENT_CODE),
                ("level", F.LEVEL),
            ),
        ),
    )
}

# Substring heuristics for headers no table knows, first keyword wins.
HEADER_KEYWORDS: tuple[tuple[tuple[str, ...], CanonicalField], ...] = (
    (("code", "number"), F.CODE),
    (("name", "title"), F.NAME),
    (("type", "category"), F.TYPE),
    (("description",), F.DESCRIPTION),
    (("balance",), F.BALANCE),
)


def get_format(format_id: str) -> ExportFormat:
    """Get a registered format by ID.

    Raises:
        ValidationError: If the format is not registered
    """
    fmt = FORMATS.get(format_id)
    if fmt is None:
        raise ValidationError(unknown_format(format_id, list(FORMATS) + [AUTO_DETECT]))
    return fmt


def detect_format(header: Sequence[str]) -> str:
    """Guess which accounting tool produced an export from its header row.

    Args:
        header: Header row fields

    Returns:
        Format ID, ``generic`` when no signature matches
    """
    header_text = "|".join(header).lower()
    for fmt in FORMATS.values():
        if fmt.matches(header_text):
            logger.debug("Header matched %s signature", fmt.id)
            return fmt.id
    return GENERIC


def normalize_header(header: str) -> str:
    """Lowercase a header and replace whitespace runs with underscores."""
    return "_".join(header.lower().split())


def resolve_header(fmt: ExportFormat, header: str) -> Optional[CanonicalField]:
    """Resolve one header cell to a canonical field.

    Tries the exact header, then its normalized form, against the format's
    table, then falls back to keyword heuristics.
    """
    canonical = fmt.lookup(header)
    if canonical is not None:
        return canonical

    normalized = normalize_header(header)
    canonical = fmt.lookup(normalized)
    if canonical is not None:
        return canonical

    for keywords, keyword_field in HEADER_KEYWORDS:
        if any(keyword in normalized for keyword in keywords):
            return keyword_field
    return None


def build_field_mapping(format_id: str, header: Sequence[str]) -> FieldMapping:
    """Build a header -> canonical field mapping for a format.

    Headers that resolve to nothing are left out; their columns are ignored
    during normalization.

    Args:
        format_id: Registered format ID
        header: Header row fields

    Returns:
        Field mapping in header order

    Raises:
        ValidationError: If the format is not registered
    """
    fmt = get_format(format_id)
    mapping: FieldMapping = {}
    for cell in header:
        canonical = resolve_header(fmt, cell)
        if canonical is not None:
            mapping[cell] = canonical
    return mapping


def coerce_field_mapping(mapping: dict[str, str]) -> FieldMapping:
    """Validate a caller-supplied mapping of header -> field name.

    Raises:
        ValidationError: If a target is not a canonical field
    """
    known = [member.value for member in CanonicalField]
    result: FieldMapping = {}
    for header, field_name in mapping.items():
        try:
            result[header] = CanonicalField(field_name)
        except ValueError:
            raise ValidationError(unknown_canonical_field(field_name, known))
    return result


# Import templates offered to users preparing a file by hand.
TEMPLATES: dict[str, dict[str, list]] = {
    "quickbooks": {
        "headers": ["Account Code", "Account", "Type", "Detail Type", "Description", "Balance", "Active"],
        "example_rows": [
            ["1000", "Cash - Checking", "Bank", "Checking", "Primary business checking account", "5000.00", "true"],
            ["1200", "Accounts Receivable", "Accounts Receivable", "Accounts Receivable", "Customer invoices outstanding", "2500.00", "true"],
            ["4000", "Sales Revenue", "Income", "Sales of Product Income", "Revenue from food sales", "-15000.00", "true"],
        ],
    },
    "xero": {
        "headers": ["Code", "Name", "Type", "Tax Type", "Description", "Balance", "Status"],
        "example_rows": [
            ["1000", "Business Bank Account", "BANK", "GST on Income", "Main business account", "5000.00", "ACTIVE"],
            ["1200", "Accounts Receivable", "CURRENT", "GST on Income", "Customer receivables", "2500.00", "ACTIVE"],
            ["4000", "Sales", "REVENUE", "GST on Income", "Sales revenue", "15000.00", "ACTIVE"],
        ],
    },
    GENERIC: {
        "headers": ["code", "name", "type", "description", "balance", "active"],
        "example_rows": [
            ["1001", "Cash Account", "Asset", "Primary cash account", "5000.00", "true"],
            ["1200", "Accounts Receivable", "Asset", "Customer receivables", "2500.00", "true"],
            ["4001", "Food Sales", "Revenue", "Restaurant food sales", "15000.00", "true"],
        ],
    },
}


def template_for(format_id: str) -> dict:
    """Return an import template for a format, falling back to generic.

    Returns:
        Dict with format, headers, example_rows, csv_template and field_mapping
    """
    if format_id not in TEMPLATES:
        format_id = GENERIC
    template = TEMPLATES[format_id]
    lines = [",".join(template["headers"])]
    lines.extend(",".join(row) for row in template["example_rows"])
    return {
        "format": format_id,
        "headers": list(template["headers"]),
        "example_rows": [list(row) for row in template["example_rows"]],
        "csv_template": "\n".join(lines),
        "field_mapping": {
            pattern: canonical.value for pattern, canonical in get_format(format_id).header_rules
        },
    }
