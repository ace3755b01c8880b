"""Tests for format detection and header mapping."""

import pytest

from ledgerkit.domain.entities import CanonicalField as F
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.formats import (
    FORMATS,
    build_field_mapping,
    coerce_field_mapping,
    detect_format,
    normalize_header,
    template_for,
)

QUICKBOOKS_HEADER = ["Account Code", "Account", "Type", "Detail Type", "Description", "Balance", "Active"]


class TestDetectFormat:
    """Tests for detect_format."""

    def test_detect_quickbooks(self):
        """Test QuickBooks signature."""
        assert detect_format(QUICKBOOKS_HEADER) == "quickbooks"

    def test_detect_xero(self):
        """Test Xero signature."""
        assert detect_format(["Code", "Name", "Type", "Tax Type", "Balance"]) == "xero"

    def test_detect_sage(self):
        """Test Sage signature."""
        assert detect_format(["A/C", "Name", "Department", "Balance"]) == "sage"

    def test_detect_tally(self):
        """Test Tally signature requires all three tokens."""
        header = ["guid", "name", "parent", "primarygroup", "closing_balance"]
        assert detect_format(header) == "tally"

    def test_detect_tally_partial_signature_is_generic(self):
        """Test that an incomplete signature does not match."""
        assert detect_format(["guid", "name", "primarygroup"]) == "generic"

    def test_detect_is_case_insensitive(self):
        """Test that headers are lowercased before matching."""
        assert detect_format(["ACCOUNT CODE", "DETAIL TYPE"]) == "quickbooks"

    def test_detect_priority_order(self):
        """Test that QuickBooks wins over Xero when both signatures match."""
        header = ["Account Code", "Detail Type", "Tax Type"]
        assert detect_format(header) == "quickbooks"

    def test_detect_unknown_is_generic(self):
        """Test that unrecognized headers are generic."""
        assert detect_format(["foo", "bar"]) == "generic"


class TestBuildFieldMapping:
    """Tests for build_field_mapping."""

    def test_quickbooks_exact_mapping(self):
        """Test exact header matches for QuickBooks."""
        mapping = build_field_mapping("quickbooks", QUICKBOOKS_HEADER)

        assert mapping == {
            "Account Code": F.CODE,
            "Account": F.NAME,
            "Type": F.TYPE,
            "Detail Type": F.CATEGORY,
            "Description": F.DESCRIPTION,
            "Balance": F.BALANCE,
            "Active": F.IS_ACTIVE,
        }

    def test_normalized_match(self):
        """Test that headers are normalized before the second lookup."""
        mapping = build_field_mapping("generic", ["Account Number", "Parent Code", "Is Active", "LEVEL"])

        assert mapping == {
            "Account Number": F.CODE,
            "Parent Code": F.PARENT_CODE,
            "Is Active": F.IS_ACTIVE,
            "LEVEL": F.LEVEL,
        }

    def test_keyword_heuristics(self):
        """Test substring heuristics for headers no table knows."""
        mapping = build_field_mapping(
            "xero",
            ["Ledger Code", "Display Title", "Account Category", "Long Description", "Opening Balance"],
        )

        assert mapping == {
            "Ledger Code": F.CODE,
            "Display Title": F.NAME,
            "Account Category": F.TYPE,
            "Long Description": F.DESCRIPTION,
            "Opening Balance": F.BALANCE,
        }

    def test_keyword_order_first_match_wins(self):
        """Test that 'code' is checked before 'name'."""
        mapping = build_field_mapping("generic", ["Name Code"])

        assert mapping == {"Name Code": F.CODE}

    def test_unmapped_headers_are_left_out(self):
        """Test that unknown headers do not appear in the mapping."""
        mapping = build_field_mapping("generic", ["code", "Currency", "Created"])

        assert mapping == {"code": F.CODE}

    def test_tally_mapping(self):
        """Test Tally columns, including two balance columns."""
        header = ["guid", "name", "parent", "primarygroup", "opening_balance", "closing_balance"]
        mapping = build_field_mapping("tally", header)

        assert mapping["guid"] == F.CODE
        assert mapping["parent"] == F.TYPE
        assert mapping["primarygroup"] == F.CATEGORY
        assert mapping["opening_balance"] == F.BALANCE
        assert mapping["closing_balance"] == F.BALANCE

    def test_unknown_format_raises(self):
        """Test that unknown format IDs are rejected."""
        with pytest.raises(ValidationError, match="Unknown file format"):
            build_field_mapping("lotus123", ["code"])


def test_normalize_header():
    """Test header normalization."""
    assert normalize_header("Account  Code") == "account_code"
    assert normalize_header("Balance") == "balance"


def test_coerce_field_mapping():
    """Test validating caller-supplied mappings."""
    assert coerce_field_mapping({"Col A": "code", "Col B": "is_active"}) == {
        "Col A": F.CODE,
        "Col B": F.IS_ACTIVE,
    }


def test_coerce_field_mapping_invalid_field():
    """Test that mappings to unknown fields are rejected."""
    with pytest.raises(ValidationError, match="Invalid account field 'amount'"):
        coerce_field_mapping({"Col A": "amount"})


def test_registry_generic_is_last():
    """Test that the generic fallback is the last registered format."""
    assert list(FORMATS)[-1] == "generic"


class TestTemplates:
    """Tests for import templates."""

    def test_quickbooks_template_round_trips_detection(self):
        """Test that a template's header is detected as its own format."""
        template = template_for("quickbooks")
        header = template["csv_template"].splitlines()[0].split(",")

        assert detect_format(header) == "quickbooks"
        assert template["field_mapping"]["Account Code"] == "code"
        assert len(template["example_rows"]) == 3

    def test_unknown_template_falls_back_to_generic(self):
        """Test that unknown formats return the generic template."""
        template = template_for("sage")

        assert template["format"] == "generic"
        assert template["headers"][0] == "code"
