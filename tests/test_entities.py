"""Tests for domain entities."""

import pytest

from ledgerkit.domain.entities import CanonicalField, ImportResult, ParsedAccount, RowIssue


def test_parsed_account_raw_data_is_read_only():
    """Test that raw data cannot be changed after parsing."""
    source = {"Code": "1000", "Name": "Cash"}
    account = ParsedAccount(code="1000", name="Cash", source_row_number=2, raw_data=source)

    with pytest.raises(TypeError):
        account.raw_data["Code"] = "2000"

    source["Code"] = "2000"
    assert account.raw_data["Code"] == "1000"


def test_row_issue_raw_data_is_read_only():
    """Test that an issue's raw data cannot be changed."""
    issue = RowIssue(row=3, message="Missing both account code and name", raw_data={"Code": ""})

    with pytest.raises(TypeError):
        issue.raw_data["Code"] = "1000"


def test_import_result_mapping_is_read_only():
    """Test that the suggested mapping of a result cannot be changed."""
    result = ImportResult(
        total_rows=0,
        accounts=(),
        errors=(),
        warnings=(),
        detected_format="generic",
        suggested_field_mapping={"code": CanonicalField.CODE},
    )

    with pytest.raises(TypeError):
        result.suggested_field_mapping["name"] = CanonicalField.NAME

    assert result.suggested_field_mapping == {"code": CanonicalField.CODE}
    assert result.to_dict()["suggested_field_mapping"] == {"code": "code"}
