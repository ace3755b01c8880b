"""Tests for line item classification service and command."""

import json
from decimal import Decimal

import pytest

from ledgerkit.cli.main import cli
from ledgerkit.domain.classifier import ClassificationService
from ledgerkit.domain.entities import ClassificationRequest
from ledgerkit.domain.errors import ValidationError
from ledgerkit.domain.patterns import PatternHistoryService


class TestClassificationService:
    """Tests for ClassificationService."""

    def test_classify_records_pattern(self, temp_db, sample_chart):
        """Test classification against the stored chart."""
        service = ClassificationService(temp_db)
        request = ClassificationRequest(
            description="vegetables",
            amount=Decimal("1250.00"),
            vendor="Fresh Valley Farms",
            category="Food",
            document_type="invoice",
        )

        outcome = service.classify(request)

        assert outcome.result.primary_account.code == "5001000"
        debit, credit = outcome.journal_entries
        assert debit.debit == credit.credit == Decimal("1250.00")
        assert credit.account_code == "2000001"

        patterns = PatternHistoryService(temp_db).list_patterns()
        assert len(patterns) == 1
        assert patterns[0].id == outcome.pattern_id
        assert patterns[0].vendor == "Fresh Valley Farms"
        assert patterns[0].category == "Food"
        assert patterns[0].mapped_account_code == "5001000"
        assert patterns[0].document_type == "invoice"

    def test_classify_empty_chart(self, temp_db):
        """Test that an empty chart still yields the placeholder account."""
        outcome = ClassificationService(temp_db).classify(
            ClassificationRequest(description="stationery", amount=Decimal("5"))
        )

        assert outcome.result.primary_account.code == "6000000"
        assert outcome.result.tier == "default"

    def test_classify_empty_description(self, temp_db):
        """Test that a blank description is rejected."""
        with pytest.raises(ValidationError, match="Description must not be empty"):
            ClassificationService(temp_db).classify(
                ClassificationRequest(description="  ", amount=Decimal("5"))
            )

    def test_classify_invalid_document_type(self, temp_db):
        """Test that unknown document types are rejected."""
        with pytest.raises(ValidationError, match="Invalid document type 'memo'"):
            ClassificationService(temp_db).classify(
                ClassificationRequest(description="rent", amount=Decimal("5"), document_type="memo")
            )


def test_classify_command(cli_runner, temp_db, sample_chart):
    """Test classifying a line item from the CLI."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "classify",
            "vegetables",
            "--amount",
            "1,250.00",
            "--vendor",
            "Fresh Valley Farms",
        ],
    )

    assert result.exit_code == 0
    assert "Account: 5001000 Food Materials - Vegetables" in result.output
    assert "Confidence: 0.95 (vendor rule)" in result.output
    assert "Vendor Rule: COST_OF_SALES vendors map to range 5000000-5999999" in result.output
    assert "Alternatives:" in result.output
    assert "Dr 5001000" in result.output
    assert "Cr 2000001" in result.output
    assert "1,250.00" in result.output


def test_classify_command_json(cli_runner, temp_db, sample_chart):
    """Test JSON output of the classify command."""
    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "classify",
            "Monthly rent",
            "--amount",
            "45000",
            "--document-type",
            "invoice",
            "--json",
        ],
    )

    assert result.exit_code == 0
    data = json.loads(result.output)
    assert data["primary_account"]["code"] == "6003000"
    assert data["tier"] == "keyword"
    assert data["journal_entries"][0]["debit"] == "45000"
    assert data["journal_entries"][1]["credit"] == "45000"
    assert data["journal_entries"][1]["description"] == "Payment due: Vendor"
    assert isinstance(data["pattern_id"], int)


def test_classify_command_with_rules_file(cli_runner, temp_db, sample_chart, tmp_path):
    """Test classifying with rules loaded from YAML."""
    rules_file = tmp_path / "rules.yaml"
    rules_file.write_text("vendors:\n  Print Shop: {type: INDIRECT_EXPENSE, confidence: 0.8}\n")

    result = cli_runner.invoke(
        cli,
        [
            "--db-path",
            temp_db.database_path,
            "--rules",
            str(rules_file),
            "classify",
            "flyers",
            "--amount",
            "300",
            "--vendor",
            "Print Shop",
        ],
    )

    assert result.exit_code == 0
    assert "Account: 7001000 Marketing" in result.output
    assert "Confidence: 0.80 (vendor rule)" in result.output


def test_classify_command_invalid_amount(cli_runner, temp_db):
    """Test that an unparsable amount is rejected."""
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "classify", "rent", "--amount", "abc"]
    )

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_classify_command_invalid_document_type(cli_runner, temp_db):
    """Test that the CLI only accepts known document types."""
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "classify", "rent", "--amount", "10", "--document-type", "memo"],
    )

    assert result.exit_code == 2
