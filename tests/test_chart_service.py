"""Tests for ChartOfAccountsService."""

from decimal import Decimal

import pytest

from ledgerkit.domain.entities import AccountType
from ledgerkit.domain.errors import ConflictError, NotFoundError, ValidationError


class TestChartOfAccountsService:
    """Tests for chart account management."""

    def test_create_and_get(self, chart_service):
        """Test creating an account from a type name."""
        account_id = chart_service.create_account(
            code="1000000", name="  Cash ", account_type="asset", balance=Decimal("10.00")
        )

        account = chart_service.get_account("1000000")
        assert account.id == account_id
        assert account.name == "Cash"
        assert account.type == AccountType.ASSET
        assert account.balance == Decimal("10.00")

    def test_create_invalid_code(self, chart_service):
        """Test that codes outside the allowed characters are rejected."""
        with pytest.raises(ValidationError, match="Invalid account code"):
            chart_service.create_account(code="1000.00", name="Cash", account_type=AccountType.ASSET)

    def test_create_empty_name(self, chart_service):
        """Test that empty names are rejected."""
        with pytest.raises(ValidationError, match="name must not be empty"):
            chart_service.create_account(code="1000", name="  ", account_type=AccountType.ASSET)

    def test_create_invalid_type(self, chart_service):
        """Test that unknown types are rejected."""
        with pytest.raises(ValidationError, match="Invalid account type"):
            chart_service.create_account(code="1000", name="Cash", account_type="MONEY")

    def test_create_duplicate(self, chart_service):
        """Test that codes are unique."""
        chart_service.create_account(code="1000", name="Cash", account_type=AccountType.ASSET)

        with pytest.raises(ConflictError):
            chart_service.create_account(code="1000", name="Bank", account_type=AccountType.ASSET)

    def test_list_accounts(self, chart_service, sample_chart):
        """Test that the chart snapshot is ordered by code."""
        codes = [a.code for a in chart_service.list_accounts()]

        assert codes == sorted(codes)
        assert len(codes) == 9

    def test_set_posting_allowed_missing(self, chart_service):
        """Test updating an unknown account."""
        with pytest.raises(NotFoundError):
            chart_service.set_posting_allowed("9999", True)

    def test_structure(self, chart_service, sample_chart):
        """Test grouping the chart by account type."""
        structure = chart_service.structure()

        assert list(structure) == list(AccountType)
        assert [a.code for a in structure[AccountType.COST_OF_SALES]] == [
            "5000000",
            "5001000",
            "5005000",
        ]
        assert structure[AccountType.EQUITY] == []
