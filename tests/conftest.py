"""Shared pytest fixtures for ledgerkit tests."""

import tempfile
import os
from decimal import Decimal
from pathlib import Path
import pytest

from ledgerkit.database.factories import create_sqlite_database
from ledgerkit.domain.account import ChartOfAccountsService
from ledgerkit.domain.coa_import import ChartImportService
from ledgerkit.domain.entities import Account, AccountType


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def chart_service(temp_db):
    """Create a ChartOfAccountsService with a temporary database."""
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def import_service(temp_db):
    """Create a ChartImportService with a temporary database."""
    return ChartImportService(temp_db)


@pytest.fixture
def restaurant_chart():
    """In-memory restaurant chart snapshot, in chart order."""
    return [
        Account(code="1000000", name="Cash", type=AccountType.ASSET),
        Account(code="2000001", name="Accounts Payable - Trade", type=AccountType.LIABILITY),
        Account(code="5000000", name="Cost of Sales", type=AccountType.COST_OF_SALES, posting_allowed=False),
        Account(code="5001000", name="Food Materials - Vegetables", type=AccountType.COST_OF_SALES),
        Account(code="5005000", name="Food Materials - Meat", type=AccountType.COST_OF_SALES),
        Account(code="6001000", name="Salaries", type=AccountType.DIRECT_EXPENSE),
        Account(code="6003000", name="Rent", type=AccountType.DIRECT_EXPENSE),
        Account(code="7001000", name="Marketing", type=AccountType.INDIRECT_EXPENSE),
        Account(code="8001000", name="Income Tax", type=AccountType.TAX_EXPENSE),
    ]


@pytest.fixture
def sample_chart(chart_service, restaurant_chart):
    """Store the restaurant chart in the temporary database."""
    for account in restaurant_chart:
        chart_service.create_account(
            code=account.code,
            name=account.name,
            account_type=account.type,
            posting_allowed=account.posting_allowed,
            balance=Decimal("0"),
        )
    return chart_service.list_accounts()


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
