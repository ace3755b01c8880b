"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the domain entities stay stable
when the database schema changes.
"""

from decimal import Decimal

from ledgerkit.domain import entities as domain
from ledgerkit.database.models import (
    ChartAccount as ORMChartAccount,
    MappingPattern as ORMMappingPattern,
)


def chart_account_to_domain(orm_account: ORMChartAccount) -> domain.Account:
    """Convert SQLAlchemy ChartAccount model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        code=orm_account.code,
        name=orm_account.name,
        type=domain.AccountType(orm_account.account_type),
        posting_allowed=orm_account.posting_allowed,
        balance=Decimal(orm_account.balance if orm_account.balance is not None else 0),
        description=orm_account.description,
        is_active=orm_account.is_active,
        parent_code=orm_account.parent_code,
        created_at=orm_account.created_at,
    )


def mapping_pattern_to_domain(orm_pattern: ORMMappingPattern) -> domain.MappingPattern:
    """Convert SQLAlchemy MappingPattern model to domain MappingPattern entity."""
    return domain.MappingPattern(
        id=orm_pattern.id,
        vendor=orm_pattern.vendor,
        category=orm_pattern.category,
        mapped_account_code=orm_pattern.mapped_account_code,
        mapped_account_name=orm_pattern.mapped_account_name,
        confidence=orm_pattern.confidence,
        document_type=orm_pattern.document_type,
        created_at=orm_pattern.created_at,
    )
