"""SQLAlchemy models for ledgerkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Numeric,
    Boolean,
    Float,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class ChartAccount(Base):
    """Chart-of-accounts entry model."""

    __tablename__ = "chart_accounts"

    id = Column(Integer, primary_key=True)
    code = Column(String, unique=True, nullable=False)
    name = Column(String, nullable=False)
    account_type = Column(String, nullable=False)
    posting_allowed = Column(Boolean, default=True, nullable=False)
    balance = Column(Numeric(14, 2), default=0, nullable=False)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    parent_code = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class MappingPattern(Base):
    """Classification pattern recorded for human review."""

    __tablename__ = "mapping_patterns"

    id = Column(Integer, primary_key=True)
    vendor = Column(String, nullable=True)
    category = Column(String, nullable=True)
    mapped_account_code = Column(String, nullable=False)
    mapped_account_name = Column(String, nullable=False)
    confidence = Column(Float, nullable=False)
    document_type = Column(String, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
