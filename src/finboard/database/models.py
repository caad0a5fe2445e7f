"""SQLAlchemy models for finboard database."""

from datetime import datetime, UTC
from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


def utc_now() -> datetime:
    """Current time as naive UTC, the storage convention for timestamps."""
    return datetime.now(UTC).replace(tzinfo=None)


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(200), nullable=False)
    category = Column(String, nullable=False)
    type = Column(String, nullable=False)
    notes = Column(String, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    receipt_path = Column(String, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False, index=True)


class RecurringRule(Base):
    """Recurring payment/income rule model."""

    __tablename__ = "recurring_rules"

    id = Column(Integer, primary_key=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String(200), nullable=False)
    category = Column(String, nullable=False)
    type = Column(String, nullable=False)
    frequency = Column(String, nullable=False)
    day_of_month = Column(Integer, nullable=True)
    day_of_week = Column(Integer, nullable=True)
    active = Column(Boolean, default=True, nullable=False)
    start_date = Column(Date, nullable=True)
    created_at = Column(DateTime, default=utc_now, nullable=False)


class Profile(Base):
    """Single-row owner settings."""

    __tablename__ = "profile"

    id = Column(Integer, primary_key=True)
    monthly_salary = Column(Numeric(12, 2), nullable=False, default=0)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
