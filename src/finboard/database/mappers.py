"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the storage convention of
naive UTC timestamps.
"""

from datetime import datetime, UTC
from decimal import Decimal
from typing import Optional

from finboard.domain import entities as domain
from finboard.database.models import (
    RecurringRule as ORMRecurringRule,
    Transaction as ORMTransaction,
)


def to_storage_timestamp(value: datetime) -> datetime:
    """Convert a timestamp to naive UTC for storage. Naive input is taken as UTC."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def from_storage_timestamp(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to a stored naive timestamp."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        amount=Decimal(orm_transaction.amount),
        description=orm_transaction.description,
        category=orm_transaction.category,
        type=orm_transaction.type,
        created_at=from_storage_timestamp(orm_transaction.created_at),
        notes=orm_transaction.notes,
        tags=tuple(orm_transaction.tags or ()),
        receipt_path=orm_transaction.receipt_path,
    )


def recurring_rule_to_domain(orm_rule: ORMRecurringRule) -> domain.RecurringRule:
    """Convert SQLAlchemy RecurringRule model to domain RecurringRule entity."""
    return domain.RecurringRule(
        id=orm_rule.id,
        amount=Decimal(orm_rule.amount),
        description=orm_rule.description,
        category=orm_rule.category,
        type=orm_rule.type,
        frequency=orm_rule.frequency,
        day_of_month=orm_rule.day_of_month,
        day_of_week=orm_rule.day_of_week,
        active=bool(orm_rule.active),
        start_date=orm_rule.start_date,
        created_at=from_storage_timestamp(orm_rule.created_at),
    )
