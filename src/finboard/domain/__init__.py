"""Domain layer for finboard application.

Services are imported from their own modules (``finboard.domain.summary``
etc.) so that the database layer can depend on the entities here.
"""

from finboard.domain.entities import (
    CATEGORIES,
    FREQUENCIES,
    TRANSACTION_TYPES,
    RangeSelection,
    RecurringRule,
    Transaction,
)
from finboard.domain.errors import DomainError, NotFoundError, ValidationError

__all__ = [
    "CATEGORIES",
    "FREQUENCIES",
    "TRANSACTION_TYPES",
    "RangeSelection",
    "RecurringRule",
    "Transaction",
    "DomainError",
    "NotFoundError",
    "ValidationError",
]
