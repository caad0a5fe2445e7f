"""Transaction domain service."""

import logging
from typing import Optional
from datetime import datetime, UTC
from decimal import Decimal
from finboard.database.base import Database
from finboard.domain.entities import Transaction as TransactionEntity
from finboard.domain.errors import NotFoundError, transaction_not_found
from finboard.domain.validation import (
    MAX_NOTES_LENGTH,
    MAX_RECEIPT_PATH_LENGTH,
    check_length,
    parse_tags,
    require_category,
    require_description,
    require_positive_amount,
    require_type,
)

logger = logging.getLogger(__name__)


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_transaction(
        self,
        amount: Decimal,
        description: str,
        category: str,
        type: str,
        created_at: Optional[datetime] = None,
        notes: Optional[str] = None,
        tags: Optional[str] = None,
        receipt_path: Optional[str] = None,
    ) -> int:
        """Create a transaction.

        Args:
            amount: Positive amount
            description: Non-empty description, at most 200 characters
            category: One of the known categories
            type: "expense" or "income"
            created_at: Timestamp, defaults to now
            notes: Optional notes
            tags: Optional comma-separated tags
            receipt_path: Optional path of a stored receipt

        Returns:
            Transaction ID

        Raises:
            ValidationError: If any field is invalid
        """
        transaction_id = self.db.create_transaction(
            amount=require_positive_amount(amount),
            description=require_description(description),
            category=require_category(category),
            type=require_type(type),
            created_at=created_at if created_at is not None else datetime.now(UTC),
            notes=check_length("Notes", notes, MAX_NOTES_LENGTH) or None,
            tags=parse_tags(tags),
            receipt_path=(
                check_length("Receipt path", receipt_path, MAX_RECEIPT_PATH_LENGTH) or None
            ),
        )
        logger.info("Created %s transaction %s", type, transaction_id)
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        type: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Optional[str] = None,
        receipt_path: Optional[str] = None,
    ) -> None:
        """Update transaction fields.

        Only the fields that are provided change. ``tags`` replaces the whole
        tag list. An empty string clears ``tags``, ``notes`` or
        ``receipt_path``.

        Raises:
            NotFoundError: If the transaction doesn't exist
            ValidationError: If any provided field is invalid
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.update_transaction(
            transaction_id=transaction_id,
            amount=require_positive_amount(amount) if amount is not None else None,
            description=require_description(description) if description is not None else None,
            category=require_category(category) if category is not None else None,
            type=require_type(type) if type is not None else None,
            notes=check_length("Notes", notes, MAX_NOTES_LENGTH),
            tags=parse_tags(tags) if tags is not None else None,
            receipt_path=check_length("Receipt path", receipt_path, MAX_RECEIPT_PATH_LENGTH),
        )
        logger.info("Updated transaction %s", transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))

        self.db.delete_transaction(transaction_id)
        logger.info("Deleted transaction %s", transaction_id)

    def list_transactions(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[TransactionEntity]:
        """List transactions in ``[start, end)``, newest first."""
        return self.db.list_transactions(start=start, end=end)
