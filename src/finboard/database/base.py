"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional
from datetime import date, datetime
from decimal import Decimal

from finboard.domain.entities import RecurringRule, Transaction


class Database(ABC):
    """Abstract database interface for finboard.

    Timestamps passed in may be naive (taken as UTC) or aware; timestamps
    returned are always aware UTC.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        amount: Decimal,
        description: str,
        category: str,
        type: str,
        created_at: datetime,
        notes: Optional[str] = None,
        tags: tuple[str, ...] = (),
        receipt_path: Optional[str] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        amount: Optional[Decimal] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        type: Optional[str] = None,
        notes: Optional[str] = None,
        tags: Optional[tuple[str, ...]] = None,
        receipt_path: Optional[str] = None,
    ) -> None:
        """Update transaction fields.

        None leaves a field unchanged; an empty ``notes`` or ``receipt_path``
        clears it.
        """
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List transactions with ``start <= created_at < end``, newest first."""
        pass

    # Recurring rule operations
    @abstractmethod
    def create_recurring_rule(
        self,
        amount: Decimal,
        description: str,
        category: str,
        type: str,
        frequency: str,
        day_of_month: Optional[int] = None,
        day_of_week: Optional[int] = None,
        start_date: Optional[date] = None,
        active: bool = True,
    ) -> int:
        """Create a recurring rule. Returns rule ID."""
        pass

    @abstractmethod
    def get_recurring_rule(self, rule_id: int) -> Optional[RecurringRule]:
        """Get recurring rule by ID."""
        pass

    @abstractmethod
    def list_recurring_rules(self, active_only: bool = False) -> list[RecurringRule]:
        """List recurring rules, newest first."""
        pass

    @abstractmethod
    def set_recurring_rule_active(self, rule_id: int, active: bool) -> None:
        """Activate or deactivate a recurring rule."""
        pass

    @abstractmethod
    def delete_recurring_rule(self, rule_id: int) -> None:
        """Delete a recurring rule."""
        pass

    # Settings operations
    @abstractmethod
    def get_monthly_salary(self) -> Decimal:
        """Get the monthly salary setting, zero when unset."""
        pass

    @abstractmethod
    def set_monthly_salary(self, amount: Decimal) -> None:
        """Store the monthly salary setting."""
        pass
