"""Recurring rule domain service."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional

from finboard.database.base import Database
from finboard.domain.entities import FREQUENCIES, MONTHLY, RecurringRule
from finboard.domain.errors import (
    NotFoundError,
    ValidationError,
    missing_schedule_day,
    rule_not_found,
    unknown_choice,
)
from finboard.domain.validation import (
    require_category,
    require_description,
    require_positive_amount,
    require_type,
)

logger = logging.getLogger(__name__)


class RecurringRuleService:
    """Service for managing recurring rules."""

    def __init__(self, db: Database):
        """Initialize recurring rule service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_rule(
        self,
        amount: Decimal,
        description: str,
        category: str,
        type: str,
        frequency: str,
        day_of_month: Optional[int] = None,
        day_of_week: Optional[int] = None,
        start_date: Optional[date] = None,
    ) -> int:
        """Create a recurring rule.

        Monthly rules need ``day_of_month`` (1-31), weekly rules need
        ``day_of_week`` (0 = Sunday .. 6 = Saturday). The day field that does
        not match the frequency is dropped.

        Returns:
            Rule ID

        Raises:
            ValidationError: If any field is invalid
        """
        if frequency not in FREQUENCIES:
            raise ValidationError(unknown_choice("frequency", frequency, FREQUENCIES))

        if frequency == MONTHLY:
            if day_of_month is None or not 1 <= day_of_month <= 31:
                raise ValidationError(missing_schedule_day(frequency))
            day_of_week = None
        else:
            if day_of_week is None or not 0 <= day_of_week <= 6:
                raise ValidationError(missing_schedule_day(frequency))
            day_of_month = None

        rule_id = self.db.create_recurring_rule(
            amount=require_positive_amount(amount),
            description=require_description(description),
            category=require_category(category),
            type=require_type(type),
            frequency=frequency,
            day_of_month=day_of_month,
            day_of_week=day_of_week,
            start_date=start_date,
        )
        logger.info("Created %s recurring rule %s", frequency, rule_id)
        return rule_id

    def get_rule(self, rule_id: int) -> Optional[RecurringRule]:
        """Get rule by ID, or None if not found."""
        return self.db.get_recurring_rule(rule_id)

    def list_rules(self, active_only: bool = False) -> list[RecurringRule]:
        """List rules, newest first."""
        return self.db.list_recurring_rules(active_only=active_only)

    def toggle_rule(self, rule_id: int, active: bool) -> None:
        """Activate or deactivate a rule.

        Raises:
            NotFoundError: If the rule doesn't exist
        """
        if self.db.get_recurring_rule(rule_id) is None:
            raise NotFoundError(rule_not_found(rule_id))
        self.db.set_recurring_rule_active(rule_id, active)
        logger.info("Set recurring rule %s active=%s", rule_id, active)

    def delete_rule(self, rule_id: int) -> None:
        """Delete a rule.

        Raises:
            NotFoundError: If the rule doesn't exist
        """
        if self.db.get_recurring_rule(rule_id) is None:
            raise NotFoundError(rule_not_found(rule_id))
        self.db.delete_recurring_rule(rule_id)
        logger.info("Deleted recurring rule %s", rule_id)
