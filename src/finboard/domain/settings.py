"""Owner settings domain service."""

import logging
from decimal import Decimal

from finboard.database.base import Database
from finboard.domain.errors import ValidationError

logger = logging.getLogger(__name__)


class SettingsService:
    """Service for owner-scoped settings such as the monthly salary."""

    def __init__(self, db: Database):
        self.db = db

    def get_monthly_salary(self) -> Decimal:
        return self.db.get_monthly_salary()

    def set_monthly_salary(self, amount: Decimal) -> None:
        """Store the monthly salary.

        Raises:
            ValidationError: If the amount is negative or not finite
        """
        if not amount.is_finite() or amount < 0:
            raise ValidationError(f"Monthly salary must be zero or positive, got {amount}")
        self.db.set_monthly_salary(amount)
        logger.info("Updated monthly salary")
