"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional
import re


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45" or "₪123.45"
    - "1,234.56"

    Amounts are unsigned; expense/income is carried by the transaction type.

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove currency symbols, commas and whitespace
    cleaned = re.sub(r"[$€£¥₪]", "", amount_str.strip())
    cleaned = cleaned.replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")
    return amount


def to_positive_amount(value: Any) -> Optional[Decimal]:
    """Coerce a stored amount for aggregation.

    Returns None for anything that is not a finite positive number, so callers
    can treat it as a zero contribution.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except (InvalidOperation, ValueError):
            return None
    if not amount.is_finite() or amount <= 0:
        return None
    return amount
