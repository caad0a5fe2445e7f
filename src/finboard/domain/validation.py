"""Field validation shared by the write-side services."""

from decimal import Decimal
from typing import Optional

from finboard.domain.entities import CATEGORIES, TRANSACTION_TYPES
from finboard.domain.errors import ValidationError, unknown_choice
from finboard.utils.amount_parser import to_positive_amount

MAX_DESCRIPTION_LENGTH = 200
MAX_NOTES_LENGTH = 2000
MAX_RECEIPT_PATH_LENGTH = 500
MAX_TAGS = 20


def require_positive_amount(amount: Decimal) -> Decimal:
    value = to_positive_amount(amount)
    if value is None:
        raise ValidationError(f"Amount must be a positive number, got {amount}")
    return value


def require_description(description: Optional[str]) -> str:
    text = (description or "").strip()
    if not text:
        raise ValidationError("Description must not be empty")
    if len(text) > MAX_DESCRIPTION_LENGTH:
        raise ValidationError(
            f"Description must be at most {MAX_DESCRIPTION_LENGTH} characters"
        )
    return text


def require_category(category: str) -> str:
    if category not in CATEGORIES:
        raise ValidationError(unknown_choice("category", category, CATEGORIES))
    return category


def require_type(type_: str) -> str:
    if type_ not in TRANSACTION_TYPES:
        raise ValidationError(unknown_choice("type", type_, TRANSACTION_TYPES))
    return type_


def check_length(field: str, value: Optional[str], limit: int) -> Optional[str]:
    if value is not None and len(value) > limit:
        raise ValidationError(f"{field} must be at most {limit} characters")
    return value


def parse_tags(raw: Optional[str]) -> tuple[str, ...]:
    """Split a comma-separated tag string, dropping empties, keeping order.

    Only the first 20 tags are kept.
    """
    if not raw:
        return ()
    tags = [tag.strip() for tag in raw.split(",")]
    return tuple(tag for tag in tags if tag)[:MAX_TAGS]
