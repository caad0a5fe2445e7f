"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def rule_not_found(rule_id: int) -> str:
    """Return message for missing recurring rule."""
    return f"Recurring rule {rule_id} not found"


def unknown_choice(field: str, value: object, choices: tuple[str, ...]) -> str:
    """Return message for a value outside an enumerated set."""
    return f"Invalid {field} '{value}'. Expected one of: {', '.join(choices)}"


def missing_schedule_day(frequency: str) -> str:
    """Return message when a rule lacks the day field its frequency needs."""
    if frequency == "monthly":
        return "Monthly rules require a day of month between 1 and 31"
    return "Weekly rules require a day of week between 0 (Sunday) and 6 (Saturday)"
