"""Utility functions for finboard."""

from finboard.utils.date_parser import parse_date, parse_month, parse_timestamp
from finboard.utils.amount_parser import parse_amount, to_positive_amount

__all__ = [
    "parse_date",
    "parse_month",
    "parse_timestamp",
    "parse_amount",
    "to_positive_amount",
]
