"""
Data formatting utilities for PayOS payment operations.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Iterable, Optional, Union
from ..constants import DEFAULT_CURRENCY


def format_amount(amount: Union[int, float, Decimal, str]) -> str:
    """
    Format a VND amount with thousand separators.

    Args:
        amount: Amount to format

    Returns:
        Formatted string (e.g., "150,000")
    """
    try:
        return f"{Decimal(str(amount)):,.0f}"
    except (ArithmeticError, ValueError, TypeError):
        return "0"


def format_currency(amount: Union[int, float, Decimal, str], currency: str = DEFAULT_CURRENCY.value) -> str:
    """
    Format amount with currency code.

    Returns:
        Formatted string (e.g., "150,000 VND")
    """
    return f"{format_amount(amount)} {currency}"


def format_iso_datetime(value: Union[str, date, datetime]) -> str:
    """
    Render a date filter as ISO-8601.

    Aware datetimes are converted to UTC with a ``Z`` suffix, naive ones are
    rendered as given, and strings pass through unchanged.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
            return value.isoformat(timespec='milliseconds').replace('+00:00', 'Z')
        return value.isoformat(timespec='milliseconds')
    return value.isoformat()


def join_categories(categories: Optional[Iterable[str]]) -> Optional[str]:
    """Join payout categories into the comma-separated filter PayOS expects."""
    if not categories:
        return None
    values = [getattr(c, 'value', c) for c in categories]
    return ','.join(values) if values else None
