"""
Validation utilities for PayOS payment operations.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from ..constants import PayoutApprovalState
from ..exceptions import InvalidAmountError, InvalidOrderCodeError, ValidationError


def validate_amount(amount: Union[int, float, Decimal, str], min_amount: int = 1) -> int:
    """
    Validate payment/payout amount.
    PayOS amounts are whole VND.

    Args:
        amount: Amount to validate
        min_amount: Minimum allowed amount

    Returns:
        Validated amount as int

    Raises:
        InvalidAmountError: If amount is invalid
    """
    if isinstance(amount, bool):
        raise InvalidAmountError(f"Invalid amount format: {amount}")

    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidAmountError(f"Invalid amount format: {amount}")

    if not value.is_finite():
        raise InvalidAmountError(f"Invalid amount format: {amount}")

    if value != value.to_integral_value():
        raise InvalidAmountError(f"Amount must be a whole number. Got: {amount}")

    if value < min_amount:
        raise InvalidAmountError(f"Amount must be at least {min_amount}. Got: {amount}")

    return int(value)


def validate_order_code(order_code: Union[int, str]) -> int:
    """
    Validate a payment link order code.

    Args:
        order_code: Order code to validate

    Returns:
        Validated order code as int

    Raises:
        InvalidOrderCodeError: If the code is not a positive integer
    """
    if isinstance(order_code, bool):
        raise InvalidOrderCodeError(f"Invalid order code: {order_code}")

    try:
        value = int(str(order_code).strip())
    except (ValueError, TypeError):
        raise InvalidOrderCodeError(f"Invalid order code: {order_code}")

    if value <= 0:
        raise InvalidOrderCodeError(f"Order code must be positive. Got: {order_code}")

    return value


def validate_url(url: str, field_name: str = 'URL') -> str:
    """
    Validate a redirect URL.

    Raises:
        ValidationError: If the URL is empty or not http(s)
    """
    if not url or not str(url).strip():
        raise ValidationError(f"{field_name} is required")

    url = str(url).strip()
    if not url.startswith(('http://', 'https://')):
        raise ValidationError(f"{field_name} must start with http:// or https://. Got: {url}")

    return url


def validate_approval_state(state: Optional[str]) -> Optional[str]:
    """Validate a payout approval state filter."""
    if not state:
        return None

    state = str(state).upper()
    valid_states = [s.value for s in PayoutApprovalState]
    if state not in valid_states:
        raise ValidationError(
            f"Invalid approval state: {state}. "
            f"Supported states: {', '.join(valid_states)}"
        )

    return state


def validate_pagination(page: Optional[int], page_size: Optional[int]):
    """Validate page number and size for payout listing."""
    for name, value in (('page', page), ('page_size', page_size)):
        if value is not None and (not isinstance(value, int) or isinstance(value, bool) or value < 1):
            raise ValidationError(f"{name} must be a positive integer. Got: {value}")


def validate_date_value(value: Union[str, date, datetime, None], field_name: str):
    """Validate a date filter is a string or date/datetime."""
    if value is None or value == '':
        return None
    if not isinstance(value, (str, date)):
        raise ValidationError(f"{field_name} must be a date, datetime or ISO string. Got: {value!r}")
    return value
