"""
Parsing and validation of PayOS webhook bodies.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import DEFAULT_CURRENCY


@dataclass(frozen=True)
class WebhookData:
    """Key fields of a payment webhook."""
    order_code: Optional[int]
    reference: Optional[str]
    amount: Optional[int]
    description: Optional[str]
    account_number: Optional[str]
    currency: str
    payment_link_id: Optional[str]


def _webhook_data(body: Any) -> Dict[str, Any]:
    if not isinstance(body, dict):
        return {}
    data = body.get('data')
    return data if isinstance(data, dict) else {}


def validate_payment_webhook(body: Dict[str, Any]) -> bool:
    """
    Check a payment webhook carries an order code, reference and amount.
    """
    data = _webhook_data(body)
    return bool(data.get('orderCode') and data.get('reference') and data.get('amount'))


def parse_payment_webhook(body: Dict[str, Any]) -> WebhookData:
    """Extract the key fields from a payment webhook body."""
    data = _webhook_data(body)
    return WebhookData(
        order_code=data.get('orderCode'),
        reference=data.get('reference'),
        amount=data.get('amount'),
        description=data.get('description'),
        account_number=data.get('accountNumber'),
        currency=data.get('currency') or DEFAULT_CURRENCY.value,
        payment_link_id=data.get('paymentLinkId'),
    )
