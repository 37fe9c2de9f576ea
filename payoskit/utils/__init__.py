"""
Utility modules for PayOS payment operations.
"""

from .http_client import HTTPClient, build_headers
from .validators import (
    validate_amount,
    validate_order_code,
    validate_url,
    validate_approval_state
)
from .formatters import (
    format_amount,
    format_currency,
    format_iso_datetime
)
from .canonical import UNSET, canonicalize, stringify, build_query_string
from .checksum import (
    build_payout_signature_data,
    create_payout_signature,
    verify_payout_signature,
    build_payment_link_data,
    create_payment_link_signature
)

__all__ = [
    'HTTPClient',
    'build_headers',
    'validate_amount',
    'validate_order_code',
    'validate_url',
    'validate_approval_state',
    'format_amount',
    'format_currency',
    'format_iso_datetime',
    'UNSET',
    'canonicalize',
    'stringify',
    'build_query_string',
    'build_payout_signature_data',
    'create_payout_signature',
    'verify_payout_signature',
    'build_payment_link_data',
    'create_payment_link_signature',
]
