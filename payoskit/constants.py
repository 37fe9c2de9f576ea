"""
Constants and enums for PayOS payment operations.
"""

from enum import Enum


class PayoutCategory(str, Enum):
    """Payout categories sent with a payout request."""
    REFUND = "REFUND"
    WITHDRAWAL = "WITHDRAWAL"


class PayoutApprovalState(str, Enum):
    """Approval states accepted by the payout list filter."""
    APPROVED = "APPROVED"
    PENDING = "PENDING"
    REJECTED = "REJECTED"


class Currency(str, Enum):
    """Supported currencies."""
    VND = "VND"


# API Endpoints
class APIEndpoints:
    """PayOS API endpoints."""
    # Payment link endpoints
    CREATE_PAYMENT_LINK = "/v2/payment-requests"
    GET_PAYMENT_LINK = "/v2/payment-requests/{id}"
    
    # Payout endpoints
    CREATE_PAYOUT = "/v1/payouts"
    GET_PAYOUT = "/v1/payouts/{id}"
    LIST_PAYOUTS = "/v1/payouts"
    
    # Account endpoints
    PAYOUT_ACCOUNT_BALANCE = "/v1/payouts-account/balance"


# Request headers
HEADER_CLIENT_ID = "x-client-id"
HEADER_API_KEY = "x-api-key"
HEADER_IDEMPOTENCY_KEY = "x-idempotency-key"
HEADER_SIGNATURE = "x-signature"

# Gateway response code for a successful call
SUCCESS_CODE = "00"

# Order codes are random 6-digit integers
ORDER_CODE_MIN = 100000
ORDER_CODE_MAX = 999999

# Characters left unescaped by encodeURIComponent besides ASCII letters and digits
URI_COMPONENT_SAFE = "-_.!~*'()"

# Default settings
DEFAULT_API_BASE_URL = "https://api-merchant.payos.vn"
DEFAULT_CURRENCY = Currency.VND
DEFAULT_TIMEOUT = 15  # seconds
DEFAULT_PAYOUT_LIST_LIMIT = 10
