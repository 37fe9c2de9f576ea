"""
Service modules for PayOS payment operations.
"""

from .payment_service import PaymentService, PaymentLinkResult, generate_order_code
from .payout_service import PayoutService, build_payout_list_query
from .account_service import AccountService

__all__ = [
    'PaymentService',
    'PaymentLinkResult',
    'generate_order_code',
    'PayoutService',
    'build_payout_list_query',
    'AccountService',
]
