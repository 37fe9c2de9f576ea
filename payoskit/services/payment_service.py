"""
Payment service for PayOS checkout links.
Handles payment link creation and lookup.
"""

import logging
import secrets
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from ..config import PayOSConfig
from ..constants import APIEndpoints, ORDER_CODE_MAX, ORDER_CODE_MIN
from ..exceptions import PaymentError, PayOSException
from ..utils.checksum import create_payment_link_signature
from ..utils.http_client import HTTPClient, build_headers
from ..utils.validators import validate_amount, validate_order_code, validate_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaymentLinkResult:
    """Outcome of a payment link request."""
    checkout_url: str
    order_code: int
    signature: str
    raw: Any


def generate_order_code() -> int:
    """Generate a random 6-digit order code."""
    return ORDER_CODE_MIN + secrets.randbelow(ORDER_CODE_MAX - ORDER_CODE_MIN)


class PaymentService:
    """
    Service for PayOS payment link operations.
    """

    def __init__(self, config: Optional[PayOSConfig] = None):
        self.config = config or PayOSConfig.from_settings()
        self.http_client = HTTPClient(self.config.api_base_url, timeout=self.config.timeout)

    def create_payment_link(
        self,
        amount: Union[int, str],
        description: str,
        return_url: str,
        cancel_url: str,
        order_code: Optional[int] = None
    ) -> PaymentLinkResult:
        """
        Create a hosted checkout link.

        Args:
            amount: Payment amount in VND
            description: Payment description shown to the customer
            return_url: Redirect URL after payment
            cancel_url: Redirect URL when the customer cancels
            order_code: Merchant order code (generated if not provided)

        Returns:
            PaymentLinkResult with checkout URL, order code, signature and raw response

        Raises:
            ConfigurationError: If payment credentials are missing
            ValidationError: If input validation fails
            PaymentError: If the request fails
        """
        credentials = self.config.require_payment_credentials()

        validated_amount = validate_amount(amount)
        validated_return_url = validate_url(return_url, 'Return URL')
        validated_cancel_url = validate_url(cancel_url, 'Cancel URL')
        validated_order_code = (
            validate_order_code(order_code) if order_code is not None else generate_order_code()
        )

        logger.info(f"Creating payment link for order: {validated_order_code}")

        signature = create_payment_link_signature(
            amount=validated_amount,
            cancel_url=validated_cancel_url,
            description=description,
            order_code=validated_order_code,
            return_url=validated_return_url,
            secret=credentials.checksum_key
        )

        payload = {
            'orderCode': validated_order_code,
            'amount': validated_amount,
            'description': description,
            'returnUrl': validated_return_url,
            'cancelUrl': validated_cancel_url,
            'signature': signature,
        }

        try:
            response = self.http_client.post(
                endpoint=APIEndpoints.CREATE_PAYMENT_LINK,
                data=payload,
                headers=build_headers(credentials)
            )
        except PayOSException as e:
            logger.error(f"Payment link creation failed: {str(e)}")
            raise PaymentError(
                f"Failed to create payment link: {str(e)}",
                error_code=e.error_code,
                response_data=e.response_data
            ) from e

        checkout_url = ''
        if isinstance(response, dict):
            data = response.get('data') or {}
            checkout_url = response.get('checkoutUrl') or data.get('checkoutUrl') or ''

        logger.info(f"Payment link created for order: {validated_order_code}")
        return PaymentLinkResult(
            checkout_url=checkout_url,
            order_code=validated_order_code,
            signature=signature,
            raw=response
        )

    def get_payment_link(self, order_code: Union[int, str]) -> Dict[str, Any]:
        """
        Retrieve payment link information by order code or link id.

        Raises:
            PaymentError: If the query fails
        """
        credentials = self.config.require_payment_credentials()
        logger.info(f"Querying payment link: {order_code}")

        try:
            return self.http_client.get(
                endpoint=APIEndpoints.GET_PAYMENT_LINK.format(id=order_code),
                headers=build_headers(credentials)
            )
        except PayOSException as e:
            logger.error(f"Payment link query failed: {str(e)}")
            raise PaymentError(
                f"Failed to query payment link: {str(e)}",
                error_code=e.error_code,
                response_data=e.response_data
            ) from e
