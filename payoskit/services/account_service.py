"""
Account service for PayOS payout account operations.
"""

import logging
from decimal import Decimal
from typing import Dict, Any, Optional

from ..config import PayOSConfig
from ..constants import APIEndpoints
from ..exceptions import APIError, PayOSException
from ..utils.formatters import format_currency
from ..utils.http_client import HTTPClient, build_headers

logger = logging.getLogger(__name__)


class AccountService:
    """
    Service for payout account operations.
    """

    def __init__(self, config: Optional[PayOSConfig] = None):
        self.config = config or PayOSConfig.from_settings()
        self.http_client = HTTPClient(self.config.api_base_url, timeout=self.config.timeout)

    def get_payout_account_balance(self) -> Dict[str, Any]:
        """
        Retrieve payout account balance.

        Returns:
            Dictionary containing:
                - code: Gateway result code
                - desc: Result description
                - data: accountNumber, accountName, currency, balance

        Raises:
            APIError: If balance retrieval fails
        """
        credentials = self.config.require_payout_credentials()
        logger.info("Retrieving payout account balance")

        try:
            response = self.http_client.get(
                endpoint=APIEndpoints.PAYOUT_ACCOUNT_BALANCE,
                headers=build_headers(credentials)
            )
        except PayOSException as e:
            logger.error(f"Failed to retrieve payout account balance: {str(e)}")
            raise APIError(
                f"Failed to get payout account balance: {str(e)}",
                error_code=e.error_code,
                response_data=e.response_data
            ) from e

        data = response.get('data') or {}
        balance = format_currency(data.get('balance', 0), data.get('currency') or 'VND')
        logger.info(f"Payout account balance retrieved: {balance}")
        return response

    def has_sufficient_balance(self, amount) -> bool:
        """Check the payout account can cover an amount."""
        response = self.get_payout_account_balance()
        balance = (response.get('data') or {}).get('balance', 0)
        return Decimal(str(balance)) >= Decimal(str(amount))
