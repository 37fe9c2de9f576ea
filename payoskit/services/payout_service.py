"""
Payout service for PayOS bank transfers.
Handles signed payout creation, payout lookup and listing.
"""

import logging
import uuid
from datetime import date
from typing import Any, Dict, Iterable, Optional, Union

from ..config import PayOSConfig
from ..constants import APIEndpoints, DEFAULT_PAYOUT_LIST_LIMIT, PayoutCategory
from ..exceptions import PayOSException, PayoutError, ValidationError
from ..utils.checksum import create_payout_signature
from ..utils.formatters import format_iso_datetime, join_categories
from ..utils.http_client import HTTPClient, build_headers
from ..utils.validators import (
    validate_amount, validate_approval_state,
    validate_date_value, validate_pagination
)

logger = logging.getLogger(__name__)


def build_payout_list_query(
    page: Optional[int] = None,
    page_size: Optional[int] = None,
    reference_id: Optional[str] = None,
    approval_state: Optional[str] = None,
    categories: Optional[Iterable[Union[str, PayoutCategory]]] = None,
    from_date: Union[str, date, None] = None,
    to_date: Union[str, date, None] = None
) -> Dict[str, Any]:
    """
    Build payout list query parameters.

    ``page`` and ``page_size`` together become limit/offset; ``page_size``
    alone only sets the limit. Categories are comma-joined and dates are
    rendered as ISO-8601.

    Raises:
        ValidationError: If a filter value is invalid
    """
    validate_pagination(page, page_size)
    query = {}

    if page and page_size:
        query['limit'] = page_size
        query['offset'] = (page - 1) * page_size
    elif page_size:
        query['limit'] = page_size

    if reference_id:
        query['referenceId'] = reference_id

    state = validate_approval_state(approval_state)
    if state:
        query['approvalState'] = state

    category = join_categories(categories)
    if category:
        query['category'] = category

    for key, value in (('fromDate', from_date), ('toDate', to_date)):
        value = validate_date_value(value, key)
        if value is not None:
            query[key] = format_iso_datetime(value)

    return query


class PayoutService:
    """
    Service for PayOS payout operations.
    Every payout request is signed with the payout checksum key.
    """

    def __init__(self, config: Optional[PayOSConfig] = None):
        self.config = config or PayOSConfig.from_settings()
        self.http_client = HTTPClient(self.config.api_base_url, timeout=self.config.timeout)

    def build_payout_payload(
        self,
        reference_id: str,
        amount: Union[int, str],
        description: str,
        to_bin: str,
        to_account_number: str,
        category: Optional[Iterable[Union[str, PayoutCategory]]] = None
    ) -> Dict[str, Any]:
        """Assemble the payout request body."""
        payload = {
            'referenceId': reference_id or '',
            'amount': validate_amount(amount),
            'description': description,
            'toBin': to_bin or '',
            'toAccountNumber': to_account_number or '',
        }
        if category:
            payload['category'] = [getattr(c, 'value', c) for c in category]
        return payload

    def create_payout(
        self,
        reference_id: str,
        amount: Union[int, str],
        description: str,
        to_bin: str,
        to_account_number: str,
        category: Optional[Iterable[Union[str, PayoutCategory]]] = None,
        idempotency_key: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Create a payout to a bank account.

        Args:
            reference_id: Merchant reference for the payout
            amount: Payout amount in VND
            description: Transfer description
            to_bin: Beneficiary bank BIN
            to_account_number: Beneficiary account number
            category: Payout categories (e.g. REFUND, WITHDRAWAL)
            idempotency_key: x-idempotency-key (random UUID if not provided)

        Returns:
            Dictionary containing code, desc and data (id, referenceId,
            transactions, category, approvalState, createdAt)

        Raises:
            ConfigurationError: If payout credentials are missing
            ValidationError: If input validation fails
            PayoutError: If payout creation fails
        """
        credentials = self.config.require_payout_credentials()

        payload = self.build_payout_payload(
            reference_id, amount, description, to_bin, to_account_number, category
        )
        logger.info(f"Creating payout for reference: {payload['referenceId']!r}")
        logger.debug(f"Payout payload: {payload}")

        signature = create_payout_signature(payload, credentials.checksum_key)
        headers = build_headers(
            credentials,
            idempotency_key=idempotency_key or str(uuid.uuid4()),
            signature=signature
        )

        try:
            response = self.http_client.post(
                endpoint=APIEndpoints.CREATE_PAYOUT,
                data=payload,
                headers=headers
            )
        except PayOSException as e:
            logger.error(f"Payout creation failed: {str(e)}")
            raise PayoutError(
                f"Failed to create payout: {str(e)}",
                error_code=e.error_code,
                response_data=e.response_data
            ) from e

        payout_id = (response.get('data') or {}).get('id')
        logger.info(f"Payout created successfully. Payout ID: {payout_id}")
        return response

    def get_payout(self, payout_id: str) -> Dict[str, Any]:
        """
        Retrieve a payout by its PayOS id.

        Raises:
            ValidationError: If payout id is empty
            PayoutError: If the query fails
        """
        credentials = self.config.require_payout_credentials()
        if not payout_id or not str(payout_id).strip():
            raise ValidationError("Payout id is required")

        logger.info(f"Querying payout: {payout_id}")
        try:
            return self.http_client.get(
                endpoint=APIEndpoints.GET_PAYOUT.format(id=str(payout_id).strip()),
                headers=build_headers(credentials)
            )
        except PayOSException as e:
            logger.error(f"Payout query failed: {str(e)}")
            raise PayoutError(
                f"Failed to query payout: {str(e)}",
                error_code=e.error_code,
                response_data=e.response_data
            ) from e

    def list_payouts(self, query: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        List payouts with optional filtering and pagination.

        Args:
            query: Filters as produced by build_payout_list_query()

        Returns:
            Dictionary containing code, desc and data (pagination, payouts)

        Raises:
            PayoutError: If the query fails
        """
        credentials = self.config.require_payout_credentials()
        query = query or {}

        params = {
            'limit': query.get('limit') or DEFAULT_PAYOUT_LIST_LIMIT,
            'offset': query.get('offset') or 0,
        }
        for key in ('referenceId', 'approvalState', 'category', 'fromDate', 'toDate'):
            if query.get(key):
                params[key] = query[key]

        logger.info(f"Listing payouts with params: {params}")
        try:
            return self.http_client.get(
                endpoint=APIEndpoints.LIST_PAYOUTS,
                params=params,
                headers=build_headers(credentials)
            )
        except PayOSException as e:
            logger.error(f"Payout listing failed: {str(e)}")
            raise PayoutError(
                f"Failed to list payouts: {str(e)}",
                error_code=e.error_code,
                response_data=e.response_data
            ) from e
