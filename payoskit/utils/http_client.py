"""
HTTP client for PayOS API communication.
"""

import requests
import logging
from typing import Dict, Any, Optional
from payoskit.config import PayOSCredentials
from payoskit.exceptions import APIError, AuthenticationError
from payoskit.constants import (
    DEFAULT_TIMEOUT, SUCCESS_CODE,
    HEADER_API_KEY, HEADER_CLIENT_ID, HEADER_IDEMPOTENCY_KEY, HEADER_SIGNATURE
)

logger = logging.getLogger(__name__)

_SENSITIVE_HEADERS = (HEADER_API_KEY, HEADER_SIGNATURE)


def build_headers(
    credentials: PayOSCredentials,
    idempotency_key: Optional[str] = None,
    signature: Optional[str] = None
) -> Dict[str, str]:
    """
    Build request headers for one PayOS call.

    A new dictionary is returned every time; nothing is shared between
    requests.

    Args:
        credentials: Client id and API key to authenticate with
        idempotency_key: Optional x-idempotency-key value
        signature: Optional x-signature value

    Returns:
        Header dictionary
    """
    headers = {
        'Content-Type': 'application/json',
        HEADER_CLIENT_ID: credentials.client_id,
        HEADER_API_KEY: credentials.api_key,
    }
    if idempotency_key:
        headers[HEADER_IDEMPOTENCY_KEY] = idempotency_key
    if signature:
        headers[HEADER_SIGNATURE] = signature
    return headers


class HTTPClient:
    """
    HTTP client wrapper for PayOS API requests.
    Handles request/response, error handling and logging.
    Each call is attempted once.
    """

    def __init__(self, base_url: str, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize HTTP client.

        Args:
            base_url: Base URL for API requests
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _get_full_url(self, endpoint: str) -> str:
        """Get full URL for endpoint."""
        endpoint = endpoint.lstrip('/')
        return f"{self.base_url}/{endpoint}"

    def _log_request(self, method: str, url: str, headers: Dict, data: Optional[Dict] = None):
        """Log API request details."""
        logger.info(f"PayOS API Request: {method} {url}")
        logger.debug(f"Headers: {self._sanitize_headers(headers)}")
        if data:
            logger.debug(f"Payload: {data}")

    def _log_response(self, response: requests.Response):
        """Log API response details."""
        logger.info(f"PayOS API Response: {response.status_code}")
        try:
            logger.debug(f"Response: {response.json()}")
        except ValueError:
            logger.debug(f"Response: {response.text}")

    def _sanitize_headers(self, headers: Dict) -> Dict:
        """Remove sensitive data from headers for logging."""
        sanitized = headers.copy()
        for name in _SENSITIVE_HEADERS:
            if name in sanitized:
                sanitized[name] = '***'
        return sanitized

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """
        Handle API response and extract data.

        Args:
            response: Response object from requests

        Returns:
            Response data as dictionary

        Raises:
            APIError: If response indicates an error
            AuthenticationError: If authentication fails
        """
        self._log_response(response)

        if response.status_code == 401:
            raise AuthenticationError(
                "Authentication failed. Please check your PayOS client id and API key.",
                error_code=401,
                response_data=response.text
            )

        if response.status_code == 403:
            raise AuthenticationError(
                "Access forbidden. Please check your PayOS permissions.",
                error_code=403,
                response_data=response.text
            )

        if response.status_code >= 400:
            error_message = f"API request failed with status {response.status_code}"
            try:
                error_data = response.json()
                error_message = error_data.get('desc') or error_data.get('message') or error_message
            except ValueError:
                error_message = response.text or error_message

            raise APIError(
                error_message,
                error_code=response.status_code,
                response_data=response.text
            )

        try:
            body = response.json()
        except ValueError as e:
            raise APIError(
                f"Failed to parse API response: {str(e)}",
                response_data=response.text
            )

        # PayOS reports business failures with HTTP 200 and a non-"00" code
        if isinstance(body, dict) and 'code' in body and body['code'] != SUCCESS_CODE:
            raise APIError(
                body.get('desc') or f"PayOS returned code {body['code']}",
                error_code=body['code'],
                response_data=body
            )

        return body

    def post(
        self,
        endpoint: str,
        data: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Make POST request to API.

        Args:
            endpoint: API endpoint path
            data: Request payload
            headers: Request headers

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})
        headers.setdefault('Content-Type', 'application/json')

        self._log_request('POST', url, headers, data)

        try:
            response = self.session.post(
                url,
                json=data,
                headers=headers,
                timeout=self.timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise APIError(f"Connection to PayOS failed: {str(e)}")

        return self._handle_response(response)

    def get(
        self,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        """
        Make GET request to API.

        Args:
            endpoint: API endpoint path
            params: Query parameters
            headers: Request headers

        Returns:
            Response data
        """
        url = self._get_full_url(endpoint)
        headers = dict(headers or {})

        self._log_request('GET', url, headers)

        try:
            response = self.session.get(
                url,
                params=params,
                headers=headers,
                timeout=self.timeout
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            raise APIError(f"Connection to PayOS failed: {str(e)}")

        return self._handle_response(response)

    def close(self):
        """Close the session."""
        self.session.close()
