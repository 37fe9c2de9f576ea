"""
Signature generation and verification for PayOS requests.

Two independent formats are signed here. Payout requests are signed over the
canonical query string of the whole payload, while payment link requests are
signed over five fixed fields joined in a literal, unescaped string.
"""

import hashlib
import hmac
import logging
from collections.abc import Mapping
from typing import Any, Dict, Union

from ..exceptions import ConfigurationError, SerializationError
from .canonical import build_query_string, canonicalize, format_scalar

logger = logging.getLogger(__name__)


def _require_secret(secret: str):
    if not secret or not isinstance(secret, str):
        raise ConfigurationError(
            "Checksum key is not configured. "
            "Please pass the PayOS checksum key for this request."
        )


def _hmac_sha256(data: str, secret: str) -> str:
    try:
        message = data.encode('utf-8')
    except UnicodeEncodeError as e:
        raise SerializationError(f"Signature data cannot be encoded as UTF-8: {str(e)}") from e

    return hmac.new(
        secret.encode('utf-8'),
        message,
        hashlib.sha256
    ).hexdigest()


def build_payout_signature_data(payload: Dict[str, Any]) -> str:
    """
    Build the canonical query string that a payout signature covers.

    Args:
        payload: Payout payload dictionary

    Returns:
        Query string with sorted, percent-encoded keys and values

    Raises:
        SerializationError: If the payload is not a mapping or cannot be canonicalized
    """
    if not isinstance(payload, Mapping):
        raise SerializationError(
            f"Payout payload must be a mapping. Got: {type(payload).__name__}"
        )

    return build_query_string(canonicalize(payload, sort_arrays=False))


def create_payout_signature(payload: Dict[str, Any], secret: str) -> str:
    """
    Generate the x-signature value for a payout request.

    Args:
        payload: Payout payload dictionary, in any key order
        secret: Payout checksum key

    Returns:
        Lowercase hex HMAC-SHA256 signature

    Raises:
        ConfigurationError: If the secret is empty
        SerializationError: If the payload cannot be canonicalized
    """
    _require_secret(secret)

    data = build_payout_signature_data(payload)
    logger.debug(f"Payout signature data string: {data}")

    return _hmac_sha256(data, secret)


def verify_payout_signature(payload: Dict[str, Any], secret: str, signature: str) -> bool:
    """
    Verify a payout signature presented by PayOS or another caller.

    The comparison ignores letter case and runs in constant time.

    Args:
        payload: Payload the signature claims to cover
        secret: Payout checksum key
        signature: Presented signature

    Returns:
        True if the signature matches, False otherwise
    """
    expected = create_payout_signature(payload, secret)

    if not isinstance(signature, str) or not signature or not signature.isascii():
        return False

    return hmac.compare_digest(
        expected.encode('ascii'),
        signature.lower().encode('ascii')
    )


def build_payment_link_data(
    amount: Union[int, float],
    cancel_url: str,
    description: str,
    order_code: Union[int, str],
    return_url: str
) -> str:
    """
    Build the literal string a payment link signature covers.

    Fields are joined in alphabetical order by name and are not escaped.
    """
    return (
        f"amount={format_scalar(amount)}"
        f"&cancelUrl={format_scalar(cancel_url)}"
        f"&description={format_scalar(description)}"
        f"&orderCode={format_scalar(order_code)}"
        f"&returnUrl={format_scalar(return_url)}"
    )


def create_payment_link_signature(
    amount: Union[int, float],
    cancel_url: str,
    description: str,
    order_code: Union[int, str],
    return_url: str,
    secret: str
) -> str:
    """
    Generate the signature field for a payment link request.

    Args:
        amount: Payment amount
        cancel_url: URL PayOS redirects to on cancel
        description: Payment description
        order_code: Merchant order code
        return_url: URL PayOS redirects to on success
        secret: Payment checksum key

    Returns:
        Lowercase hex HMAC-SHA256 signature

    Raises:
        ConfigurationError: If the secret is empty
    """
    _require_secret(secret)

    data = build_payment_link_data(amount, cancel_url, description, order_code, return_url)
    logger.debug(f"Payment link signature data string: {data}")

    return _hmac_sha256(data, secret)


def verify_webhook_ip(request_ip: str, allowed_ips: list) -> bool:
    """
    Verify that webhook request comes from allowed IP addresses.

    Args:
        request_ip: IP address of the request
        allowed_ips: List of allowed IP addresses

    Returns:
        True if IP is allowed, False otherwise
    """
    if not allowed_ips:
        return True

    return request_ip in allowed_ips
