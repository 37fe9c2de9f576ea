"""
Configuration management for the PayOS gateway utility.
"""

from dataclasses import dataclass, field
from typing import Tuple

from django.conf import settings

from .constants import DEFAULT_API_BASE_URL, DEFAULT_TIMEOUT
from .exceptions import ConfigurationError


@dataclass(frozen=True)
class PayOSCredentials:
    """One PayOS channel's client id, API key and checksum key."""
    client_id: str = ''
    api_key: str = ''
    checksum_key: str = ''

    @property
    def is_complete(self):
        return bool(self.client_id and self.api_key and self.checksum_key)


@dataclass(frozen=True)
class PayOSConfig:
    """
    Snapshot of PayOS settings.

    Payment links and payouts use separate credential sets. The value is
    immutable; to pick up changed settings build a new one with
    ``PayOSConfig.from_settings()``.
    """
    api_base_url: str = DEFAULT_API_BASE_URL
    payment: PayOSCredentials = field(default_factory=PayOSCredentials)
    payout: PayOSCredentials = field(default_factory=PayOSCredentials)
    timeout: int = DEFAULT_TIMEOUT
    webhook_verify_ips: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.api_base_url:
            raise ConfigurationError("PAYOS_API_BASE_URL is not configured.")

    @classmethod
    def from_settings(cls):
        """Load configuration from Django settings."""
        return cls(
            api_base_url=getattr(settings, 'PAYOS_API_BASE_URL', DEFAULT_API_BASE_URL),
            payment=PayOSCredentials(
                client_id=getattr(settings, 'PAYOS_CLIENT_ID', ''),
                api_key=getattr(settings, 'PAYOS_API_KEY', ''),
                checksum_key=getattr(settings, 'PAYOS_CHECKSUM_KEY', ''),
            ),
            payout=PayOSCredentials(
                client_id=getattr(settings, 'PAYOS_PAYOUT_CLIENT_ID', ''),
                api_key=getattr(settings, 'PAYOS_PAYOUT_API_KEY', ''),
                checksum_key=getattr(settings, 'PAYOS_PAYOUT_CHECKSUM_KEY', ''),
            ),
            timeout=getattr(settings, 'PAYOS_TIMEOUT', DEFAULT_TIMEOUT),
            webhook_verify_ips=tuple(getattr(settings, 'PAYOS_WEBHOOK_VERIFY_IPS', ())),
        )

    @property
    def is_payment_configured(self):
        """Check if payment link credentials are complete."""
        return self.payment.is_complete

    @property
    def is_payout_configured(self):
        """Check if payout credentials are complete."""
        return self.payout.is_complete

    def require_payment_credentials(self) -> PayOSCredentials:
        if not self.is_payment_configured:
            raise ConfigurationError(
                "Missing PayOS credentials (PAYOS_CLIENT_ID/PAYOS_API_KEY/PAYOS_CHECKSUM_KEY). "
                "Please add them to your settings.py or .env file."
            )
        return self.payment

    def require_payout_credentials(self) -> PayOSCredentials:
        if not self.is_payout_configured:
            raise ConfigurationError(
                "Missing PayOS payout credentials "
                "(PAYOS_PAYOUT_CLIENT_ID/PAYOS_PAYOUT_API_KEY/PAYOS_PAYOUT_CHECKSUM_KEY). "
                "Please add them to your settings.py or .env file."
            )
        return self.payout

    def get_full_url(self, endpoint):
        """
        Get full URL for an API endpoint.

        Args:
            endpoint: API endpoint path

        Returns:
            Full URL combining base URL and endpoint
        """
        base = self.api_base_url.rstrip('/')
        endpoint = endpoint.lstrip('/')
        return f"{base}/{endpoint}"
