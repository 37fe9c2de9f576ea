"""
PayOS Payment Utility for Django

Request signing and verification for the PayOS gateway, plus a thin
service layer for payment links and payouts.
"""

__version__ = "0.1.0"
