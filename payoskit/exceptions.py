"""
Custom exceptions for PayOS signing and gateway operations.
"""


class PayOSException(Exception):
    """Base exception for all PayOS-related errors."""
    
    def __init__(self, message, error_code=None, response_data=None):
        self.message = message
        self.error_code = error_code
        self.response_data = response_data
        super().__init__(self.message)


class SerializationError(PayOSException):
    """Raised when a payload cannot be put into canonical form."""
    pass


class ConfigurationError(PayOSException):
    """Raised when a secret or credential is missing."""
    pass


class AuthenticationError(PayOSException):
    """Raised when PayOS rejects the client credentials."""
    pass


class APIError(PayOSException):
    """Raised when the PayOS API returns an error."""
    pass


class PaymentError(PayOSException):
    """Raised when a payment link operation fails."""
    pass


class PayoutError(PayOSException):
    """Raised when a payout operation fails."""
    pass


class ValidationError(PayOSException):
    """Raised when input validation fails."""
    pass


class InvalidAmountError(ValidationError):
    """Raised when amount is invalid."""
    pass


class InvalidOrderCodeError(ValidationError):
    """Raised when an order code is out of range."""
    pass
