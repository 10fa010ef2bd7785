from typing import Optional


class BaseServiceError(Exception):
    """Base exception for all service-related errors."""
    pass

class ShippingServiceError(BaseServiceError):
    """Base exception for shipping rate errors."""
    pass

class DHLServiceError(ShippingServiceError):
    """Base exception for DHL-specific errors."""
    pass

class DHLAPIError(DHLServiceError):
    """Raised when the DHL API answers with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code

class DHLRequestError(DHLServiceError):
    """Raised when the DHL API cannot be reached (connection refused, timeout)."""
    pass

class DHLResponseError(DHLServiceError):
    """Raised when a DHL response carries no usable billed price."""
    pass
