"""
Error taxonomy for the order generation pipeline

InvalidRequest and InsufficientReferenceData are raised by our own code.
ShopifyTransportError / ShopifyRateLimitError are raised by the connector
when the remote call itself fails. Server-side validation failures
(userErrors) are NOT exceptions: they come back as RejectedByServer outcomes.

Author: TM3
Date: 2026-10-18
"""
from typing import Optional


class OrderSeederError(Exception):
    """Base class for all order seeder errors"""


class InvalidRequest(OrderSeederError):
    """Malformed top-level request (count <= 0, bad batch size, ...)"""


class InsufficientReferenceData(OrderSeederError):
    """Customer/product pools cannot produce a valid order payload"""


class ShopifyTransportError(OrderSeederError):
    """
    The remote call failed before a structured orderCreate payload came back

    Covers network errors, timeouts, non-2xx responses and top-level GraphQL
    `errors` arrays.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ShopifyRateLimitError(ShopifyTransportError):
    """Shopify throttled the request (HTTP 429 or GraphQL THROTTLED)"""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 retry_after: Optional[float] = None):
        super().__init__(message, status_code=status_code)
        self.retry_after = retry_after
