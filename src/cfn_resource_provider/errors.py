"""
Custom exceptions for the CloudFormation custom resource provider.

Provides:
- Typed exception hierarchy for envelope and delivery failures
- Error context preservation for debugging
- Wrapping of httpx transport errors into delivery errors
"""

from typing import Any

import httpx


class CfnResourceProviderError(Exception):
    """Base exception for all custom resource provider errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Envelope Errors
# =============================================================================


class EnvelopeError(CfnResourceProviderError):
    """Base class for batch envelope errors."""

    pass


class InvalidSnsEventError(EnvelopeError):
    """The event does not have the shape of an SNS notification batch."""

    pass


# =============================================================================
# Delivery Errors
# =============================================================================


class DeliveryError(CfnResourceProviderError):
    """Base class for failures sending the response to the ResponseURL."""

    pass


class DeliveryStatusError(DeliveryError):
    """The callback endpoint answered with a non-2xx status."""

    pass


class DeliveryTimeoutError(DeliveryError):
    """The callback endpoint did not answer in time."""

    pass


class DeliveryConnectionError(DeliveryError):
    """Could not connect to the callback endpoint."""

    pass


def wrap_httpx_error(exc: Exception, context: dict[str, Any] | None = None) -> DeliveryError:
    """
    Wrap an httpx exception in our typed error hierarchy.

    Args:
        exc: The original exception
        context: Additional context for debugging

    Returns:
        Typed DeliveryError subclass
    """
    ctx = context or {}
    ctx['original_error'] = str(exc)
    ctx['error_type'] = type(exc).__name__

    if isinstance(exc, httpx.HTTPStatusError):
        ctx['status_code'] = exc.response.status_code
        return DeliveryStatusError(
            f"ResponseURL returned HTTP {exc.response.status_code}",
            context=ctx,
        )
    elif isinstance(exc, httpx.TimeoutException):
        return DeliveryTimeoutError(
            f"Timed out sending response: {exc}",
            context=ctx,
        )
    elif isinstance(exc, httpx.ConnectError):
        return DeliveryConnectionError(
            f"Could not connect to ResponseURL: {exc}",
            context=ctx,
        )
    else:
        return DeliveryError(
            f"Failed to send response: {exc}",
            context=ctx,
        )
