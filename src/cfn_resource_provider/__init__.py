"""
CloudFormation Custom Resource Provider

A base class for implementing CloudFormation custom resources as AWS Lambda
functions: request validation against JSON schemas, dispatch to
create/update/delete and delivery of the response to the ResponseURL,
including requests wrapped in SNS notifications.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .provider import COULD_NOT_CREATE, ResourceProvider
from .sns_envelope import SnsEnvelope
from .handler import make_lambda_handler
from .coercion import heuristic_convert_property_types
from .delivery import DeliveryResult, send
from .validation import validate
from .models import (
    CustomResourceRequest,
    CustomResourceResponse,
    OperationResult,
    RequestType,
    ResponseStatus,
)
from .logging import (
    configure_logging,
    request_log_context,
)
from .errors import (
    CfnResourceProviderError,
    EnvelopeError,
    InvalidSnsEventError,
    DeliveryError,
)

__all__ = [
    # Version
    '__version__',
    # Providers
    'ResourceProvider',
    'COULD_NOT_CREATE',
    'SnsEnvelope',
    'make_lambda_handler',
    # Helpers
    'heuristic_convert_property_types',
    'validate',
    'send',
    'DeliveryResult',
    # Models
    'CustomResourceRequest',
    'CustomResourceResponse',
    'OperationResult',
    'RequestType',
    'ResponseStatus',
    # Logging
    'configure_logging',
    'request_log_context',
    # Errors
    'CfnResourceProviderError',
    'EnvelopeError',
    'InvalidSnsEventError',
    'DeliveryError',
]
