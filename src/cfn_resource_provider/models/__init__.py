"""
Data models for CloudFormation custom resource requests and responses.
"""

from .request import CustomResourceRequest, RequestType
from .response import CustomResourceResponse, OperationResult, ResponseStatus

__all__ = [
    'CustomResourceRequest',
    'RequestType',
    'CustomResourceResponse',
    'OperationResult',
    'ResponseStatus',
]
