"""
CloudFormation custom resource response model.

The response is a mutable accumulator: the provider seeds it from the
request and the create/update/delete operations fill it in.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .request import CustomResourceRequest


class ResponseStatus(str, Enum):
    """Outcome reported back to CloudFormation."""

    SUCCESS = 'SUCCESS'
    FAILED = 'FAILED'


class CustomResourceResponse(BaseModel):
    """A CloudFormation custom resource response."""

    model_config = ConfigDict(populate_by_name=True)

    status: ResponseStatus = Field(default=ResponseStatus.SUCCESS, alias='Status')
    reason: str | None = Field(default=None, alias='Reason')
    stack_id: str = Field(default='', alias='StackId')
    request_id: str = Field(default='', alias='RequestId')
    logical_resource_id: str = Field(default='', alias='LogicalResourceId')
    physical_resource_id: str = Field(default='', alias='PhysicalResourceId')
    data: dict[str, Any] | None = Field(
        default=None,
        alias='Data',
        description='Attributes available through Fn::GetAtt',
    )
    no_echo: bool | None = Field(default=None, alias='NoEcho')

    @classmethod
    def seed(cls, request: CustomResourceRequest) -> 'CustomResourceResponse':
        """Default SUCCESS response with the identifiers copied from `request`."""
        # model_construct: identifiers are echoed verbatim, even malformed ones
        return cls.model_construct(
            status=ResponseStatus.SUCCESS,
            stack_id=request.stack_id,
            request_id=request.request_id,
            logical_resource_id=request.logical_resource_id,
            physical_resource_id=request.physical_resource_id or '',
        )

    def to_cfn(self) -> dict[str, Any]:
        """Serialize to the JSON body expected at the ResponseURL."""
        return self.model_dump(by_alias=True, exclude_none=True, mode='json')


class OperationResult(BaseModel):
    """
    Explicit outcome of a create/update/delete operation.

    Operations may return one of these instead of calling
    `success()` / `fail()` on the provider.
    """

    success: bool
    reason: str | None = None

    @classmethod
    def ok(cls, reason: str | None = None) -> 'OperationResult':
        return cls(success=True, reason=reason)

    @classmethod
    def failed(cls, reason: str) -> 'OperationResult':
        return cls(success=False, reason=reason)
