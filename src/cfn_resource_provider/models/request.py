"""
CloudFormation custom resource request model.

Field names are snake_case; the CloudFormation key names are accepted as
aliases so a raw Lambda event can be validated directly. The request is
immutable once received.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError


class RequestType(str, Enum):
    """Operation CloudFormation asks the provider to perform."""

    CREATE = 'Create'
    UPDATE = 'Update'
    DELETE = 'Delete'


class CustomResourceRequest(BaseModel):
    """
    A CloudFormation custom resource request.

    Every field has a default so that a malformed event can still be
    represented; the request schema check in the provider decides whether
    the event is acceptable.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra='allow')

    request_type: RequestType | None = Field(default=None, alias='RequestType')
    response_url: str = Field(default='', alias='ResponseURL')
    stack_id: str = Field(default='', alias='StackId')
    request_id: str = Field(default='', alias='RequestId')
    resource_type: str = Field(default='', alias='ResourceType')
    logical_resource_id: str = Field(default='', alias='LogicalResourceId')
    resource_properties: dict[str, Any] = Field(default_factory=dict, alias='ResourceProperties')
    old_resource_properties: dict[str, Any] | None = Field(
        default=None,
        alias='OldResourceProperties',
        description='Previous properties, only sent on Update',
    )
    physical_resource_id: str | None = Field(
        default=None,
        alias='PhysicalResourceId',
        description='Sent on Update and Delete',
    )
    service_token: str | None = Field(default=None, alias='ServiceToken')

    @classmethod
    def from_event(cls, event: Any) -> 'CustomResourceRequest':
        """
        Build a request from a raw CloudFormation event. Never raises.

        An event that does not validate is kept as sent, field by field,
        so identifiers can still be echoed back in the response.
        """
        if not isinstance(event, Mapping):
            return cls.model_construct()
        try:
            return cls.model_validate(event)
        except PydanticValidationError:
            values = {
                name: event[field.alias]
                for name, field in cls.model_fields.items()
                if field.alias in event
            }
            return cls.model_construct(**values)

    def to_cfn(self) -> dict[str, Any]:
        """Serialize back to the CloudFormation key names."""
        return self.model_dump(by_alias=True, exclude_none=True, mode='json')
