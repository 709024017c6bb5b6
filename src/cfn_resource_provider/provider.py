"""
Base class for CloudFormation custom resource providers.

A concrete provider subclasses ResourceProvider, declares the JSON schema of
its properties in `request_schema` and implements create(), update() and
delete(). The base class owns the request cycle:

1. Seed a SUCCESS response from the request
2. Check resource type, request shape and properties (schema defaults are
   injected into the properties)
3. Dispatch to create/update/delete
4. Convert any exception into a FAILED response
5. Truncate the reason and send the response to the ResponseURL

Failure to validate a Delete request is reported as SUCCESS, otherwise the
owning stack can never be deleted.
"""

import copy
from collections.abc import Callable
from typing import Any, ClassVar

import structlog

from .delivery import DeliveryResult, send
from .logging import StageTimer, request_log_context
from .models import (
    CustomResourceRequest,
    CustomResourceResponse,
    OperationResult,
    RequestType,
    ResponseStatus,
)
from .schemas import CFN_REQUEST_SCHEMA, CFN_RESPONSE_SCHEMA
from .validation import validate

logger = structlog.get_logger(__name__)

# CloudFormation rejects a failed Create without a physical resource id
COULD_NOT_CREATE = 'could-not-create'

MAX_REASON_LENGTH = 200

DeliverFn = Callable[..., DeliveryResult | None]


class ResourceProvider:
    """
    Handles CloudFormation custom resource requests for one resource type.

    Instances can be reused for consecutive requests; every call to
    `handle` replaces the request and response. Not safe for concurrent use.
    """

    # JSON schema for the ResourceProperties. Override in your subclass.
    request_schema: ClassVar[dict[str, Any]] = {'type': 'object'}

    # Explicit resource type; defaults to Custom::<ClassName minus "Provider">
    resource_type_name: ClassVar[str | None] = None

    def __init__(self, deliver: DeliverFn | None = None):
        self.deliver: DeliverFn = deliver or send
        self.event: Any = None
        self.context: Any = None
        self.request = CustomResourceRequest()
        self.response = CustomResourceResponse()
        self.properties: dict[str, Any] = {}
        self.old_properties: dict[str, Any] | None = None
        self.asynchronous = False
        self.delivery_result: DeliveryResult | None = None

    # =========================================================================
    # Request cycle
    # =========================================================================

    def set_request(self, event: Any, context: Any) -> None:
        """Set the Lambda event to process and seed the default response."""
        self.event = event
        self.context = context
        self.asynchronous = False
        self.delivery_result = None
        self.request = CustomResourceRequest.from_event(event)
        self.response = CustomResourceResponse.seed(self.request)
        # working copies; coercion and schema defaults rewrite them
        self.properties = copy.deepcopy(self.request.resource_properties)
        self.old_properties = copy.deepcopy(self.request.old_resource_properties)

    def handle(self, request: Any, context: Any) -> CustomResourceResponse:
        """
        Handle one CloudFormation request and send the response.

        Never raises: every failure ends up as a FAILED response.

        Args:
            request: The CloudFormation custom resource event
            context: The Lambda context, passed on to the delivery function

        Returns:
            The response, also when delivery was left to an asynchronous subclass
        """
        self.set_request(request, context)
        timer = StageTimer()

        with request_log_context(self.request):
            logger.debug('request.received', request=request)

            with timer.stage('execute'):
                self.execute()
            self.truncate_reason()

            if not self.asynchronous:
                with timer.stage('deliver'):
                    try:
                        self.send_response()
                    except Exception:
                        logger.exception('response.delivery_error')
            else:
                logger.debug('response.deferred', reason='asynchronous provider')

            logger.info(
                'request.completed',
                request_type=self.request_type,
                status=self.status,
                physical_resource_id=self.physical_resource_id,
                **timer.summary(),
            )

        return self.response

    def execute(self) -> None:
        """Validate the request and dispatch it to create, update or delete."""
        try:
            if self._passes_checks():
                self._apply(self._dispatch())
                self.is_valid_cfn_response()
            elif self.request_type == RequestType.DELETE:
                # never block the deletion of a stack on a broken resource
                self.response.status = ResponseStatus.SUCCESS
                self.response.reason = None
        except Exception as e:
            if self.status == ResponseStatus.SUCCESS:
                self.fail(str(e) or type(e).__name__)
            logger.exception('request.operation_failed', request_type=self.request_type)
        finally:
            if (
                not self.physical_resource_id
                and self.status == ResponseStatus.FAILED
                and self.request_type == RequestType.CREATE
            ):
                self.physical_resource_id = COULD_NOT_CREATE

    def _passes_checks(self) -> bool:
        # an error raised while checking counts as a failed check
        try:
            return (
                self.is_supported_request()
                and self.is_valid_cfn_request()
                and self.is_valid_request()
            )
        except Exception as e:
            logger.exception('request.validation_error', request_type=self.request_type)
            if self.status == ResponseStatus.SUCCESS:
                self.fail(str(e) or type(e).__name__)
            return False

    def _dispatch(self) -> OperationResult | None:
        if self.request_type == RequestType.CREATE:
            return self.create()
        elif self.request_type == RequestType.UPDATE:
            return self.update()
        else:
            return self.delete()

    def _apply(self, result: OperationResult | None) -> None:
        if result is None:
            return
        if result.success:
            self.success(result.reason)
        else:
            self.fail(result.reason or f"{type(self).__name__} reported a failure")

    def truncate_reason(self) -> None:
        """Limit the reason to what CloudFormation accepts."""
        reason = self.reason
        if reason and len(reason) > MAX_REASON_LENGTH:
            logger.warning('response.reason_truncated', reason=reason)
            self.reason = reason[:MAX_REASON_LENGTH] + '...'

    def send_response(self) -> DeliveryResult | None:
        """Send the response to the ResponseURL of the request."""
        self.truncate_reason()
        logger.debug(
            'response.sending',
            response_url=self.response_url,
            response=self.response.to_cfn(),
        )
        self.delivery_result = self.deliver(
            self.request,
            self.context,
            self.status,
            self.response.data,
            self.physical_resource_id,
            self.no_echo,
            reason=self.reason,
        )
        return self.delivery_result

    # =========================================================================
    # Validation
    # =========================================================================

    @property
    def custom_cfn_resource_name(self) -> str:
        """The custom resource type this provider implements."""
        if self.resource_type_name:
            return self.resource_type_name
        return 'Custom::' + type(self).__name__.replace('Provider', '')

    def is_supported_resource_type(self) -> bool:
        return self.resource_type == self.custom_cfn_resource_name

    def is_supported_request(self) -> bool:
        """True if the request is for our resource type, otherwise sets status and reason."""
        supported = self.is_supported_resource_type()
        if not supported:
            self.fail(
                f"ResourceType {self.resource_type} not supported by provider "
                f"{self.custom_cfn_resource_name}"
            )
        return supported

    def is_valid_cfn_request(self) -> bool:
        """True if the event is a well-formed CloudFormation request, otherwise sets status and reason."""
        errors: list[str] = []
        valid = validate(self.event, CFN_REQUEST_SCHEMA, errors)
        if not valid:
            logger.warning('request.invalid', errors=errors)
            self.fail(f"invalid CloudFormation request received: {self.event}")
        return valid

    def is_valid_request(self) -> bool:
        """
        True if the properties match `request_schema`, otherwise sets status and reason.

        Property types are converted first; optional properties with a
        default in the schema are added to `self.properties`.
        """
        self.properties = self.convert_property_types(self.properties)
        errors: list[str] = []
        valid = validate(self.properties, self.request_schema, errors)
        if not valid:
            logger.warning('request.invalid_properties', errors=errors)
            self.fail(f"invalid resource properties: {self.properties}")
        return valid

    def is_valid_cfn_response(self) -> bool:
        """True if the response is well-formed. Only logs when it is not."""
        errors: list[str] = []
        valid = validate(self.response.to_cfn(), CFN_RESPONSE_SCHEMA, errors)
        if not valid:
            logger.warning('response.invalid', response=self.response.to_cfn(), errors=errors)
        return valid

    def convert_property_types(self, properties: dict[str, Any]) -> dict[str, Any]:
        """
        Hook to coerce the string values CloudFormation sends.

        Called before schema validation; returns the properties to validate.
        Override with e.g. `heuristic_convert_property_types(properties)`.
        """
        return properties

    # =========================================================================
    # Request accessors
    # =========================================================================

    def get(self, name: str, default: Any = None) -> Any:
        """Returns the resource property `name`, or `default` if absent."""
        return self.properties.get(name, default)

    def get_old(self, name: str, default: Any = None) -> Any:
        """Returns the old resource property `name`, or `default` if absent."""
        if self.old_properties is None:
            return default
        return self.old_properties.get(name, default)

    @property
    def request_type(self) -> RequestType | None:
        return self.request.request_type

    @property
    def resource_type(self) -> str:
        return self.request.resource_type

    @property
    def response_url(self) -> str:
        return self.request.response_url

    @property
    def stack_id(self) -> str:
        return self.request.stack_id

    @property
    def request_id(self) -> str:
        return self.request.request_id

    @property
    def logical_resource_id(self) -> str:
        return self.request.logical_resource_id

    # =========================================================================
    # Response accessors
    # =========================================================================

    @property
    def status(self) -> ResponseStatus:
        return self.response.status

    @status.setter
    def status(self, value: ResponseStatus) -> None:
        self.response.status = ResponseStatus(value)

    @property
    def reason(self) -> str | None:
        return self.response.reason

    @reason.setter
    def reason(self, value: str | None) -> None:
        self.response.reason = value

    @property
    def physical_resource_id(self) -> str:
        """The PhysicalResourceId of the response, initialized from the request."""
        return self.response.physical_resource_id

    @physical_resource_id.setter
    def physical_resource_id(self, value: str) -> None:
        self.response.physical_resource_id = value

    @property
    def no_echo(self) -> bool | None:
        return self.response.no_echo

    @no_echo.setter
    def no_echo(self, value: bool) -> None:
        self.response.no_echo = value

    def set_attribute(self, name: str, value: Any) -> None:
        """Sets the attribute `name`, retrievable with Fn::GetAtt."""
        if self.response.data is None:
            self.response.data = {}
        self.response.data[name] = value

    def get_attribute(self, name: str) -> Any:
        if self.response.data is None:
            return None
        return self.response.data.get(name)

    def success(self, reason: str | None = None) -> None:
        """Sets status to SUCCESS, with an optional reason."""
        self.response.status = ResponseStatus.SUCCESS
        if reason is not None:
            self.response.reason = reason

    def fail(self, reason: str) -> None:
        """Sets status to FAILED with `reason`."""
        self.response.status = ResponseStatus.FAILED
        if reason:
            self.response.reason = reason

    # =========================================================================
    # Operations, override in your subclass
    # =========================================================================

    def create(self) -> OperationResult | None:
        self.fail(f"create not implemented by {type(self).__name__}")
        return None

    def update(self) -> OperationResult | None:
        self.fail(f"update not implemented by {type(self).__name__}")
        return None

    def delete(self) -> OperationResult | None:
        self.success(f"delete not implemented by {type(self).__name__}")
        return None
