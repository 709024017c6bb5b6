"""Unpack CloudFormation requests delivered through an SNS topic.

When a custom resource is SNS-backed, the CloudFormation request arrives as
the `Sns.Message` string of an SNS record. One SNS event can carry several
records; each is handled as an independent custom resource request.
"""

import json
from typing import Any

import structlog
from aws_lambda_powertools.utilities.data_classes import SNSEvent

from .errors import InvalidSnsEventError
from .models import CustomResourceResponse
from .provider import ResourceProvider
from .schemas import SNS_SCHEMA
from .validation import validate

logger = structlog.get_logger(__name__)


class SnsEnvelope:
    """Feeds each CloudFormation request in an SNS event to a ResourceProvider."""

    def __init__(self, provider: ResourceProvider):
        self.provider = provider

    def handle(self, event: Any, context: Any) -> list[CustomResourceResponse]:
        """
        Handle every request in the SNS event, in record order.

        Raises:
            InvalidSnsEventError: if the event is not an SNS batch or a message
                is not a JSON object. No request is handled in that case.
        """
        requests = self.parse_requests(event)
        logger.info('sns.records_received', record_count=len(requests))

        responses = []
        for request in requests:
            responses.append(self.provider.handle(request, context))
        return responses

    def parse_requests(self, event: Any) -> list[dict[str, Any]]:
        """Validate the SNS event and decode the CloudFormation request of every record."""
        if not self.is_valid_sns_request(event):
            raise InvalidSnsEventError(
                'The provided event is not compliant with the SNS schema.'
            )

        requests = []
        for index, record in enumerate(SNSEvent(event).records):
            try:
                request = json.loads(record.sns.message)
            except json.JSONDecodeError as e:
                raise InvalidSnsEventError(
                    f"Invalid JSON in SNS message: {e}",
                    context={'record': index},
                ) from e
            if not isinstance(request, dict):
                raise InvalidSnsEventError(
                    'SNS message is not a CloudFormation request object',
                    context={'record': index, 'message_type': type(request).__name__},
                )
            requests.append(request)
        return requests

    def is_valid_sns_request(self, event: Any) -> bool:
        """True if `event` is an SNS batch, otherwise marks the provider response as failed."""
        errors: list[str] = []
        valid = validate(event, SNS_SCHEMA, errors)
        if not valid:
            logger.error('sns.invalid_event', errors=errors)
            # earlier responses were already returned to the caller
            self.provider.response = CustomResourceResponse()
            self.provider.fail(f"invalid CloudFormation Request received: {event}")
        return valid
