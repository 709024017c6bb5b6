"""Lambda entry points for custom resource providers.

Uses AWS Lambda Powertools for structured logging of the Lambda context.

Usage:
    lambda_handler = make_lambda_handler(SecretProvider())
    sns_handler = make_lambda_handler(SecretProvider(), sns=True)
"""

from collections.abc import Callable
from typing import Any

from aws_lambda_powertools import Logger

from .provider import ResourceProvider
from .sns_envelope import SnsEnvelope

logger = Logger(service="cfn-resource-provider", log_uncaught_exceptions=True)


def make_lambda_handler(
    provider: ResourceProvider,
    sns: bool = False,
) -> Callable[[dict, Any], Any]:
    """
    Build a Lambda handler for `provider`.

    Args:
        provider: The provider that handles each CloudFormation request
        sns: True when the requests arrive wrapped in SNS notifications

    Returns:
        A Lambda function returning the CloudFormation response body, or a
        list of them for SNS events
    """
    envelope = SnsEnvelope(provider) if sns else None

    @logger.inject_lambda_context(log_event=False)
    def lambda_handler(event: dict, context) -> Any:
        if envelope is not None:
            responses = envelope.handle(event, context)
            logger.info("sns.handled", extra={"responses": len(responses)})
            return [response.to_cfn() for response in responses]

        response = provider.handle(event, context)
        logger.info(
            "request.handled",
            extra={
                "request_id": response.request_id,
                "status": response.to_cfn()["Status"],
            },
        )
        return response.to_cfn()

    return lambda_handler
