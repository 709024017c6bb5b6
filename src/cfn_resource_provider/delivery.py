"""HTTP client for sending custom resource responses to the CloudFormation ResponseURL."""

import json
from dataclasses import dataclass
from typing import Any

import httpx
import structlog

from .config import get_settings
from .errors import DeliveryError, wrap_httpx_error
from .models import CustomResourceRequest, ResponseStatus

logger = structlog.get_logger(__name__)


@dataclass
class DeliveryResult:
    """Result of sending a response to the ResponseURL."""

    success: bool
    status_code: int | None = None
    error: DeliveryError | None = None


def build_response_body(
    request: CustomResourceRequest,
    context: Any,
    status: ResponseStatus | str,
    data: dict[str, Any] | None,
    physical_resource_id: str | None,
    no_echo: bool | None = None,
    reason: str | None = None,
) -> dict[str, Any]:
    """Assemble the JSON body CloudFormation expects at the ResponseURL."""
    log_stream_name = getattr(context, 'log_stream_name', None)
    body: dict[str, Any] = {
        'Status': ResponseStatus(status).value,
        'Reason': reason or f"See the details in CloudWatch Log Stream: {log_stream_name}",
        'PhysicalResourceId': physical_resource_id or log_stream_name,
        'StackId': request.stack_id,
        'RequestId': request.request_id,
        'LogicalResourceId': request.logical_resource_id,
        'NoEcho': bool(no_echo),
        'Data': data or {},
    }
    return body


def send(
    request: CustomResourceRequest,
    context: Any,
    status: ResponseStatus | str,
    data: dict[str, Any] | None,
    physical_resource_id: str | None,
    no_echo: bool | None = None,
    reason: str | None = None,
) -> DeliveryResult:
    """
    PUT the response to the pre-signed ResponseURL of `request`.

    A single attempt is made:
    - 2xx: success
    - non-2xx / timeout / connection error: failure, logged, not retried
    """
    body = build_response_body(
        request, context, status, data, physical_resource_id, no_echo, reason
    )
    payload = json.dumps(body)
    # The pre-signed S3 URL is signed without a content type
    headers = {
        'Content-Type': '',
        'Content-Length': str(len(payload.encode('utf-8'))),
    }

    logger.debug(
        'response.sending',
        response_url=request.response_url,
        status=body['Status'],
        physical_resource_id=body['PhysicalResourceId'],
    )

    try:
        with httpx.Client(timeout=get_settings().RESPONSE_TIMEOUT_SECONDS) as client:
            response = client.put(request.response_url, content=payload, headers=headers)
            response.raise_for_status()
            logger.info('response.sent', status_code=response.status_code)
            return DeliveryResult(success=True, status_code=response.status_code)

    except httpx.HTTPError as e:
        error = wrap_httpx_error(e, context={'response_url': request.response_url})
        status_code = error.context.get('status_code')
        logger.error('response.send_failed', error=str(error), status_code=status_code)
        return DeliveryResult(success=False, status_code=status_code, error=error)
