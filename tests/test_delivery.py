"""Tests for sending responses to the CloudFormation ResponseURL."""

import json
from unittest.mock import patch, MagicMock

import httpx

from cfn_resource_provider.delivery import build_response_body, send
from cfn_resource_provider.errors import (
    DeliveryConnectionError,
    DeliveryStatusError,
    DeliveryTimeoutError,
)
from cfn_resource_provider.models import CustomResourceRequest, ResponseStatus

from conftest import STACK_ID, build_request


def _mock_client(mock_httpx, response=None, side_effect=None):
    mock_client = MagicMock()
    mock_client.__enter__ = MagicMock(return_value=mock_client)
    mock_client.__exit__ = MagicMock(return_value=False)
    if side_effect is not None:
        mock_client.put.side_effect = side_effect
    else:
        mock_client.put.return_value = response
    mock_httpx.Client.return_value = mock_client
    mock_httpx.HTTPError = httpx.HTTPError
    return mock_client


class TestBuildResponseBody:
    def test_body_fields(self, lambda_context):
        request = CustomResourceRequest.from_event(build_request())

        body = build_response_body(
            request, lambda_context, ResponseStatus.SUCCESS, {"Arn": "arn"}, "pid", True, "done"
        )

        assert body == {
            "Status": "SUCCESS",
            "Reason": "done",
            "PhysicalResourceId": "pid",
            "StackId": STACK_ID,
            "RequestId": "1234",
            "LogicalResourceId": "MyResource",
            "NoEcho": True,
            "Data": {"Arn": "arn"},
        }

    def test_defaults_from_log_stream(self, lambda_context):
        request = CustomResourceRequest.from_event(build_request())

        body = build_response_body(request, lambda_context, "FAILED", None, "")

        assert body["Reason"] == "See the details in CloudWatch Log Stream: my-log-stream"
        assert body["PhysicalResourceId"] == "my-log-stream"
        assert body["NoEcho"] is False
        assert body["Data"] == {}


class TestSend:
    @patch("cfn_resource_provider.delivery.httpx")
    def test_success_returns_result(self, mock_httpx, lambda_context):
        mock_response = MagicMock()
        mock_response.status_code = 200
        mock_response.raise_for_status = MagicMock()
        mock_client = _mock_client(mock_httpx, response=mock_response)
        request = CustomResourceRequest.from_event(build_request())

        result = send(request, lambda_context, ResponseStatus.FAILED, None, "could-not-create", reason="nope")

        assert result.success is True
        assert result.status_code == 200
        url = mock_client.put.call_args.args[0]
        kwargs = mock_client.put.call_args.kwargs
        assert url == "https://response.url"
        assert kwargs["headers"]["Content-Type"] == ""
        body = json.loads(kwargs["content"])
        assert body["Status"] == "FAILED"
        assert body["Reason"] == "nope"
        assert body["PhysicalResourceId"] == "could-not-create"

    @patch("cfn_resource_provider.delivery.httpx")
    def test_non_2xx_is_not_retried(self, mock_httpx, lambda_context):
        mock_response = MagicMock()
        mock_response.status_code = 403
        mock_response.raise_for_status.side_effect = httpx.HTTPStatusError(
            "403", request=MagicMock(), response=mock_response
        )
        mock_client = _mock_client(mock_httpx, response=mock_response)
        request = CustomResourceRequest.from_event(build_request())

        result = send(request, lambda_context, "SUCCESS", None, "pid")

        assert result.success is False
        assert result.status_code == 403
        assert isinstance(result.error, DeliveryStatusError)
        assert mock_client.put.call_count == 1

    @patch("cfn_resource_provider.delivery.httpx")
    def test_timeout(self, mock_httpx, lambda_context):
        _mock_client(mock_httpx, side_effect=httpx.ReadTimeout("timed out"))
        request = CustomResourceRequest.from_event(build_request())

        result = send(request, lambda_context, "SUCCESS", None, "pid")

        assert result.success is False
        assert result.status_code is None
        assert isinstance(result.error, DeliveryTimeoutError)

    @patch("cfn_resource_provider.delivery.httpx")
    def test_connection_error(self, mock_httpx, lambda_context):
        _mock_client(mock_httpx, side_effect=httpx.ConnectError("refused"))
        request = CustomResourceRequest.from_event(build_request())

        result = send(request, lambda_context, "SUCCESS", None, "pid")

        assert result.success is False
        assert isinstance(result.error, DeliveryConnectionError)
        assert result.error.context["response_url"] == "https://response.url"
