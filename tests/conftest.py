"""
Pytest configuration and shared fixtures.

Key fixtures:
- lambda_context: Lambda context stand-in
- create_request: a CloudFormation Create request for Custom::Resource
- make_request: factory for requests of any type
- deliver: mock delivery function recording every response sent
"""

import sys
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


STACK_ID = 'arn:aws:cloudformation:us-east-1:1234:stack/my-stack/1234'
SERVICE_TOKEN = 'arn:aws:lambda:us-east-1:1234:function:my-function'


def build_request(
    request_type: str = 'Create',
    resource_type: str = 'Custom::Resource',
    properties: dict[str, Any] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    request = {
        'RequestType': request_type,
        'ServiceToken': SERVICE_TOKEN,
        'ResponseURL': 'https://response.url',
        'StackId': STACK_ID,
        'RequestId': '1234',
        'ResourceType': resource_type,
        'LogicalResourceId': 'MyResource',
        'ResourceProperties': {
            'Property': 'Value',
            'ServiceToken': SERVICE_TOKEN,
        }
        if properties is None
        else properties,
    }
    if request_type in ('Update', 'Delete'):
        request.setdefault('PhysicalResourceId', 'my-physical-id')
    request.update(extra)
    return request


@pytest.fixture
def lambda_context() -> MagicMock:
    """Lambda context with the attributes Powertools and delivery read."""
    context = MagicMock()
    context.function_name = 'my-function'
    context.function_version = '1'
    context.memory_limit_in_mb = 128
    context.invoked_function_arn = SERVICE_TOKEN
    context.aws_request_id = '1234'
    context.log_group_name = 'my-log-group'
    context.log_stream_name = 'my-log-stream'
    return context


@pytest.fixture
def make_request():
    """Factory for CloudFormation requests."""
    return build_request


@pytest.fixture
def create_request() -> dict[str, Any]:
    return build_request()


@pytest.fixture
def deliver() -> MagicMock:
    """Delivery function stand-in, called once per sent response."""
    return MagicMock(return_value=None)
