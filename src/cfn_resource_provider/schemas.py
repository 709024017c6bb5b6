"""
JSON schemas for the CloudFormation custom resource protocol.

- CFN_REQUEST_SCHEMA: a well-formed CloudFormation request event
- CFN_RESPONSE_SCHEMA: a well-formed response body
- SNS_SCHEMA: an SNS notification batch carrying requests as messages
"""

from typing import Any

CFN_REQUEST_SCHEMA: dict[str, Any] = {
    'type': 'object',
    'required': [
        'RequestType',
        'ResponseURL',
        'StackId',
        'RequestId',
        'ResourceType',
        'LogicalResourceId',
        'ResourceProperties',
    ],
    'properties': {
        'RequestType': {'type': 'string', 'enum': ['Create', 'Update', 'Delete']},
        'ResponseURL': {'type': 'string', 'pattern': '^https?://'},
        'StackId': {'type': 'string'},
        'RequestId': {'type': 'string'},
        'ResourceType': {'type': 'string'},
        'LogicalResourceId': {'type': 'string'},
        'PhysicalResourceId': {'type': 'string'},
        'ResourceProperties': {'type': 'object'},
        'OldResourceProperties': {'type': 'object'},
        'ServiceToken': {'type': 'string'},
    },
}

CFN_RESPONSE_SCHEMA: dict[str, Any] = {
    'type': 'object',
    'required': ['Status', 'Reason', 'RequestId', 'StackId', 'LogicalResourceId'],
    'properties': {
        'Status': {'type': 'string', 'enum': ['SUCCESS', 'FAILED']},
        'StackId': {'type': 'string'},
        'RequestId': {'type': 'string'},
        'LogicalResourceId': {'type': 'string'},
        'PhysicalResourceId': {'type': 'string'},
        'Data': {'type': 'object'},
    },
}

SNS_SCHEMA: dict[str, Any] = {
    'type': 'object',
    'required': ['Records'],
    'additionalProperties': True,
    'properties': {
        'Records': {
            'type': 'array',
            'items': {'$ref': '#/$defs/sns'},
        },
    },
    '$defs': {
        'sns': {
            'type': 'object',
            'required': ['Sns'],
            'properties': {
                'Sns': {
                    'type': 'object',
                    'required': ['Message'],
                    'properties': {
                        'Message': {'type': 'string'},
                    },
                },
            },
        },
    },
}
