"""
Type coercion for resource properties.

CloudFormation sends every property value as a string. These helpers turn
the string bag back into typed values before schema validation.
"""

import re
from typing import Any

_INT_PATTERN = re.compile(r'^[-+]?\d+$')
_FLOAT_PATTERN = re.compile(r'^[-+]?(\d+\.\d*|\.\d+|\d+)([eE][-+]?\d+)?$')


def convert_string(value: str) -> bool | int | float | str:
    """Convert a single string: booleans and numbers are recognized, anything else is kept."""
    if value == 'true':
        return True
    if value == 'false':
        return False
    if _INT_PATTERN.match(value):
        return int(value)
    if _FLOAT_PATTERN.match(value):
        return float(value)
    return value


def heuristic_convert_property_types(value: Any) -> Any:
    """
    Return a copy of `value` with string leaves converted to their likely type.

    "true"/"false" become booleans and numeric strings become int or float.
    Lists and dicts are converted recursively; other values pass through.
    """
    if isinstance(value, str):
        return convert_string(value)
    if isinstance(value, list):
        return [heuristic_convert_property_types(v) for v in value]
    if isinstance(value, dict):
        return {k: heuristic_convert_property_types(v) for k, v in value.items()}
    return value
