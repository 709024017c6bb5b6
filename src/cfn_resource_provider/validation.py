"""JSON schema validation that fills in schema defaults."""

import copy
from collections.abc import Iterator
from typing import Any

import structlog
from jsonschema import Draft7Validator, validators

logger = structlog.get_logger(__name__)


def _extend_with_default(validator_class):
    """Extend `validator_class` so that missing properties receive their schema `default`."""
    validate_properties = validator_class.VALIDATORS['properties']

    def set_defaults(validator, properties, instance, schema) -> Iterator[Any]:
        if validator.is_type(instance, 'object'):
            for name, subschema in properties.items():
                if isinstance(subschema, dict) and 'default' in subschema:
                    instance.setdefault(name, copy.deepcopy(subschema['default']))

        yield from validate_properties(validator, properties, instance, schema)

    return validators.extend(validator_class, {'properties': set_defaults})


DefaultInjectingValidator = _extend_with_default(Draft7Validator)


def validate(
    instance: Any,
    schema: dict[str, Any],
    errors: list[str] | None = None,
) -> bool:
    """
    Validate `instance` against `schema`, injecting defaults into `instance`.

    Args:
        instance: The value to validate; missing properties with a default
                  in the schema are added to it in place.
        schema: A JSON schema (draft 7).
        errors: Optional list that receives one message per violation.

    Returns:
        True when the instance is valid.
    """
    validator = DefaultInjectingValidator(schema)
    messages = [
        f"{'/'.join(str(p) for p in error.absolute_path) or '<root>'}: {error.message}"
        for error in validator.iter_errors(instance)
    ]
    if messages:
        logger.debug('schema.validation_failed', errors=messages)
        if errors is not None:
            errors.extend(messages)
        return False
    return True
