"""
Parameter schema validation.

Strict contract: every declared parameter is required and must already have
the declared JSON type. Nothing is coerced; undeclared keys are dropped.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping

from .errors import SchemaValidationError, ValidationFailure

JSONSchema = Dict[str, Any]


class ParamType(Enum):
    """Primitive parameter types."""
    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"


@dataclass(frozen=True)
class ParameterSpec:
    """A single required parameter."""
    type: ParamType
    description: str


ParameterSchema = Mapping[str, ParameterSpec]
ValidatedArguments = Dict[str, Any]


def _matches(value: Any, expected: ParamType) -> bool:
    # bool is a subclass of int; JSON true/false is never a number
    if expected is ParamType.STRING:
        return isinstance(value, str)
    if expected is ParamType.BOOLEAN:
        return isinstance(value, bool)
    if isinstance(value, bool):
        return False
    if expected is ParamType.INTEGER:
        return isinstance(value, int)
    return isinstance(value, (int, float))


def validate_arguments(schema: ParameterSchema, raw: Any) -> ValidatedArguments:
    """
    Validate raw arguments against a parameter schema.

    Args:
        schema: Declared parameters, checked in declaration order
        raw: Untyped input mapping (None is treated as empty)

    Returns:
        Only the declared parameters, with their values unchanged

    Raises:
        SchemaValidationError: On the first missing or mistyped parameter
    """
    if not isinstance(raw, Mapping):
        raw = {}

    validated: ValidatedArguments = {}
    for name, spec in schema.items():
        if name not in raw:
            raise SchemaValidationError(
                ValidationFailure(name, "missing", spec.type.value)
            )
        value = raw[name]
        if not _matches(value, spec.type):
            raise SchemaValidationError(
                ValidationFailure(name, "type-mismatch", spec.type.value)
            )
        validated[name] = value

    return validated


def to_json_schema(schema: ParameterSchema) -> JSONSchema:
    """Render a parameter schema as a JSON Schema object."""
    return {
        "type": "object",
        "properties": {
            name: {"type": spec.type.value, "description": spec.description}
            for name, spec in schema.items()
        },
        "required": list(schema.keys()),
    }
