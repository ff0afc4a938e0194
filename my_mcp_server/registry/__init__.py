"""
Operation Registry for my-mcp-server.

Provides the static catalog of tools, resources and prompts.
"""

from .errors import (
    DomainError,
    ExternalServiceError,
    EmptyResult,
    InvalidResult,
    InvalidOperationDescriptor,
    OperationAlreadyRegistered,
    OperationFailure,
    OperationNotFound,
    OperationRegistryError,
    SchemaValidationError,
    ValidationFailure,
)
from .operation_registry import (
    OperationDescriptor,
    OperationKind,
    OperationRegistry,
)
from .validator import (
    ParameterSpec,
    ParamType,
    to_json_schema,
    validate_arguments,
)

__all__ = [
    'OperationRegistry',
    'OperationDescriptor',
    'OperationKind',
    'ParameterSpec',
    'ParamType',
    'validate_arguments',
    'to_json_schema',
    # Exceptions
    'OperationRegistryError',
    'OperationNotFound',
    'OperationAlreadyRegistered',
    'InvalidOperationDescriptor',
    'SchemaValidationError',
    'ValidationFailure',
    'OperationFailure',
    'DomainError',
    'ExternalServiceError',
    'InvalidResult',
    'EmptyResult',
]
