"""
Exception hierarchy for the operation registry and dispatcher.

Registry errors are configuration problems raised at startup. Operation
failures are raised by handlers at request time and are always converted
to failure envelopes by the dispatcher.
"""

from dataclasses import dataclass


# ============================================================================
# Registry Errors
# ============================================================================

class OperationRegistryError(Exception):
    """Base exception for registry errors."""
    code = "REGISTRY_ERROR"


class OperationNotFound(OperationRegistryError):
    """Operation not found in registry."""
    code = "UNKNOWN_OPERATION"


class OperationAlreadyRegistered(OperationRegistryError):
    """Operation already registered."""
    pass


class InvalidOperationDescriptor(OperationRegistryError):
    """Invalid operation descriptor."""
    pass


@dataclass(frozen=True)
class ValidationFailure:
    """Why a single parameter was rejected."""
    parameter: str
    reason: str            # "missing" | "type-mismatch"
    expected_type: str


class SchemaValidationError(OperationRegistryError):
    """Schema validation failed."""
    code = "VALIDATION_ERROR"

    def __init__(self, failure: ValidationFailure):
        self.failure = failure
        if failure.reason == "missing":
            message = (
                f"Missing required parameter '{failure.parameter}' "
                f"(expected {failure.expected_type})"
            )
        else:
            message = (
                f"Invalid type for parameter '{failure.parameter}' "
                f"(expected {failure.expected_type})"
            )
        super().__init__(message)


# ============================================================================
# Operation Failures
# ============================================================================

class OperationFailure(Exception):
    """Base class for failures raised by operation handlers."""
    code = "HANDLER_ERROR"


class DomainError(OperationFailure):
    """A handler business rule was violated (bad operator, invalid timezone...)."""
    code = "DOMAIN_ERROR"


class ExternalServiceError(OperationFailure):
    """A downstream service failed or could not be reached."""
    code = "EXTERNAL_ERROR"


class InvalidResult(OperationFailure):
    """A handler returned a payload that cannot be wrapped for its kind."""
    code = "INVALID_RESULT"


class EmptyResult(InvalidResult):
    """A handler returned no content."""
    code = "EMPTY_RESULT"
