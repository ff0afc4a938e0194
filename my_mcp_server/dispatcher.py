"""Request dispatcher: lookup, validation, handler invocation, envelope."""

import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .models.envelope import Envelope
from .registry.errors import OperationFailure, OperationNotFound, SchemaValidationError
from .registry.operation_registry import OperationKind, OperationRegistry
from .registry.validator import validate_arguments
from .utils.response import failure_envelope, success_envelope

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperationRequest:
    """An inbound request: which operation, with which raw arguments."""
    kind: OperationKind
    name: str
    arguments: Dict[str, Any] = field(default_factory=dict)
    uri: Optional[str] = None  # Requested URI, resources only


class Dispatcher:
    """Turns every request into exactly one envelope.

    Unknown operations, invalid arguments and handler failures all come back
    as failure envelopes; nothing raised by a handler reaches the caller.
    """

    def __init__(self, registry: OperationRegistry):
        self.registry = registry

    async def handle(self, request: OperationRequest) -> Envelope:
        """Dispatch a single request.

        Args:
            request: Operation kind, name and raw arguments

        Returns:
            Success or failure envelope for the request's kind
        """
        kind = request.kind
        logger.debug(f"Dispatching {kind.value} '{request.name}'")

        try:
            descriptor = self.registry.lookup(kind, request.name)
        except OperationNotFound as e:
            logger.warning(f"{e} ({e.code})")
            return failure_envelope(kind, f"Error: {e}", request.uri, e.code)

        uri = request.uri or descriptor.uri

        try:
            arguments = validate_arguments(descriptor.parameters, request.arguments)
        except SchemaValidationError as e:
            logger.warning(f"Invalid arguments for {kind.value} '{descriptor.name}' ({e.code}): {e}")
            return failure_envelope(kind, f"Error: {e}", uri, e.code)

        # Envelope construction stays inside the guard: a malformed payload
        # is a handler failure too.
        try:
            result = descriptor.handler(arguments)
            if inspect.isawaitable(result):
                result = await result
            return success_envelope(descriptor, result, uri)
        except OperationFailure as e:
            logger.warning(f"{kind.value} '{descriptor.name}' failed ({e.code}): {e}")
            return failure_envelope(kind, str(e), uri, e.code)
        except Exception as e:
            logger.exception(f"Error executing {kind.value} {descriptor.name}")
            return failure_envelope(
                kind, f"Error executing {descriptor.name}: {e}", uri, OperationFailure.code
            )
