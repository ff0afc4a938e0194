"""
Operation Registry - static catalog of tools, resources and prompts.

Provides:
- Per-kind operation descriptors with parameter schemas
- Name uniqueness per kind, URI uniqueness for resources
- Sealing: the registry is built once at startup and read-only afterwards
"""

import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Optional

from .errors import (
    InvalidOperationDescriptor,
    OperationAlreadyRegistered,
    OperationNotFound,
    OperationRegistryError,
)
from .validator import ParameterSchema

logger = logging.getLogger(__name__)

# Handlers take validated arguments and return a payload, or an awaitable of one
Handler = Callable[[Dict[str, Any]], Any]


# ============================================================================
# Enums
# ============================================================================

class OperationKind(Enum):
    """Operation kinds."""
    TOOL = "tool"           # Invocable, returns content
    RESOURCE = "resource"   # URI-addressed, no parameters
    PROMPT = "prompt"       # Template generator, returns messages


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class OperationDescriptor:
    """
    Describes a registered operation.

    Immutable once created; the parameter schema is stored read-only.
    """
    name: str                          # Operation identifier (e.g., "calc")
    kind: OperationKind                # TOOL, RESOURCE or PROMPT
    description: str                   # Human-readable description
    parameters: ParameterSchema        # Required parameters, in order
    handler: Handler                   # Sync or async handler
    uri: Optional[str] = None          # Resources only
    mime_type: Optional[str] = None    # Resources only

    def __post_init__(self):
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))


# ============================================================================
# Operation Registry
# ============================================================================

class OperationRegistry:
    """
    Catalog of operations, indexed by kind and name.

    Populate with register()/register_all(), then seal() before serving.
    """

    def __init__(self):
        """Initialize registry."""
        self._operations: Dict[OperationKind, Dict[str, OperationDescriptor]] = {
            kind: {} for kind in OperationKind
        }
        self._uri_index: Dict[str, str] = {}
        self._sealed = False

        logger.debug("OperationRegistry initialized")

    # ========================================================================
    # Registration
    # ========================================================================

    def register(self, operation: OperationDescriptor) -> None:
        """
        Register a new operation.

        Args:
            operation: Operation descriptor to register

        Raises:
            OperationRegistryError: If the registry is sealed
            OperationAlreadyRegistered: If the name already exists for this kind
            InvalidOperationDescriptor: If descriptor validation fails
        """
        if self._sealed:
            raise OperationRegistryError(
                f"Cannot register '{operation.name}': registry is sealed"
            )

        self._validate_descriptor(operation)

        if operation.name in self._operations[operation.kind]:
            raise OperationAlreadyRegistered(
                f"{operation.kind.value.capitalize()} '{operation.name}' already registered"
            )

        self._operations[operation.kind][operation.name] = operation
        if operation.uri:
            self._uri_index[operation.uri] = operation.name

        logger.info(f"Registered {operation.kind.value}: {operation.name}")

    def register_all(self, operations: List[OperationDescriptor]) -> None:
        """Register multiple operations at once."""
        for operation in operations:
            self.register(operation)

    def seal(self) -> None:
        """Make the registry read-only."""
        self._sealed = True

    @property
    def sealed(self) -> bool:
        return self._sealed

    # ========================================================================
    # Retrieval
    # ========================================================================

    def lookup(self, kind: OperationKind, name: str) -> OperationDescriptor:
        """
        Retrieve an operation by kind and name.

        Raises:
            OperationNotFound: If operation doesn't exist
        """
        operation = self._operations[kind].get(name)
        if operation is None:
            raise OperationNotFound(f"Unknown {kind.value}: {name}")
        return operation

    def exists(self, kind: OperationKind, name: str) -> bool:
        """Check if operation exists."""
        return name in self._operations[kind]

    def list(self, kind: OperationKind) -> List[OperationDescriptor]:
        """List operations of one kind in registration order."""
        return list(self._operations[kind].values())

    def names(self, kind: OperationKind) -> List[str]:
        """List operation names of one kind in registration order."""
        return list(self._operations[kind].keys())

    def resolve_uri(self, uri: str) -> Optional[str]:
        """Map a resource URI to its registered name, or None."""
        return self._uri_index.get(uri)

    # ========================================================================
    # Internal Helpers
    # ========================================================================

    def _validate_descriptor(self, operation: OperationDescriptor) -> None:
        """
        Validate operation descriptor.

        Raises:
            InvalidOperationDescriptor: If validation fails
        """
        if not operation.name:
            raise InvalidOperationDescriptor("Operation name is required")

        if not operation.description:
            raise InvalidOperationDescriptor(
                f"Operation '{operation.name}' requires a description"
            )

        if not callable(operation.handler):
            raise InvalidOperationDescriptor(
                f"Operation '{operation.name}' requires a callable handler"
            )

        if operation.kind is OperationKind.RESOURCE:
            if not operation.uri:
                raise InvalidOperationDescriptor(
                    f"Resource '{operation.name}' requires a URI"
                )
            if operation.parameters:
                raise InvalidOperationDescriptor(
                    f"Resource '{operation.name}' cannot declare parameters"
                )
            if operation.uri in self._uri_index:
                raise OperationAlreadyRegistered(
                    f"Resource URI '{operation.uri}' already registered"
                )
