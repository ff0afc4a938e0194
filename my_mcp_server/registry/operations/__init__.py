"""
Operation registrations for my-mcp-server.

Registers the tools, resources and prompts and builds the sealed registry.
"""

from typing import Optional

from ...generators.image_generator import ImageGenerator
from ..operation_registry import OperationRegistry
from .prompt_operations import register_prompt_operations
from .resource_operations import register_resource_operations
from .tool_operations import register_tool_operations


def register_all_operations(
    registry: OperationRegistry,
    image_generator: Optional[ImageGenerator] = None
) -> None:
    """Register all operations."""
    register_tool_operations(registry, image_generator)
    register_resource_operations(registry)
    register_prompt_operations(registry)


def build_registry(image_generator: Optional[ImageGenerator] = None) -> OperationRegistry:
    """
    Build and seal the process registry.

    Raises:
        OperationRegistryError: On duplicate or invalid registrations
    """
    registry = OperationRegistry()
    register_all_operations(registry, image_generator)
    registry.seal()
    return registry


__all__ = [
    'build_registry',
    'register_all_operations',
    'register_tool_operations',
    'register_resource_operations',
    'register_prompt_operations',
]
