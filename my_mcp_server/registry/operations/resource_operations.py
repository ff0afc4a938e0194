"""
Resource operation registrations.

Registers the server-info resource.
"""

import json
from typing import Any, Dict

from ...config.settings import (
    SERVER_DESCRIPTION,
    SERVER_INFO_URI,
    SERVER_NAME,
    SERVER_VERSION,
)
from ..operation_registry import OperationDescriptor, OperationKind, OperationRegistry


def make_server_info_handler(registry: OperationRegistry):
    """Build the server-info handler.

    Tool names are read from the registry when the resource is read, so the
    document lists whatever was actually registered.
    """

    def server_info_handler(params: Dict[str, Any]) -> str:
        server_info = {
            "name": SERVER_NAME,
            "version": SERVER_VERSION,
            "tools": registry.names(OperationKind.TOOL),
            "description": SERVER_DESCRIPTION,
        }
        return json.dumps(server_info, indent=2, ensure_ascii=False)

    return server_info_handler


def register_resource_operations(registry: OperationRegistry) -> None:
    """Register all resource operations."""
    registry.register(
        OperationDescriptor(
            name="server-info",
            kind=OperationKind.RESOURCE,
            description="Server identity, version and available tools",
            parameters={},
            handler=make_server_info_handler(registry),
            uri=SERVER_INFO_URI,
            mime_type="application/json",
        )
    )
