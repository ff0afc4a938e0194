"""Main MCP server implementation: stdio channel over the dispatcher."""

import asyncio
import logging
from typing import Dict, List, Optional

from mcp import types
from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions

from .config.settings import LOG_LEVEL, SERVER_NAME, SERVER_VERSION
from .dispatcher import Dispatcher, OperationRequest
from .registry.errors import OperationRegistryError
from .registry.operation_registry import OperationDescriptor, OperationKind, OperationRegistry
from .registry.operations import build_registry
from .registry.validator import to_json_schema

logger = logging.getLogger(__name__)


def to_mcp_tool(descriptor: OperationDescriptor) -> types.Tool:
    return types.Tool(
        name=descriptor.name,
        description=descriptor.description,
        inputSchema=to_json_schema(descriptor.parameters),
    )


def to_mcp_resource(descriptor: OperationDescriptor) -> types.Resource:
    return types.Resource(
        uri=descriptor.uri,
        name=descriptor.name,
        description=descriptor.description,
        mimeType=descriptor.mime_type,
    )


def to_mcp_prompt(descriptor: OperationDescriptor) -> types.Prompt:
    return types.Prompt(
        name=descriptor.name,
        description=descriptor.description,
        arguments=[
            types.PromptArgument(name=name, description=spec.description, required=True)
            for name, spec in descriptor.parameters.items()
        ],
    )


class MyMCPServer:
    """MCP server exposing the registered tools, resources and prompts."""

    def __init__(self, registry: Optional[OperationRegistry] = None):
        """Initialize the server.

        Args:
            registry: Sealed operation registry; built from the default
                operations when omitted

        Raises:
            OperationRegistryError: If the default registry cannot be built
        """
        self.registry = registry or build_registry()
        self.dispatcher = Dispatcher(self.registry)

        # Create MCP server instance
        self.server = Server(SERVER_NAME)

        # Register handlers
        self._register_handlers()

    def _register_handlers(self):
        """Register all MCP handlers."""

        @self.server.list_tools()
        async def handle_list_tools() -> List[types.Tool]:
            """List all available tools."""
            return [to_mcp_tool(op) for op in self.registry.list(OperationKind.TOOL)]

        @self.server.list_resources()
        async def handle_list_resources() -> List[types.Resource]:
            """List all available resources."""
            return [to_mcp_resource(op) for op in self.registry.list(OperationKind.RESOURCE)]

        @self.server.list_prompts()
        async def handle_list_prompts() -> List[types.Prompt]:
            """List all available prompts."""
            return [to_mcp_prompt(op) for op in self.registry.list(OperationKind.PROMPT)]

        @self.server.get_prompt()
        async def handle_get_prompt(
            name: str,
            arguments: Optional[Dict[str, str]]
        ) -> types.GetPromptResult:
            """Render a prompt template."""
            envelope = await self.dispatcher.handle(
                OperationRequest(OperationKind.PROMPT, name, arguments or {})
            )
            return envelope.to_mcp()

        # Tool calls and resource reads bypass the SDK's own input validation
        # and result normalisation; the dispatcher's envelope is final.
        async def handle_call_tool(req: types.CallToolRequest) -> types.ServerResult:
            envelope = await self.dispatcher.handle(
                OperationRequest(OperationKind.TOOL, req.params.name, req.params.arguments or {})
            )
            return types.ServerResult(envelope.to_mcp())

        async def handle_read_resource(req: types.ReadResourceRequest) -> types.ServerResult:
            uri = str(req.params.uri)
            name = self.registry.resolve_uri(uri) or self.registry.resolve_uri(uri.rstrip("/")) or uri
            envelope = await self.dispatcher.handle(
                OperationRequest(OperationKind.RESOURCE, name, uri=uri)
            )
            return types.ServerResult(envelope.to_mcp())

        self.server.request_handlers[types.CallToolRequest] = handle_call_tool
        self.server.request_handlers[types.ReadResourceRequest] = handle_read_resource

    async def run(self):
        """Run the MCP server."""
        from mcp.server.stdio import stdio_server

        async with stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                InitializationOptions(
                    server_name=SERVER_NAME,
                    server_version=SERVER_VERSION,
                    capabilities=self.server.get_capabilities(
                        notification_options=NotificationOptions(),
                        experimental_capabilities={}
                    )
                )
            )


def main():
    """Main entry point for the MCP server."""
    # stderr only: stdout carries the protocol
    logging.basicConfig(level=LOG_LEVEL)

    try:
        server = MyMCPServer()
    except OperationRegistryError as e:
        logger.critical(f"Failed to build operation registry: {e}")
        raise

    asyncio.run(server.run())


if __name__ == "__main__":
    main()
