"""Response envelopes returned by the dispatcher.

One envelope per request, discriminated by ``kind``. Each converts to the
matching MCP result type at the channel boundary.
"""

from typing import Annotated, List, Literal, Optional, Union

from mcp import types
from mcp.types import ImageContent, PromptMessage, TextContent
from pydantic import BaseModel, Field


class ResourceText(BaseModel):
    """Text body of a resource read.

    The URI is kept as a plain string here; it only has to be a valid URL
    once converted for the wire.
    """

    uri: str
    mime_type: str = Field("text/plain", description="MIME type of the text body")
    text: str


class ToolEnvelope(BaseModel):
    """Result of a tool call."""

    kind: Literal["tool"] = "tool"
    content: List[Union[TextContent, ImageContent]]
    is_error: bool = False
    error_code: Optional[str] = None

    def texts(self) -> List[str]:
        return [item.text for item in self.content if isinstance(item, TextContent)]

    def to_mcp(self) -> types.CallToolResult:
        return types.CallToolResult(content=list(self.content), isError=self.is_error)


class ResourceEnvelope(BaseModel):
    """Result of a resource read."""

    kind: Literal["resource"] = "resource"
    contents: List[ResourceText]
    is_error: bool = False
    error_code: Optional[str] = None

    def texts(self) -> List[str]:
        return [item.text for item in self.contents]

    def to_mcp(self) -> types.ReadResourceResult:
        return types.ReadResourceResult(
            contents=[
                types.TextResourceContents(uri=item.uri, mimeType=item.mime_type, text=item.text)
                for item in self.contents
            ]
        )


class PromptEnvelope(BaseModel):
    """Result of a prompt request: an ordered message sequence."""

    kind: Literal["prompt"] = "prompt"
    description: Optional[str] = None
    messages: List[PromptMessage]
    is_error: bool = False
    error_code: Optional[str] = None

    def texts(self) -> List[str]:
        return [
            message.content.text
            for message in self.messages
            if isinstance(message.content, TextContent)
        ]

    def to_mcp(self) -> types.GetPromptResult:
        return types.GetPromptResult(description=self.description, messages=list(self.messages))


Envelope = Annotated[
    Union[ToolEnvelope, ResourceEnvelope, PromptEnvelope],
    Field(discriminator="kind"),
]
