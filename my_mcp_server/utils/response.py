"""Standardized envelope builders for dispatcher responses."""

from typing import Any, List, Optional

from mcp.types import Annotations, ImageContent, PromptMessage, Role, TextContent
from pydantic import ValidationError

from ..models.envelope import (
    Envelope,
    PromptEnvelope,
    ResourceEnvelope,
    ResourceText,
    ToolEnvelope,
)
from ..registry.errors import EmptyResult, InvalidResult
from ..registry.operation_registry import OperationDescriptor, OperationKind


def text_content(text: str) -> TextContent:
    """Create a text content item."""
    return TextContent(type="text", text=text)


def image_content(
    data: str,
    mime_type: str = "image/png",
    audience: Optional[List[Role]] = None,
    priority: Optional[float] = None
) -> ImageContent:
    """Create an image content item.

    Args:
        data: Base64-encoded image bytes
        mime_type: Image MIME type
        audience: Optional audience hint (e.g. ["user"])
        priority: Optional priority hint between 0 and 1

    Returns:
        ImageContent, annotated only when a hint is given
    """
    annotations = None
    if audience is not None or priority is not None:
        annotations = Annotations(audience=audience, priority=priority)

    return ImageContent(type="image", data=data, mimeType=mime_type, annotations=annotations)


def resource_text(uri: str, text: str, mime_type: str = "text/plain") -> ResourceText:
    """Create a resource text body."""
    return ResourceText(uri=uri, mime_type=mime_type, text=text)


def user_message(text: str) -> PromptMessage:
    """Create a user-role prompt message."""
    return PromptMessage(role="user", content=text_content(text))


def failure_envelope(
    kind: OperationKind,
    message: str,
    uri: Optional[str] = None,
    code: Optional[str] = None
) -> Envelope:
    """Create a failure envelope carrying a single text element.

    Args:
        kind: Kind of the requested operation
        message: Human-readable error message
        uri: Requested URI (resources only)
        code: Error code (e.g. "UNKNOWN_OPERATION", "DOMAIN_ERROR")

    Returns:
        Envelope of the requested kind with is_error set
    """
    if kind is OperationKind.TOOL:
        return ToolEnvelope(content=[text_content(message)], is_error=True, error_code=code)

    if kind is OperationKind.RESOURCE:
        return ResourceEnvelope(
            contents=[resource_text(uri or "", message)],
            is_error=True,
            error_code=code
        )

    return PromptEnvelope(
        description=message,
        messages=[PromptMessage(role="assistant", content=text_content(message))],
        is_error=True,
        error_code=code
    )


def success_envelope(
    descriptor: OperationDescriptor,
    payload: Any,
    uri: Optional[str] = None
) -> Envelope:
    """Wrap a handler payload into the envelope for its operation kind.

    Tool handlers return a string or a list of content items; resource
    handlers return a string or a list of ResourceText; prompt handlers
    return a list of PromptMessage (bare strings become user messages).

    Raises:
        EmptyResult: If the payload carries no items
        InvalidResult: If the payload is not a str, list or tuple, or an
            item does not fit the envelope for the operation kind
    """
    if isinstance(payload, str):
        items = [payload]
    elif isinstance(payload, (list, tuple)):
        items = list(payload)
    else:
        raise InvalidResult(
            f"Error executing {descriptor.name}: unsupported result type "
            f"{type(payload).__name__}"
        )

    if not items:
        raise EmptyResult(f"Error: {descriptor.name} returned no content")

    try:
        if descriptor.kind is OperationKind.TOOL:
            return ToolEnvelope(
                content=[text_content(item) if isinstance(item, str) else item for item in items]
            )

        if descriptor.kind is OperationKind.RESOURCE:
            target = uri or descriptor.uri
            return ResourceEnvelope(
                contents=[
                    resource_text(target, item, descriptor.mime_type or "text/plain")
                    if isinstance(item, str) else item
                    for item in items
                ]
            )

        return PromptEnvelope(
            description=descriptor.description,
            messages=[user_message(item) if isinstance(item, str) else item for item in items]
        )
    except ValidationError as e:
        raise InvalidResult(
            f"Error executing {descriptor.name}: result does not fit a "
            f"{descriptor.kind.value} response ({e.error_count()} validation errors)"
        ) from e
