"""Envelope models for dispatcher responses."""

from .envelope import (
    Envelope,
    PromptEnvelope,
    ResourceEnvelope,
    ResourceText,
    ToolEnvelope,
)

__all__ = [
    'Envelope',
    'ToolEnvelope',
    'ResourceEnvelope',
    'PromptEnvelope',
    'ResourceText',
]
