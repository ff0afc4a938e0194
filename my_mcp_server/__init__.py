"""MCP server exposing greeting, calculator, time and image tools."""

__version__ = "1.0.0"
