"""Reusable contract for declaring and invoking single-call API tools."""
from toolkit.contract import CallerContext, Pricing, ToolDefinition, ToolResult, define, invoke
from toolkit.errors import (
    ConfigurationError,
    InputValidationError,
    ToolError,
    UpstreamFailure,
    ValidationError,
)
from toolkit.registry import ToolRegistry

__all__ = [
    "CallerContext",
    "ConfigurationError",
    "InputValidationError",
    "Pricing",
    "ToolDefinition",
    "ToolError",
    "ToolRegistry",
    "ToolResult",
    "UpstreamFailure",
    "ValidationError",
    "define",
    "invoke",
]
