"""Error types shared by tool definitions, handlers and the server."""
from typing import Any, Dict, Iterable, List, Optional


class ToolError(Exception):
    """Base class for every error raised by the toolkit."""


class ValidationError(ToolError):
    """A tool definition is malformed or clashes with an existing one."""


class InputValidationError(ToolError):
    """Caller input does not satisfy a tool's input schema."""

    def __init__(self, tool_id: str, errors: List[Dict[str, Any]]) -> None:
        self.tool_id = tool_id
        self.errors = errors
        self.fields = [_field_path(err.get("loc", ())) for err in errors]
        super().__init__(f"Invalid input for '{tool_id}': {', '.join(self.fields) or 'body'}")


class UpstreamFailure(ToolError):
    """The outbound call failed or returned something unusable.

    `user_message` is shown to the caller as-is when set; otherwise the
    tool's generic apology is used.
    """

    def __init__(
        self,
        message: str,
        *,
        user_message: Optional[str] = None,
        status: Optional[int] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.user_message = user_message
        self.status = status
        self.url = url


class ConfigurationError(ToolError):
    """Required configuration values are not set."""

    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = sorted(set(missing))
        super().__init__(f"Missing required configuration: {', '.join(self.missing)}")


def _field_path(loc: Iterable[Any]) -> str:
    return ".".join(str(part) for part in loc) or "body"
