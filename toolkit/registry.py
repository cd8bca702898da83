"""Registry of tool definitions keyed by id."""
from typing import Dict, Iterator, List, Optional, Set

from toolkit.contract import ToolDefinition
from toolkit.errors import ValidationError


class ToolRegistry:
    def __init__(self, tools: Optional[List[ToolDefinition]] = None) -> None:
        self._tools: Dict[str, ToolDefinition] = {}
        for tool in tools or []:
            self.register(tool)

    def register(self, tool: ToolDefinition) -> ToolDefinition:
        if not isinstance(tool, ToolDefinition):
            raise ValidationError(f"Expected a ToolDefinition, got {type(tool).__name__}")
        if tool.id in self._tools:
            raise ValidationError(f"Tool id '{tool.id}' is already registered")
        self._tools[tool.id] = tool
        return tool

    def get(self, tool_id: str) -> Optional[ToolDefinition]:
        return self._tools.get(tool_id)

    def required_settings(self) -> Set[str]:
        """Every configuration key some registered tool needs."""
        keys: Set[str] = set()
        for tool in self._tools.values():
            keys.update(tool.requires)
        return keys

    def __contains__(self, tool_id: object) -> bool:
        return tool_id in self._tools

    def __iter__(self) -> Iterator[ToolDefinition]:
        return iter(sorted(self._tools.values(), key=lambda tool: tool.id))

    def __len__(self) -> int:
        return len(self._tools)
