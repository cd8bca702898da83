"""Describe registered tools to language-model agents."""
import json
from typing import List

from google.genai import types

from toolkit.registry import ToolRegistry


def build_tools_manifest(registry: ToolRegistry) -> str:
    """Create manifest text describing tools for a system instruction."""
    if not len(registry):
        return "No tools are currently available."

    lines: List[str] = ["Available tools:"]
    for tool in registry:
        lines.append(f"- {tool.id}: {tool.description} Usage example: {json.dumps(tool.usage)}")

    lines.append("")
    lines.append("When you need external data, call the relevant tool. Do not invent data.")
    lines.append(
        "If a tool response has no data, explain the issue to the user or ask for clarification."
    )
    return "\n".join(lines)


def build_function_declarations(registry: ToolRegistry) -> List[types.FunctionDeclaration]:
    """Convert tool definitions into Gemini function declarations."""
    declarations: List[types.FunctionDeclaration] = []
    for tool in registry:
        declarations.append(
            types.FunctionDeclaration(
                name=tool.id,
                description=tool.description,
                parameters_json_schema=tool.input_schema(),
            )
        )
    return declarations
