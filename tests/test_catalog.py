"""Tests for the tool manifest and Gemini function declarations."""
from toolkit import ToolRegistry
from toolkit.catalog import build_function_declarations, build_tools_manifest


def test_empty_manifest():
    assert build_tools_manifest(ToolRegistry()) == "No tools are currently available."


def test_manifest_lists_every_tool(registry):
    manifest = build_tools_manifest(registry)
    assert manifest.startswith("Available tools:")
    assert '- get-weather: Fetches current weather for a latitude/longitude pair Usage example: {"latitude": 40.0, "longitude": -75.0}' in manifest
    for tool in registry:
        assert f"- {tool.id}:" in manifest


def test_function_declarations_use_input_schema(registry):
    declarations = {decl.name: decl for decl in build_function_declarations(registry)}
    assert set(declarations) == {tool.id for tool in registry}
    schema = declarations["filter-recipes"].parameters_json_schema
    assert set(schema["properties"]) == {"filterType", "filterValue"}
    assert set(schema["required"]) == {"filterType", "filterValue"}
