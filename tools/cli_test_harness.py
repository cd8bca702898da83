"""CLI test harness to simulate an agent calling tools.

Loads every tool, invokes one with the given arguments and prints the
result envelope the server would return.

Run:
    python3 tools/cli_test_harness.py
    python3 tools/cli_test_harness.py get-weather '{"latitude": 40.0, "longitude": -75.0}'
"""
import json
import os
import sys
from typing import Any, Dict, Optional

# adjust path so main.py can be imported
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from main import load_tools
from toolkit import CallerContext, InputValidationError, ToolRegistry, invoke
from toolkit.config import Settings


def simulate_tool_call(
    registry: ToolRegistry, tool_id: str, args: Dict[str, Any], settings: Optional[Settings] = None
) -> Dict[str, Any]:
    print(f"Simulating agent tool call -> {tool_id} with args {args}")
    tool = registry.get(tool_id)
    if tool is None:
        response = {"error": f"Tool '{tool_id}' is not available."}
    else:
        caller = CallerContext(caller_id="cli", settings=settings or Settings.from_env())
        try:
            response = invoke(tool, args, caller).to_dict()
        except InputValidationError as exc:
            response = {"error": str(exc), "fields": exc.fields}
    print("Tool result:", json.dumps(response, indent=2, ensure_ascii=False))
    return response


if __name__ == "__main__":
    tools = load_tools(ToolRegistry())
    if len(sys.argv) > 1:
        arguments = json.loads(sys.argv[2]) if len(sys.argv) > 2 else {}
        simulate_tool_call(tools, sys.argv[1], arguments)
    else:
        # examples
        simulate_tool_call(tools, "get-weather", {"latitude": 40.0, "longitude": -75.0})
        print()
        simulate_tool_call(tools, "search-recipe", {"name": "Arrabiata"})
