import asyncio
import glob
import hmac
import importlib
import logging
import os
from typing import Any, Dict, Optional, Tuple

import requests
import uvicorn
from dotenv import load_dotenv
from fastapi import Body, FastAPI, Header, HTTPException
from fastapi.responses import JSONResponse

from toolkit import CallerContext, InputValidationError, ToolRegistry, invoke
from toolkit.catalog import build_function_declarations, build_tools_manifest
from toolkit.config import Settings
from toolkit.contract import ToolDefinition, define
from toolkit.credentials import CredentialStore, MemoryCredentialStore
from toolkit.http import thread_session

# Load environment variables from .env file
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("main")

HOST = os.getenv("HOST", "0.0.0.0")
TOOLS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "tools")
SKIP_MODULES = {"cli_test_harness"}

SERVICE_METADATA: Dict[str, Any] = {
    "title": "Everyday API Tools",
    "description": "Weather, recipe and grocery tools backed by public APIs",
    "version": "1.0.0",
    "author": "Everyday API Tools contributors",
    "tags": ["weather", "forecast", "recipes", "grocery"],
    "logo": "https://cdn-icons-png.flaticon.com/512/252/252035.png",
}


def load_tools(registry: ToolRegistry, tools_dir: str = TOOLS_DIR, package: str = "tools") -> ToolRegistry:
    """Import tool modules from `tools_dir` and register their TOOL."""
    pattern = os.path.join(tools_dir, "*.py")
    for path in sorted(glob.glob(pattern)):
        name = os.path.splitext(os.path.basename(path))[0]
        if name.startswith("_") or name in SKIP_MODULES:
            continue
        try:
            module = importlib.import_module(f"{package}.{name}")
        except Exception:
            logger.exception("Failed to import tool %s", path)
            continue

        tool = getattr(module, "TOOL", None)
        if isinstance(tool, dict):
            tool = define(tool)
        if not isinstance(tool, ToolDefinition):
            logger.warning("Tool file %s does not expose a TOOL definition.", path)
            continue

        registry.register(tool)
        logger.info("Loaded tool: %s", tool.id)
    return registry


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ToolRegistry] = None,
    credentials: Optional[CredentialStore] = None,
    session: Optional[requests.Session] = None,
) -> FastAPI:
    """Build the FastAPI app serving `registry`.

    Raises ConfigurationError if a registered tool needs a setting that is
    not configured.
    """
    settings = settings or Settings.from_env()
    registry = registry if registry is not None else load_tools(ToolRegistry())
    settings.check(registry.required_settings())
    credentials = credentials or MemoryCredentialStore()

    app = FastAPI(title=SERVICE_METADATA["title"], version=SERVICE_METADATA["version"])
    app.state.settings = settings
    app.state.registry = registry
    app.state.credentials = credentials

    def lookup(tool_id: str) -> ToolDefinition:
        tool = registry.get(tool_id)
        if tool is None:
            raise HTTPException(status_code=404, detail=f"Tool '{tool_id}' is not available.")
        return tool

    @app.get("/")
    async def service_info():
        return {**SERVICE_METADATA, "tools": len(registry)}

    @app.get("/tools")
    async def list_tools():
        return {"tools": [tool.describe() for tool in registry]}

    @app.get("/tools/{tool_id}")
    async def describe_tool(tool_id: str):
        return lookup(tool_id).describe()

    @app.get("/manifest")
    async def manifest():
        return {
            "manifest": build_tools_manifest(registry),
            "functionDeclarations": [
                declaration.model_dump(mode="json", exclude_none=True)
                for declaration in build_function_declarations(registry)
            ],
        }

    # Plain `def` so FastAPI runs the blocking upstream call on its threadpool.
    @app.post("/tools/{tool_id}")
    def call_tool(
        tool_id: str,
        payload: Optional[Dict[str, Any]] = Body(None),
        x_agent_id: Optional[str] = Header(None),
        x_api_key: Optional[str] = Header(None),
    ):
        if settings.api_key and not hmac.compare_digest(
            (x_api_key or "").encode("utf-8"), settings.api_key.encode("utf-8")
        ):
            raise HTTPException(status_code=401, detail="Invalid or missing API key.")

        tool = lookup(tool_id)
        caller = CallerContext(
            caller_id=x_agent_id or "anonymous",
            settings=settings,
            credentials=credentials,
            session=session or thread_session(),
        )
        try:
            result = invoke(tool, payload, caller)
        except InputValidationError as exc:
            return JSONResponse(
                status_code=422,
                content={
                    "error": "invalid_input",
                    "tool": exc.tool_id,
                    "fields": exc.fields,
                    "detail": exc.errors,
                },
            )
        return result.to_dict()

    return app


async def start(app: FastAPI, port: int, host: str = HOST) -> Tuple[uvicorn.Server, "asyncio.Task[None]"]:
    """Start serving `app` and return once the server is accepting connections."""
    server = uvicorn.Server(uvicorn.Config(app, host=host, port=port, log_level="info"))
    task = asyncio.create_task(server.serve())
    while not server.started:
        if task.done():
            task.result()
            raise RuntimeError(f"Server on port {port} stopped before it started listening")
        await asyncio.sleep(0.05)
    return server, task


async def serve() -> None:
    settings = Settings.from_env()
    app = create_app(settings)
    _, task = await start(app, settings.port)
    logger.info("%s is running on port %s", SERVICE_METADATA["title"], settings.port)
    await task


if __name__ == "__main__":
    asyncio.run(serve())
