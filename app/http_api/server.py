from __future__ import annotations

from typing import Any

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from app.llm.tools import TOOL_NAMES, execute_tool


EXTENSION_MANIFEST: dict[str, Any] = {
    "name": "Jeedom",
    "website": "https://jeedom.com/",
    "category": "home_automation",
    "icon": "https://play-lh.googleusercontent.com/Qvlo7g0AtFOCmFlMw_bd6QpYtmL0r7wMwYUWg_g5vX5C80NMf57xNp0Al9y4M2tnpGo",
    "features": [
        "Lights: Check status, turn on/off",
        "Shutters: Check status, open, close and stop",
    ],
    "installation_steps": [
        "Open Jeedom from a web browser with admin permissions.",
        "Navigate to `Settings → System → Configuration`.",
        "Select the `APIs` tab and `Enabled` the API access related to API key.",
        "Copy the API key to setup the environment variable `JEEDOM_API_KEY`.",
        "Install and enable the plugin [Virtual](https://market.jeedom.com/index.php?v=d&p=market_display&id=21) from the Jeedom Market.",
        "Create the virtual equipments with the basic templates `Lumière` and `Volet`.",
        "Map the virtual equipments states on real equipments.",
    ],
    "parameters": [
        {
            "name": "JEEDOM_BASE_URL",
            "description": "The base URL of your Jeedom server.",
            "possible_values": ["http://jeedom", "https://jeedom.mydomain.net"],
            "type": "url",
        },
        {
            "name": "JEEDOM_API_KEY",
            "description": "The copied API key.",
            "type": "password",
        },
    ],
}


class FunctionCall(BaseModel):
    action: str
    ids: list[str | int] = Field(default_factory=list)


def _inventory(request: Request) -> Any:
    inventory = getattr(request.app.state, "inventory", None)
    if inventory is None:
        raise HTTPException(status_code=503, detail="inventory not available")
    return inventory


def build_extension_router() -> APIRouter:
    """Create the assistant-facing routes.

    Providers are looked up on ``app.state`` at request time so the router
    can be mounted before the lifespan has wired them.
    """

    router = APIRouter()

    @router.get("/health")
    async def get_health(request: Request) -> dict[str, Any]:
        registry = getattr(request.app.state, "plugin_registry", None)
        if registry is None or registry.plugin_count == 0:
            return {"status": "unhealthy", "plugins": {}}
        return registry.health_all()

    @router.get("/extension")
    async def get_extension(request: Request) -> dict[str, Any]:
        inventory = getattr(request.app.state, "inventory", None)
        version = inventory.get_software_version() if inventory is not None else None
        return {**EXTENSION_MANIFEST, "software_version": version}

    @router.get("/extension/instructions")
    async def get_instructions(request: Request) -> dict[str, str]:
        return {"instructions": _inventory(request).get_instructions()}

    @router.get("/extension/functions")
    async def get_functions(request: Request) -> dict[str, Any]:
        return {"function_schemas": _inventory(request).get_function_schemas()}

    @router.get("/extension/snapshot")
    async def get_snapshot(request: Request) -> dict[str, Any]:
        return _inventory(request).get_snapshot()

    @router.post("/extension/functions/{name}")
    async def call_function(name: str, call: FunctionCall, request: Request) -> dict[str, str]:
        if name not in TOOL_NAMES:
            raise HTTPException(status_code=404, detail=f"unknown function: {name}")

        actions = getattr(request.app.state, "actions", None)
        result = await execute_tool(name, call.model_dump(), actions)
        return {"result": result}

    return router
