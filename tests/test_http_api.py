from __future__ import annotations

import asyncio
from typing import Any

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.http_api.server import EXTENSION_MANIFEST, build_extension_router
from app.plugins.actions import ActionsProvider
from app.plugins.inventory import InventoryProvider
from app.plugins.inventory.sources.base import InventorySource, SourcePayload
from app.plugins.registry import PluginRegistry


class _StaticSource(InventorySource):
    def __init__(self, payload: SourcePayload) -> None:
        super().__init__("static", {})
        self.payload = payload

    async def fetch(self) -> SourcePayload:
        return self.payload


class _RecordingClient:
    def __init__(self) -> None:
        self.executed: list[Any] = []

    async def exec_command(self, cmd_id: Any) -> Any:
        self.executed.append(cmd_id)
        return None


@pytest.fixture
def api(object_graph, virtual_plugins) -> tuple[TestClient, _RecordingClient]:
    registry = PluginRegistry()
    registry.register_plugin_class("inventory", InventoryProvider)
    registry.register_plugin_class("actions", ActionsProvider)

    source = _StaticSource(SourcePayload(plugins=virtual_plugins, version="4.4.1", objects=object_graph))
    inventory = registry.create_plugin("inventory", {}, source=source)
    client = _RecordingClient()
    actions = registry.create_plugin("actions", {}, client=client, indexer=inventory.indexer)

    asyncio.run(inventory.refresh())
    actions.start()

    app = FastAPI()
    app.include_router(build_extension_router())
    app.state.plugin_registry = registry
    app.state.inventory = inventory
    app.state.actions = actions
    return TestClient(app), client


def test_extension_manifest(api) -> None:
    http, _ = api
    r = http.get("/extension")

    assert r.status_code == 200
    body = r.json()
    assert body["name"] == EXTENSION_MANIFEST["name"] == "Jeedom"
    assert body["category"] == "home_automation"
    assert body["software_version"] == "4.4.1"
    assert [p["type"] for p in body["parameters"]] == ["url", "password"]


def test_instructions_and_functions(api) -> None:
    http, _ = api

    instructions = http.get("/extension/instructions").json()["instructions"]
    assert "``` yaml" in instructions

    schemas = http.get("/extension/functions").json()["function_schemas"]
    assert [s["function"]["name"] for s in schemas] == ["update_lights", "update_shutters"]


def test_snapshot(api) -> None:
    http, _ = api
    body = http.get("/extension/snapshot").json()

    assert [light["id"] for light in body["lights"]] == [4, 7]
    assert body["shutters"][0]["state"] == "opened"


def test_call_function(api) -> None:
    http, _ = api

    r = http.post("/extension/functions/update_lights", json={"action": "on", "ids": ["4"]})

    assert r.status_code == 200
    assert r.json() == {"result": "Done."}


def test_call_function_reports_dispatch_errors(api) -> None:
    http, client = api

    r = http.post("/extension/functions/update_shutters", json={"action": "open", "ids": ["nope"]})

    assert r.status_code == 200
    assert r.json()["result"].startswith("Error: ")
    assert client.executed == []


def test_unknown_function(api) -> None:
    http, _ = api
    r = http.post("/extension/functions/update_heaters", json={"action": "on", "ids": ["4"]})
    assert r.status_code == 404


def test_health(api) -> None:
    http, _ = api
    body = http.get("/health").json()

    assert body["status"] == "healthy"
    assert set(body["plugins"]) == {"inventory", "actions"}


def test_server_starts_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("JEEDOM_BASE_URL", raising=False)
    monkeypatch.delenv("JEEDOM_API_KEY", raising=False)

    from app.main import app

    with TestClient(app) as http:
        assert http.get("/health").json()["status"] == "unhealthy"
        assert http.get("/extension/instructions").status_code == 503
        assert http.get("/extension").json()["software_version"] is None
        r = http.post("/extension/functions/update_lights", json={"action": "on", "ids": ["4"]})
        assert r.json() == {"result": "Error: Actions not available"}
