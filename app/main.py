from __future__ import annotations

import contextlib
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.bridge_logging import get_logger
from app.http_api.server import build_extension_router
from app.jeedom import JeedomClient, load_jeedom_config
from app.plugins.registry import PluginRegistry
from app.plugins.inventory import InventoryProvider
from app.plugins.inventory.sources.jeedom_api import JeedomApiSource
from app.plugins.actions import ActionsProvider


log = get_logger("BRIDGE")


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.plugin_registry = PluginRegistry()
    app.state.jeedom_client = None
    app.state.inventory = None
    app.state.actions = None

    try:
        config = load_jeedom_config()
        client = JeedomClient(config)
        app.state.jeedom_client = client

        registry = app.state.plugin_registry
        registry.register_plugin_class("inventory", InventoryProvider)
        registry.register_plugin_class("actions", ActionsProvider)

        # Inventory first: actions resolve ids through its index
        inventory = registry.create_plugin(
            "inventory",
            {"refresh_interval_s": config.refresh_interval_s},
            source=JeedomApiSource("jeedom", {"base_url": config.base_url}, client=client),
        )
        actions = registry.create_plugin("actions", {}, client=client, indexer=inventory.indexer)

        registry.start_all()
        app.state.inventory = inventory
        app.state.actions = actions
        log.info("BRIDGE.Plugins.Enabled", extra={"fields": {
            "base_url": config.base_url,
            "refresh_interval_s": config.refresh_interval_s,
            "plugin_count": registry.plugin_count,
        }})
    except Exception as e:
        # Never fail server startup on bad configuration; /health reports it.
        log.error("BRIDGE.Plugins.NotEnabled", extra={"fields": {"error": repr(e)}})

    yield

    plugin_registry = getattr(app.state, "plugin_registry", None)
    if plugin_registry is not None:
        try:
            log.info("BRIDGE.Plugins.Stopping")
            plugin_registry.stop_all()
            log.info("BRIDGE.Plugins.Stopped")
        except Exception as e:
            log.error("BRIDGE.Plugins.StopError", extra={"fields": {"error": repr(e)}})

    client = getattr(app.state, "jeedom_client", None)
    if client is not None:
        with contextlib.suppress(Exception):
            await client.aclose()


app = FastAPI(title="Jeedom Bridge", lifespan=lifespan)
app.include_router(build_extension_router())
