"""
Inventory Provider - main plugin implementation.

Runs the refresh cycle (fetch → project → compose → swap) on a fixed delay
and serves the resulting snapshot to the assistant surface.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

from app.jeedom.config import parse_refresh_interval
from app.plugins.tooling_provider import ToolingProvider
from app.plugins.inventory.composer import compose_instructions, select_function_schemas
from app.plugins.inventory.indexer import InventoryIndexer, freeze_index
from app.plugins.inventory.models import InventorySnapshot
from app.plugins.inventory.projector import JeedomProjector
from app.plugins.inventory.sources.base import InventorySource, SourcePayload

logger = logging.getLogger(__name__)

VIRTUAL_PLUGIN_MISSING = 'The plugin "Virtual" from the Jeedom Market must be installed and enabled.'


class InventoryProvider(ToolingProvider):
    """
    Inventory Provider plugin.

    At most one cycle runs at a time: the next one is armed only after the
    previous one has returned.
    """

    def __init__(self, name: str, config: Dict[str, Any], source: InventorySource):
        super().__init__(name, config)

        self.source = source
        self.indexer = InventoryIndexer()
        self.refresh_interval_s = parse_refresh_interval(config.get("refresh_interval_s"))

        self._task: Optional[asyncio.Task] = None
        self._refreshing = False
        self._cycles = 0
        self._failed_cycles = 0

    def start(self) -> None:
        """Arm the first cycle immediately."""
        if self._task is not None and not self._task.done():
            return

        logger.info(f"Starting InventoryProvider (every {self.refresh_interval_s}s)")
        self._task = asyncio.get_running_loop().create_task(self._run())
        self._mark_started()

    def stop(self) -> None:
        logger.info("Stopping InventoryProvider")

        if self._task is not None:
            self._task.cancel()
            self._task = None

        self._mark_stopped()

    async def _run(self) -> None:
        while True:
            await self.refresh()
            await asyncio.sleep(self.refresh_interval_s)

    async def refresh(self) -> bool:
        """
        Run one full cycle.

        Returns:
            True when a new snapshot was swapped in, False when the previous
            one was kept.
        """
        from app.bridge_logging import get_logger
        log = get_logger("BRIDGE.Inventory")

        self._refreshing = True
        started = time.monotonic()
        try:
            payload = await self.source.fetch()
            snapshot = self._build_snapshot(payload)
        except Exception as e:
            self._failed_cycles += 1
            log.error("BRIDGE.Inventory.RefreshFailed", extra={"fields": {
                "source": self.source.name,
                "error": repr(e),
            }})
            return False
        finally:
            self._refreshing = False

        self.indexer.rebuild(snapshot)
        self._cycles += 1

        log.info("BRIDGE.Inventory.Refreshed", extra={"fields": {
            "locations": len(snapshot.locations),
            "lights": len(snapshot.lights),
            "shutters": len(snapshot.shutters),
            "devices": snapshot.device_count,
            "version": snapshot.software_version,
            "duration_ms": int((time.monotonic() - started) * 1000),
        }})
        return True

    def _build_snapshot(self, payload: SourcePayload) -> InventorySnapshot:
        has_plugin = JeedomProjector.has_virtual_plugin(payload.plugins)
        if not has_plugin:
            from app.bridge_logging import get_logger
            log = get_logger("BRIDGE.Inventory")
            log.warning("BRIDGE.Inventory.VirtualPluginMissing", extra={"fields": {
                "message": VIRTUAL_PLUGIN_MISSING,
            }})

        projection = JeedomProjector.project(payload.objects)

        return InventorySnapshot(
            locations=tuple(projection.locations),
            lights=tuple(projection.lights),
            shutters=tuple(projection.shutters),
            commands=freeze_index(projection.commands),
            instructions=compose_instructions(projection.locations, projection.lights, projection.shutters),
            function_schemas=tuple(select_function_schemas(projection.lights, projection.shutters)),
            software_version=payload.version,
            has_virtual_plugin=has_plugin,
            last_update=int(time.time()),
        )

    def health(self) -> Dict[str, Any]:
        snapshot = self.indexer.get_snapshot()
        details = {
            "device_count": snapshot.device_count,
            "command_count": snapshot.command_count,
            "lights": len(snapshot.lights),
            "shutters": len(snapshot.shutters),
            "locations": len(snapshot.locations),
            "cycles": self._cycles,
            "failed_cycles": self._failed_cycles,
            "software_version": snapshot.software_version,
            "last_update": snapshot.last_update,
        }

        if not snapshot.last_update:
            return {"status": "degraded", "message": "No refresh completed yet", "details": details}
        if not snapshot.has_virtual_plugin:
            return {"status": "degraded", "message": VIRTUAL_PLUGIN_MISSING, "details": details}
        return {
            "status": "healthy",
            "message": f"{len(snapshot.lights)} lights, {len(snapshot.shutters)} shutters",
            "details": details,
        }

    def on_config_reload(self, new_config: Dict[str, Any]) -> None:
        # Rejected before anything is applied; picked up by the next sleep
        interval = parse_refresh_interval(new_config.get("refresh_interval_s"))
        super().on_config_reload(new_config)
        self.refresh_interval_s = interval

    def get_snapshot(self) -> Dict[str, Any]:
        snapshot = self.indexer.get_snapshot()
        return {
            "locations": [location.to_dict() for location in snapshot.locations],
            "lights": [light.to_dict() for light in snapshot.lights],
            "shutters": [shutter.to_dict() for shutter in snapshot.shutters],
            "software_version": snapshot.software_version,
            "last_update": snapshot.last_update,
        }

    def get_instructions(self) -> str:
        return self.indexer.get_snapshot().instructions

    def get_function_schemas(self) -> List[Dict[str, Any]]:
        return list(self.indexer.get_snapshot().function_schemas)

    def get_software_version(self) -> Optional[str]:
        return self.indexer.get_snapshot().software_version

    @property
    def is_refreshing(self) -> bool:
        return self._refreshing
