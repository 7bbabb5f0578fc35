"""
Jeedom JSON-RPC inventory source.

Pulls the plugin list, the server version and the full object graph
through ``jeeApi.php`` once per refresh cycle.
"""

import logging
from typing import Any, Dict

from app.jeedom.client import JeedomClient
from app.plugins.inventory.sources.base import InventorySource, SourcePayload

logger = logging.getLogger(__name__)


class JeedomApiSource(InventorySource):
    """Jeedom JSON-RPC source."""

    def __init__(self, name: str, config: Dict[str, Any], client: JeedomClient):
        super().__init__(name, config)
        self.client = client

    async def fetch(self) -> SourcePayload:
        plugins = await self.client.list_plugins()
        version = await self.client.version()
        objects = await self.client.full_objects()

        logger.debug(
            f"Fetched {len(plugins)} plugins, {len(objects)} objects "
            f"from Jeedom {version or '?'}"
        )
        return SourcePayload(plugins=plugins, version=version, objects=objects)
