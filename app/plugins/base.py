"""
Base plugin interface for the bridge.

All plugins implement the BridgePlugin lifecycle.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)


class BridgePlugin(ABC):
    """
    Base class for all bridge plugins.

    Plugins provide a consistent lifecycle:
    - start(): Schedule background work, must run inside the event loop
    - stop(): Cancel background work
    - health(): Report plugin health status
    - on_config_reload(): React to configuration changes (optional)
    """

    def __init__(self, name: str, config: Dict[str, Any]):
        """
        Initialize plugin with name and configuration.

        Args:
            name: Unique plugin identifier
            config: Plugin-specific configuration dict
        """
        self.name = name
        self.config = config
        self._started = False
        self._logger = logging.getLogger(f"bridge.plugin.{name}")

    @abstractmethod
    def start(self) -> None:
        """
        Start the plugin.

        Called from the server lifespan, inside the running event loop.

        Raises:
            Exception: If startup fails (the registry rolls back)
        """

    @abstractmethod
    def stop(self) -> None:
        """
        Stop the plugin. Must be idempotent.
        """

    @abstractmethod
    def health(self) -> Dict[str, Any]:
        """
        Report plugin health status.

        Returns:
            {
                "status": "healthy" | "degraded" | "unhealthy",
                "message": str,
                "details": dict
            }
        """

    def on_config_reload(self, new_config: Dict[str, Any]) -> None:
        """Replace the plugin config; override to apply it live."""
        self._logger.info(f"Config reload triggered for {self.name}")
        self.config = new_config

    def _mark_started(self) -> None:
        self._started = True
        self._logger.info(f"Plugin {self.name} started")

    def _mark_stopped(self) -> None:
        self._started = False
        self._logger.info(f"Plugin {self.name} stopped")

    @property
    def is_started(self) -> bool:
        return self._started
