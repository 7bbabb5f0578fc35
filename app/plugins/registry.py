"""
Plugin registry and loader.

Starts plugins in registration order and stops them in reverse.
"""

from typing import Dict, List, Type, Optional, Any
import logging
from app.plugins.base import BridgePlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """
    Central registry for bridge plugins.

    The actions plugin reads the inventory plugin's index, so the order
    in which plugins are created is the order they start in.
    """

    def __init__(self):
        self._plugins: Dict[str, BridgePlugin] = {}
        self._plugin_classes: Dict[str, Type[BridgePlugin]] = {}

    def register_plugin_class(self, name: str, plugin_class: Type[BridgePlugin]) -> None:
        """
        Register a plugin class for later instantiation.

        Raises:
            ValueError: If plugin name already registered
        """
        if name in self._plugin_classes:
            raise ValueError(f"Plugin class '{name}' already registered")

        self._plugin_classes[name] = plugin_class
        logger.info(f"Registered plugin class: {name}")

    def create_plugin(self, name: str, config: Dict[str, Any], **kwargs: Any) -> BridgePlugin:
        """
        Create and register a plugin instance.

        Args:
            name: Plugin name (must be registered)
            config: Plugin configuration
            **kwargs: Collaborators passed to the plugin constructor

        Raises:
            ValueError: If plugin class not registered
        """
        if name not in self._plugin_classes:
            raise ValueError(
                f"Plugin class '{name}' not registered. "
                f"Available: {list(self._plugin_classes.keys())}"
            )

        try:
            plugin = self._plugin_classes[name](name=name, config=config, **kwargs)
        except Exception as e:
            logger.error(f"Failed to create plugin '{name}': {e}")
            raise

        self._plugins[name] = plugin
        logger.info(f"Created plugin instance: {name}")
        return plugin

    def get_plugin(self, name: str) -> Optional[BridgePlugin]:
        return self._plugins.get(name)

    def start_all(self) -> None:
        """
        Start all registered plugins.

        If any plugin fails, the ones already started are stopped and the
        error is re-raised.
        """
        logger.info(f"Starting {len(self._plugins)} plugins...")

        for name, plugin in self._plugins.items():
            try:
                logger.info(f"Starting plugin: {name}")
                plugin.start()
            except Exception as e:
                logger.error(f"Failed to start plugin '{name}': {e}")
                self._stop_started_plugins()
                raise

        logger.info("All plugins started successfully")

    def stop_all(self) -> None:
        """
        Stop all started plugins in reverse order.

        Errors are logged and do not prevent the remaining plugins from stopping.
        """
        logger.info(f"Stopping {len(self._plugins)} plugins...")

        for name, plugin in reversed(list(self._plugins.items())):
            if not plugin.is_started:
                continue
            try:
                logger.info(f"Stopping plugin: {name}")
                plugin.stop()
            except Exception as e:
                logger.error(f"Error stopping plugin '{name}': {e}")

        logger.info("All plugins stopped")

    def _stop_started_plugins(self) -> None:
        for name, plugin in reversed(list(self._plugins.items())):
            if plugin.is_started:
                try:
                    logger.warning(f"Cleanup: stopping plugin {name}")
                    plugin.stop()
                except Exception as e:
                    logger.error(f"Error during cleanup of '{name}': {e}")

    def health_all(self) -> Dict[str, Any]:
        """
        Aggregate health status from all plugins (worst status wins).

        Returns:
            {"status": str, "plugins": {name: health}}
        """
        plugin_health = {}
        overall_status = "healthy"

        for name, plugin in self._plugins.items():
            try:
                health = plugin.health()
            except Exception as e:
                logger.error(f"Health check failed for '{name}': {e}")
                health = {
                    "status": "unhealthy",
                    "message": f"Health check error: {e}",
                    "details": {}
                }

            plugin_health[name] = health
            if health["status"] == "unhealthy":
                overall_status = "unhealthy"
            elif health["status"] == "degraded" and overall_status != "unhealthy":
                overall_status = "degraded"

        return {
            "status": overall_status,
            "plugins": plugin_health
        }

    def reload_config(self, plugin_name: str, new_config: Dict[str, Any]) -> None:
        """
        Reload configuration for a specific plugin.

        Raises:
            ValueError: If plugin not found
        """
        plugin = self.get_plugin(plugin_name)
        if not plugin:
            raise ValueError(f"Plugin '{plugin_name}' not found")

        logger.info(f"Reloading config for plugin: {plugin_name}")
        plugin.on_config_reload(new_config)

    @property
    def plugin_count(self) -> int:
        return len(self._plugins)

    @property
    def plugin_names(self) -> List[str]:
        return list(self._plugins.keys())
