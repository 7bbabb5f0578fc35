"""
Tests for plugin system foundation.

Tests plugin lifecycle, registry ordering, and health aggregation.
"""

import pytest
from typing import Dict, Any, List, Optional

from app.plugins.base import BridgePlugin
from app.plugins.tooling_provider import ToolingProvider
from app.plugins.registry import PluginRegistry


class DummyPlugin(BridgePlugin):
    """Plugin that records lifecycle calls into a shared journal."""

    def __init__(self, name: str, config: Dict[str, Any], journal: Optional[List[str]] = None):
        super().__init__(name, config)
        self.journal = journal if journal is not None else []
        self.status = config.get("status", "healthy")

    def start(self) -> None:
        if self.config.get("fail_start"):
            raise RuntimeError("cannot start")
        self.journal.append(f"start:{self.name}")
        self._mark_started()

    def stop(self) -> None:
        self.journal.append(f"stop:{self.name}")
        self._mark_stopped()

    def health(self) -> Dict[str, Any]:
        if self.status == "explode":
            raise RuntimeError("health probe crashed")
        return {"status": self.status, "message": "ok", "details": {}}


class DummyToolingProvider(ToolingProvider):
    def start(self) -> None:
        self._mark_started()

    def stop(self) -> None:
        self._mark_stopped()

    def health(self) -> Dict[str, Any]:
        return {"status": "healthy", "message": "ok", "details": {}}

    def get_snapshot(self) -> Dict[str, Any]:
        return {"lights": self.config.get("lights", [])}

    def get_instructions(self) -> str:
        return "instructions"

    def get_function_schemas(self) -> List[Dict[str, Any]]:
        return []

    def get_software_version(self) -> Optional[str]:
        return "4.4.1"


class TestPluginBase:
    def test_plugin_creation(self):
        plugin = DummyPlugin("test", {"foo": "bar"})
        assert plugin.name == "test"
        assert plugin.config == {"foo": "bar"}
        assert not plugin.is_started

    def test_plugin_lifecycle(self):
        plugin = DummyPlugin("test", {})

        plugin.start()
        assert plugin.is_started

        plugin.stop()
        assert not plugin.is_started
        assert plugin.journal == ["start:test", "stop:test"]

    def test_config_reload(self):
        plugin = DummyPlugin("test", {"a": 1})
        plugin.on_config_reload({"a": 2, "b": 3})
        assert plugin.config == {"a": 2, "b": 3}

    def test_tooling_provider_is_a_plugin(self):
        provider = DummyToolingProvider("inventory", {"lights": [{"id": 4}]})
        assert isinstance(provider, BridgePlugin)
        assert provider.get_snapshot() == {"lights": [{"id": 4}]}
        assert provider.get_software_version() == "4.4.1"

    def test_abstract_methods_enforced(self):
        with pytest.raises(TypeError):
            BridgePlugin("x", {})


class TestPluginRegistry:
    def test_registry_creation(self):
        registry = PluginRegistry()
        assert registry.plugin_count == 0
        assert registry.plugin_names == []

    def test_register_plugin_class(self):
        registry = PluginRegistry()
        registry.register_plugin_class("dummy", DummyPlugin)

        with pytest.raises(ValueError, match="already registered"):
            registry.register_plugin_class("dummy", DummyPlugin)

    def test_create_plugin_with_collaborators(self):
        registry = PluginRegistry()
        registry.register_plugin_class("dummy", DummyPlugin)
        journal: List[str] = []

        plugin = registry.create_plugin("dummy", {"test": "config"}, journal=journal)

        assert isinstance(plugin, DummyPlugin)
        assert plugin.journal is journal
        assert registry.get_plugin("dummy") is plugin
        assert registry.get_plugin("nonexistent") is None

    def test_create_unregistered_plugin(self):
        registry = PluginRegistry()

        with pytest.raises(ValueError, match="not registered"):
            registry.create_plugin("nonexistent", {})

    def test_start_in_order_stop_in_reverse(self):
        registry = PluginRegistry()
        registry.register_plugin_class("inventory", DummyPlugin)
        registry.register_plugin_class("actions", DummyPlugin)
        journal: List[str] = []

        registry.create_plugin("inventory", {}, journal=journal)
        registry.create_plugin("actions", {}, journal=journal)

        registry.start_all()
        registry.stop_all()

        assert journal == ["start:inventory", "start:actions", "stop:actions", "stop:inventory"]

    def test_failed_start_rolls_back(self):
        registry = PluginRegistry()
        registry.register_plugin_class("inventory", DummyPlugin)
        registry.register_plugin_class("actions", DummyPlugin)
        journal: List[str] = []

        inventory = registry.create_plugin("inventory", {}, journal=journal)
        registry.create_plugin("actions", {"fail_start": True}, journal=journal)

        with pytest.raises(RuntimeError, match="cannot start"):
            registry.start_all()

        assert not inventory.is_started
        assert journal == ["start:inventory", "stop:inventory"]

    @pytest.mark.parametrize(
        "statuses,expected",
        [
            (["healthy", "healthy"], "healthy"),
            (["healthy", "degraded"], "degraded"),
            (["degraded", "unhealthy"], "unhealthy"),
            (["healthy", "explode"], "unhealthy"),
        ],
    )
    def test_health_all(self, statuses, expected):
        registry = PluginRegistry()
        for i, status in enumerate(statuses):
            registry.register_plugin_class(f"p{i}", DummyPlugin)
            registry.create_plugin(f"p{i}", {"status": status})

        health = registry.health_all()

        assert health["status"] == expected
        assert set(health["plugins"]) == {f"p{i}" for i in range(len(statuses))}

    def test_reload_config(self):
        registry = PluginRegistry()
        registry.register_plugin_class("dummy", DummyPlugin)

        plugin = registry.create_plugin("dummy", {"a": 1})
        registry.reload_config("dummy", {"a": 2})
        assert plugin.config == {"a": 2}

        with pytest.raises(ValueError, match="not found"):
            registry.reload_config("nonexistent", {})
