"""
Bridge Plugin System

Lifecycle and registry shared by the inventory and actions plugins.
"""

from app.plugins.base import BridgePlugin
from app.plugins.tooling_provider import ToolingProvider
from app.plugins.registry import PluginRegistry

__all__ = [
    "BridgePlugin",
    "ToolingProvider",
    "PluginRegistry",
]
