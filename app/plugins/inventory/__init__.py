"""
Inventory Provider Plugin

Keeps an in-memory snapshot of the Jeedom lights and shutters.
"""

from app.plugins.inventory.provider import InventoryProvider

__all__ = ["InventoryProvider"]
