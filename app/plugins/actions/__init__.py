"""
Actions Provider Plugin

Fires Jeedom commands for assistant actions on lights and shutters.
"""

from app.plugins.actions.provider import ActionsProvider

__all__ = ["ActionsProvider"]
