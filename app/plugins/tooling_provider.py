"""
Tooling Provider interface.

Tooling Providers expose what the assistant needs to know about the home:
instructions, the currently callable function schemas and the raw catalogs.
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional
from app.plugins.base import BridgePlugin


class ToolingProvider(BridgePlugin):
    """
    Base class for tooling providers.

    Design Principles:
    - Reads MUST be served from memory (no network calls)
    - Returned data MUST come from one consistent snapshot
    - Schemas are only advertised for devices that exist
    """

    @abstractmethod
    def get_snapshot(self) -> Dict[str, Any]:
        """
        Serialized view of the current catalogs.

        Example:
            {
                "locations": [...],
                "lights": [...],
                "shutters": [...],
                "software_version": "4.4.1",
                "last_update": 1760781234
            }
        """

    @abstractmethod
    def get_instructions(self) -> str:
        """Natural-language briefing for the assistant."""

    @abstractmethod
    def get_function_schemas(self) -> List[Dict[str, Any]]:
        """Function schemas the assistant may call right now."""

    @abstractmethod
    def get_software_version(self) -> Optional[str]:
        """Version reported by the remote server, None when unknown."""
