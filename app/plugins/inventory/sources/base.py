"""
Base interface for inventory sources.

A source fetches one raw view of the remote home per refresh cycle.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class SourcePayload:
    """Raw data gathered by a source for one cycle."""

    plugins: List[Dict[str, Any]] = field(default_factory=list)
    version: Optional[str] = None
    objects: List[Dict[str, Any]] = field(default_factory=list)


class InventorySource(ABC):
    """
    Base class for inventory sources.

    Sources are responsible for:
    - Talking to the external system
    - Degrading to empty data instead of raising on remote failures
    """

    def __init__(self, name: str, config: Dict[str, Any]):
        self.name = name
        self.config = config

    @abstractmethod
    async def fetch(self) -> SourcePayload:
        """
        Fetch a full raw view of the remote home.

        Remote failures must be absorbed into empty defaults.
        """
