"""
In-memory device index.

Holds the most recently completed InventorySnapshot. Writers replace the
snapshot as a whole; readers never see a half-built one.
"""

import logging
import threading
from types import MappingProxyType
from typing import Dict, Iterable, Tuple

from app.plugins.inventory.models import (
    CommandIndex,
    CommandRecord,
    EquipmentID,
    InventorySnapshot,
)

logger = logging.getLogger(__name__)


def freeze_index(commands: Dict[EquipmentID, Iterable[CommandRecord]]) -> CommandIndex:
    """Turn a mutable eq_id → commands dict into a read-only index."""
    return MappingProxyType({eq_id: tuple(cmds) for eq_id, cmds in commands.items()})


class InventoryIndexer:
    """
    Owner of the current inventory snapshot.

    Lookups are by equipment id (O(1) → commands).
    """

    def __init__(self):
        self._snapshot = InventorySnapshot()
        self._lock = threading.Lock()

    def rebuild(self, snapshot: InventorySnapshot) -> None:
        """
        Replace the current snapshot.

        Args:
            snapshot: Fully built snapshot of the latest cycle
        """
        with self._lock:
            previous = self._snapshot
            self._snapshot = snapshot

        logger.info(
            f"Index swapped: {snapshot.device_count} devices "
            f"({previous.device_count} before), {snapshot.command_count} commands"
        )

    def get_snapshot(self) -> InventorySnapshot:
        """Current snapshot; safe to hold across awaits."""
        return self._snapshot

    def find_by_device(self, eq_id: EquipmentID) -> Tuple[CommandRecord, ...]:
        """All commands of an equipment, empty when unknown."""
        return self._snapshot.commands.get(eq_id, ())

    @property
    def device_count(self) -> int:
        return self._snapshot.device_count

    @property
    def command_count(self) -> int:
        return self._snapshot.command_count
