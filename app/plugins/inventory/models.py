"""
Data models for inventory provider.

These are the flat, assistant-facing projections of the Jeedom object graph.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple
from dataclasses import dataclass, field, asdict


@dataclass(frozen=True)
class CommandRecord:
    """
    A Jeedom command attached to an equipment.

    Either a state reporter (``*_STATE``) or an action trigger
    (``*_ON``, ``*_OPEN``...), classified by its generic type.
    """

    cmd_id: Any  # int when numeric, raw value otherwise
    generic_type: Optional[str]
    state: Any = None
    name: str = ""
    type: str = ""  # "info" or "action"


@dataclass(frozen=True)
class LocationRecord:
    id: Any
    name: str
    location_id: Any  # Parent object (father_id), None for roots

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class LightRecord:
    id: int
    name: str
    state: str  # "on" | "off"
    location_id: Any

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ShutterRecord:
    id: int
    name: str
    state: Any  # passed through from Jeedom, "unknown" when empty
    location_id: Any

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class InventorySnapshot:
    """
    Complete inventory state produced by one refresh cycle.

    Immutable; replaced as a whole at the end of each cycle.
    """

    locations: Tuple[LocationRecord, ...] = ()
    lights: Tuple[LightRecord, ...] = ()
    shutters: Tuple[ShutterRecord, ...] = ()
    commands: Mapping[int, Tuple[CommandRecord, ...]] = field(
        default_factory=lambda: MappingProxyType({})
    )  # eq_id → commands
    instructions: str = ""
    function_schemas: Tuple[Dict[str, Any], ...] = ()
    software_version: Optional[str] = None
    has_virtual_plugin: bool = False
    last_update: int = 0  # 0 until the first successful cycle

    @property
    def device_count(self) -> int:
        return len(self.commands)

    @property
    def command_count(self) -> int:
        return sum(len(cmds) for cmds in self.commands.values())


# Type aliases for clarity
EquipmentID = int
CommandIndex = Mapping[EquipmentID, Tuple[CommandRecord, ...]]
