"""
Jeedom → catalog projection.

Walks the ``jeeObject::full`` graph (objects → eqLogics → cmds) and produces
the flat locations/lights/shutters catalogs plus the equipment command index.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from app.plugins.inventory.models import (
    CommandRecord,
    EquipmentID,
    LightRecord,
    LocationRecord,
    ShutterRecord,
)

logger = logging.getLogger(__name__)


@dataclass
class Projection:
    """Result of projecting one object graph."""

    locations: List[LocationRecord] = field(default_factory=list)
    lights: List[LightRecord] = field(default_factory=list)
    shutters: List[ShutterRecord] = field(default_factory=list)
    commands: Dict[EquipmentID, List[CommandRecord]] = field(default_factory=dict)


class JeedomProjector:
    """
    Projects Jeedom objects into assistant catalogs.

    Only equipment created with the Virtual plugin is eligible; its
    LIGHT_STATE / FLAP_STATE commands give the device state.
    """

    ELIGIBLE_EQ_TYPE = "virtual"
    LIGHT_STATE = "LIGHT_STATE"
    FLAP_STATE = "FLAP_STATE"

    @classmethod
    def project(cls, objects: List[Any]) -> Projection:
        """
        Project the full object graph.

        Args:
            objects: Result of ``jeeObject::full``

        Returns:
            Projection with catalogs and command index
        """
        projection = Projection()

        for obj in objects or []:
            if not isinstance(obj, dict):
                logger.debug(f"Skipping non-object node: {type(obj).__name__}")
                continue

            # Every location is listed, even without equipment
            projection.locations.append(LocationRecord(
                id=obj.get("id"),
                name=obj.get("name", ""),
                location_id=obj.get("father_id"),
            ))

            equipments = obj.get("eqLogics")
            if not isinstance(equipments, list) or not equipments:
                continue

            for equipment in equipments:
                if not isinstance(equipment, dict):
                    continue
                if equipment.get("eqType_name") != cls.ELIGIBLE_EQ_TYPE:
                    continue
                cls._project_equipment(equipment, projection)

        return projection

    @classmethod
    def _project_equipment(cls, equipment: Dict[str, Any], projection: Projection) -> None:
        eq_id = cls._parse_id(equipment.get("id"))
        if eq_id is None:
            from app.bridge_logging import get_logger
            log = get_logger("BRIDGE.Inventory")
            log.warning("BRIDGE.Inventory.InvalidEquipmentId", extra={"fields": {
                "eq_id": equipment.get("id"),
                "name": equipment.get("name"),
            }})
            return

        raw_cmds = equipment.get("cmds")
        if not isinstance(raw_cmds, list):
            raw_cmds = []
        commands = [cls.normalize_command(raw) for raw in raw_cmds if isinstance(raw, dict)]

        # Later duplicates of the same id win
        projection.commands[eq_id] = commands

        name = equipment.get("name", "")
        location_id = equipment.get("object_id")

        light_cmd = cls._first_of_type(commands, cls.LIGHT_STATE)
        if light_cmd is not None:
            projection.lights.append(LightRecord(
                id=eq_id,
                name=name,
                state=cls.light_state(light_cmd.state),
                location_id=location_id,
            ))

        # An equipment carrying both state types lands in both catalogs
        flap_cmd = cls._first_of_type(commands, cls.FLAP_STATE)
        if flap_cmd is not None:
            projection.shutters.append(ShutterRecord(
                id=eq_id,
                name=name,
                state=cls.shutter_state(flap_cmd.state),
                location_id=location_id,
            ))

    @classmethod
    def normalize_command(cls, raw: Dict[str, Any]) -> CommandRecord:
        raw_id = raw.get("id")
        cmd_id = cls._parse_id(raw_id)
        return CommandRecord(
            cmd_id=raw_id if cmd_id is None else cmd_id,
            generic_type=raw.get("generic_type"),
            state=raw.get("state"),
            name=raw.get("name", ""),
            type=raw.get("type", ""),
        )

    @staticmethod
    def light_state(value: Any) -> str:
        return "on" if value else "off"

    @staticmethod
    def shutter_state(value: Any) -> Any:
        return value if value else "unknown"

    @staticmethod
    def has_virtual_plugin(plugins: List[Any]) -> bool:
        """True when the Virtual plugin from the Jeedom Market is installed."""
        return any(
            isinstance(plugin, dict)
            and plugin.get("id") == "virtual"
            and plugin.get("source") == "market"
            for plugin in plugins or []
        )

    @staticmethod
    def _first_of_type(commands: List[CommandRecord], generic_type: str) -> Optional[CommandRecord]:
        for cmd in commands:
            if cmd.generic_type == generic_type:
                return cmd
        return None

    @staticmethod
    def _parse_id(value: Any) -> Optional[int]:
        if isinstance(value, bool):
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
