"""
Assistant instructions built from the current catalogs.
"""

from typing import Any, Dict, List, Sequence

import yaml

from app.llm.tools import UPDATE_LIGHTS_TOOL, UPDATE_SHUTTERS_TOOL
from app.plugins.inventory.models import LightRecord, LocationRecord, ShutterRecord


BASE_INSTRUCTIONS = """
You are a home automation assistant, focused solely on managing connected devices in the home.
When asked to calculate an average, **round to the nearest whole number** without explaining the calculation.
"""

DEFAULT_INSTRUCTIONS = """
Currently, there is no connected devices.
Your sole task is to ask the user to install one or more connected devices in the home before proceeding.
"""

# Field documentation shipped alongside the live data so the assistant can
# read the catalogs without guessing at the meaning of each key.
LOCATIONS_MODEL: Dict[str, Any] = {
    "description": "Rooms and areas of the home, possibly nested.",
    "fields": {
        "id": "Unique identifier of the location.",
        "name": "Name of the location.",
        "location_id": "Identifier of the parent location, null for top-level locations.",
    },
}

LIGHTS_MODEL: Dict[str, Any] = {
    "description": "Lights of the home.",
    "fields": {
        "id": "Unique identifier of the light, used to update it.",
        "name": "Name of the light.",
        "state": "Current state of the light: on or off.",
        "location_id": "Identifier of the location the light belongs to.",
    },
}

SHUTTERS_MODEL: Dict[str, Any] = {
    "description": "Shutters of the home.",
    "fields": {
        "id": "Unique identifier of the shutter, used to update it.",
        "name": "Name of the shutter.",
        "state": "Current state of the shutter as reported by the home automation server, unknown when not reported.",
        "location_id": "Identifier of the location the shutter belongs to.",
    },
}


def compose_instructions(
    locations: Sequence[LocationRecord],
    lights: Sequence[LightRecord],
    shutters: Sequence[ShutterRecord],
) -> str:
    """Baseline guidance plus either the no-device guidance or a YAML data block."""
    instructions = [BASE_INSTRUCTIONS]

    if not lights and not shutters:
        instructions.append(DEFAULT_INSTRUCTIONS)
    else:
        instructions.append("``` yaml")
        instructions.append(
            yaml.safe_dump(
                {
                    "locationsModel": LOCATIONS_MODEL,
                    "lightsModel": LIGHTS_MODEL,
                    "shuttersModel": SHUTTERS_MODEL,
                    "locations": [location.to_dict() for location in locations],
                    "lights": [light.to_dict() for light in lights],
                    "shutters": [shutter.to_dict() for shutter in shutters],
                },
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False,
            )
        )
        instructions.append("```")

    return "\n".join(instructions)


def select_function_schemas(
    lights: Sequence[LightRecord],
    shutters: Sequence[ShutterRecord],
) -> List[Dict[str, Any]]:
    """Only advertise actions for device families that actually exist."""
    schemas: List[Dict[str, Any]] = []
    if lights:
        schemas.append(UPDATE_LIGHTS_TOOL)
    if shutters:
        schemas.append(UPDATE_SHUTTERS_TOOL)
    return schemas
