"""
LLM Tool Definitions and Execution

Function calling tools for light and shutter actions.
"""

import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


LIGHT_ACTIONS = ["on", "off"]
SHUTTER_ACTIONS = ["open", "close", "stop"]


# Tool definitions in OpenAI format
UPDATE_LIGHTS_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "update_lights",
        "description": "Turn on or off one or more lights. Use the light ids from the lights list.",
        "parameters": {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": LIGHT_ACTIONS,
                    "description": "The action to perform on the lights"
                },
                "ids": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "The ids of the lights to update"
                }
            },
            "required": ["action", "ids"]
        }
    }
}

UPDATE_SHUTTERS_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": "update_shutters",
        "description": "Open, close or stop one or more shutters. Use the shutter ids from the shutters list.",
        "parameters": {
            "type": "object",
            "properties": {
                "action": {
                    "type": "string",
                    "enum": SHUTTER_ACTIONS,
                    "description": "The action to perform on the shutters"
                },
                "ids": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "The ids of the shutters to update"
                }
            },
            "required": ["action", "ids"]
        }
    }
}

TOOLS = [UPDATE_LIGHTS_TOOL, UPDATE_SHUTTERS_TOOL]
TOOL_NAMES = {tool["function"]["name"] for tool in TOOLS}


async def execute_tool(
    tool_name: str,
    tool_args: Dict[str, Any],
    actions_provider: Optional[Any] = None
) -> str:
    """
    Execute a tool call.

    Args:
        tool_name: Name of the tool to execute
        tool_args: Arguments for the tool ({"action": ..., "ids": [...]})
        actions_provider: ActionsProvider instance

    Returns:
        "Done." or "Error: <message>"
    """
    from app.bridge_logging import get_logger
    log = get_logger("BRIDGE.LLM.Tools")

    if tool_name not in TOOL_NAMES:
        log.error("BRIDGE.LLM.Tools.UnknownTool", extra={"fields": {"tool_name": tool_name}})
        return f"Error: Unknown function: {tool_name}"

    if not actions_provider or not actions_provider.is_started:
        return "Error: Actions not available"

    action = tool_args.get("action", "")
    ids = tool_args.get("ids", [])

    if tool_name == "update_lights":
        result = await actions_provider.update_lights(action, ids)
    else:
        result = await actions_provider.update_shutters(action, ids)

    log.info("BRIDGE.LLM.Tools.Executed", extra={"fields": {
        "tool_name": tool_name,
        "action": action,
        "ids": ids,
        "result": result
    }})
    return result
