"""
Actions Provider - command execution plugin.

Maps an assistant action (verb + equipment ids) onto Jeedom commands and
fires ``cmd::execCmd`` for each match.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, Set

from app.jeedom.client import JeedomClient
from app.plugins.base import BridgePlugin
from app.plugins.inventory.indexer import InventoryIndexer
from app.plugins.inventory.models import CommandRecord

logger = logging.getLogger(__name__)

LIGHT_FAMILY = "LIGHT"
FLAP_FAMILY = "FLAP"


class ActionsProvider(BridgePlugin):
    """
    Actions Provider plugin.

    Execution requests are detached tasks: the caller gets "Done." as soon
    as every id has been resolved, whatever the remote outcome.
    """

    def __init__(self, name: str, config: Dict[str, Any], client: JeedomClient, indexer: InventoryIndexer):
        super().__init__(name, config)

        self.client = client
        self.indexer = indexer

        self._pending: Set[asyncio.Task] = set()
        self._dispatched = 0

    def start(self) -> None:
        logger.info("Starting Actions Provider")
        self._mark_started()

    def stop(self) -> None:
        logger.info("Stopping Actions Provider")

        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

        self._mark_stopped()

    def health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "message": f"{self._dispatched} commands dispatched",
            "details": {
                "dispatched": self._dispatched,
                "pending": len(self._pending),
            }
        }

    async def update_lights(self, action: str, ids: Iterable[Any]) -> str:
        return await self.perform_action(LIGHT_FAMILY, action, ids)

    async def update_shutters(self, action: str, ids: Iterable[Any]) -> str:
        return await self.perform_action(FLAP_FAMILY, action, ids)

    async def perform_action(self, family: str, action: str, ids: Iterable[Any]) -> str:
        """
        Execute ``action`` on every equipment in ``ids``.

        Args:
            family: Generic type family ("LIGHT" or "FLAP")
            action: Verb, e.g. "on", "open"
            ids: Equipment ids as sent by the assistant

        Returns:
            "Done." or "Error: <message>"
        """
        from app.bridge_logging import get_logger
        log = get_logger("BRIDGE.Actions")

        try:
            generic_type = f"{family}_{action.upper()}"
            # A bare id is one id, not a sequence of characters
            if isinstance(ids, (str, bytes, int)):
                ids = [ids]
            ids = list(ids)
            # One snapshot for the whole call, even if a refresh swaps midway
            commands = self.indexer.get_snapshot().commands

            matched = 0
            for raw_id in ids:
                eq_id = int(raw_id)
                for cmd in commands.get(eq_id, ()):
                    if cmd.generic_type != generic_type:
                        continue
                    self._dispatch(eq_id, cmd)
                    matched += 1

            log.info("BRIDGE.Actions.Performed", extra={"fields": {
                "generic_type": generic_type,
                "ids": ids,
                "matched": matched,
            }})
            return "Done."

        except Exception as e:
            log.error("BRIDGE.Actions.PerformFailed", extra={"fields": {
                "family": family,
                "action": action,
                "error": str(e),
            }})
            return f"Error: {e}"

    def _dispatch(self, eq_id: int, cmd: CommandRecord) -> None:
        task = asyncio.get_running_loop().create_task(self.client.exec_command(cmd.cmd_id))
        self._pending.add(task)
        task.add_done_callback(self._on_dispatch_done)
        self._dispatched += 1
        logger.debug(f"Dispatched {cmd.generic_type} command {cmd.cmd_id} for equipment {eq_id}")

    def _on_dispatch_done(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return

        error = task.exception()
        if error is not None:
            from app.bridge_logging import get_logger
            log = get_logger("BRIDGE.Actions")
            log.error("BRIDGE.Actions.ExecFailed", extra={"fields": {
                "error": repr(error),
            }})
