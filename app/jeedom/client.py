"""
Jeedom JSON-RPC client.

Every request goes to ``{base_url}/core/api/jeeApi.php`` with the API key
merged into the params.
"""

from __future__ import annotations

import logging
from typing import Any, TypeVar

import httpx

from app.jeedom.config import JeedomConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class JeedomError(Exception):
    """Raised when a JSON-RPC call fails (transport, HTTP or remote error)."""

    def __init__(self, method: str, message: str, code: int | None = None):
        super().__init__(message)
        self.method = method
        self.code = code


class JeedomClient:
    def __init__(self, config: JeedomConfig, client: httpx.AsyncClient | None = None):
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(config.timeout_s))

    async def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": {"apikey": self.config.api_key, **(params or {})},
            "id": 1,
        }

        try:
            r = await self._client.post(self.config.api_url, json=payload)
            r.raise_for_status()
            data = r.json()
        except httpx.HTTPStatusError as e:
            raise JeedomError(method, f"HTTP {e.response.status_code} from Jeedom") from e
        except httpx.HTTPError as e:
            raise JeedomError(method, str(e) or type(e).__name__) from e
        except ValueError as e:
            raise JeedomError(method, f"Invalid JSON response: {e}") from e

        if not isinstance(data, dict):
            raise JeedomError(method, f"Unexpected response type: {type(data).__name__}")

        error = data.get("error")
        if error:
            if isinstance(error, dict):
                raise JeedomError(method, str(error.get("message") or error), code=error.get("code"))
            raise JeedomError(method, str(error))

        return data.get("result")

    async def call_or_default(self, method: str, params: dict[str, Any] | None, default: T) -> Any | T:
        """Call ``method`` and fall back to ``default`` on any JeedomError."""
        try:
            return await self.call(method, params)
        except JeedomError as e:
            from app.bridge_logging import get_logger
            log = get_logger("BRIDGE.Jeedom")
            log.error("BRIDGE.Jeedom.CallFailed", extra={"fields": {
                "method": method,
                "code": e.code,
                "error": str(e),
            }})
            return default

    async def list_plugins(self) -> list[dict[str, Any]]:
        result = await self.call_or_default("plugin::listPlugin", None, [])
        return result if isinstance(result, list) else []

    async def version(self) -> str | None:
        result = await self.call_or_default("version", None, None)
        return None if result is None else str(result)

    async def full_objects(self) -> list[dict[str, Any]]:
        result = await self.call_or_default("jeeObject::full", None, [])
        return result if isinstance(result, list) else []

    async def exec_command(self, cmd_id: Any) -> Any:
        logger.debug(f"Executing Jeedom command {cmd_id}")
        return await self.call_or_default("cmd::execCmd", {"id": cmd_id}, None)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
