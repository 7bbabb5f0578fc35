from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping


DEFAULT_REFRESH_INTERVAL_S = 5.0


@dataclass(frozen=True, slots=True)
class JeedomConfig:
    base_url: str
    api_key: str
    refresh_interval_s: float = DEFAULT_REFRESH_INTERVAL_S
    timeout_s: float | None = None  # None: wait for the server indefinitely

    @property
    def api_url(self) -> str:
        return f"{self.base_url}/core/api/jeeApi.php"

    def __repr__(self) -> str:
        # Never leak the API key through logs or tracebacks.
        return (
            f"JeedomConfig(base_url={self.base_url!r}, api_key='***', "
            f"refresh_interval_s={self.refresh_interval_s!r}, timeout_s={self.timeout_s!r})"
        )


def _opt_float(name: str) -> float | None:
    v = os.environ.get(name)
    if v is None or v.strip() == "":
        return None
    try:
        return float(v)
    except ValueError:
        return None


def _normalize_base_url(raw: str) -> str:
    url = raw.strip().rstrip("/")
    if not url:
        raise ValueError("JEEDOM_BASE_URL is required (e.g. http://jeedom or https://jeedom.mydomain.net)")
    if not url.startswith(("http://", "https://")):
        raise ValueError(f"JEEDOM_BASE_URL must start with http:// or https://, got {raw!r}")
    return url


def parse_refresh_interval(value: Any) -> float:
    interval = DEFAULT_REFRESH_INTERVAL_S if value is None else float(value)
    if interval <= 0:
        raise ValueError(f"refresh interval must be positive, got {interval}")
    return interval


def config_from_mapping(data: Mapping[str, Any]) -> JeedomConfig:
    """Build a config from a plain dict (plugin config, reload payloads)."""
    api_key = str(data.get("api_key") or "").strip()
    if not api_key:
        raise ValueError("JEEDOM_API_KEY is required (Settings > System > Configuration > APIs)")

    interval = parse_refresh_interval(data.get("refresh_interval_s"))

    timeout = data.get("timeout_s")
    return JeedomConfig(
        base_url=_normalize_base_url(str(data.get("base_url") or "")),
        api_key=api_key,
        refresh_interval_s=interval,
        timeout_s=None if timeout is None else float(timeout),
    )


def load_jeedom_config() -> JeedomConfig:
    return config_from_mapping(
        {
            "base_url": os.environ.get("JEEDOM_BASE_URL", ""),
            "api_key": os.environ.get("JEEDOM_API_KEY", ""),
            "refresh_interval_s": _opt_float("JEEDOM_REFRESH_INTERVAL_S"),
            "timeout_s": _opt_float("JEEDOM_TIMEOUT_S"),
        }
    )
