"""
Jeedom JSON-RPC access.
"""

from app.jeedom.client import JeedomClient, JeedomError
from app.jeedom.config import JeedomConfig, load_jeedom_config

__all__ = [
    "JeedomClient",
    "JeedomError",
    "JeedomConfig",
    "load_jeedom_config",
]
