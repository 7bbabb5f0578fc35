from __future__ import annotations

import argparse
import os

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(prog="jeedom-bridge", description="Run the Jeedom assistant bridge")
    parser.add_argument("--host", default=os.environ.get("BRIDGE_HOST", "0.0.0.0"))
    parser.add_argument("--port", type=int, default=int(os.environ.get("BRIDGE_PORT", "8000")))
    parser.add_argument("--log-level", default=os.environ.get("BRIDGE_LOG_LEVEL", "info"))
    parser.add_argument("--base-url", default=None, help="Jeedom base URL (overrides JEEDOM_BASE_URL)")
    parser.add_argument(
        "--refresh-interval",
        type=float,
        default=None,
        help="Seconds between inventory refreshes (overrides JEEDOM_REFRESH_INTERVAL_S)",
    )
    args = parser.parse_args()

    # The lifespan reads its config from the environment.
    if args.base_url:
        os.environ["JEEDOM_BASE_URL"] = args.base_url
    if args.refresh_interval is not None:
        os.environ["JEEDOM_REFRESH_INTERVAL_S"] = str(args.refresh_interval)
    os.environ["BRIDGE_LOG_LEVEL"] = args.log_level

    # Single worker: the device index lives in process memory.
    uvicorn.run(
        "app.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        workers=1,
    )
