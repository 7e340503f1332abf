"""KNX Group Address Generator: Main Entry Point.

Loads configuration from config.yaml (overridable through environment
variables), creates the FastAPI application and serves it with uvicorn.

Environment:
  KNXGA_CONFIG     path to the YAML config file
  KNXGA_API_HOST   bind address (default 0.0.0.0)
  KNXGA_API_PORT   HTTP port (default 9090)
  KNXGA_LOG_LEVEL  logging level name (default INFO)
"""

import copy
import logging
import os

import yaml

DEFAULT_CONFIG = {
    "api": {"host": "0.0.0.0", "port": 9090},
    "logging": {"level": "INFO"},
}

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


def load_config(path: str | None = None) -> dict:
    """Load config.yaml merged over defaults, then apply env overrides.

    A missing file is not an error; defaults are used instead.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if path is None:
        path = os.environ.get("KNXGA_CONFIG")
    if path is None:
        path = os.path.join(os.path.dirname(__file__), "config.yaml")

    if os.path.exists(path):
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        for section, values in data.items():
            if isinstance(values, dict) and isinstance(config.get(section), dict):
                config[section].update(values)
            else:
                config[section] = values

    if "KNXGA_API_HOST" in os.environ:
        config["api"]["host"] = os.environ["KNXGA_API_HOST"]
    if "KNXGA_API_PORT" in os.environ:
        config["api"]["port"] = int(os.environ["KNXGA_API_PORT"])
    if "KNXGA_LOG_LEVEL" in os.environ:
        config["logging"]["level"] = os.environ["KNXGA_LOG_LEVEL"]

    return config


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------


def main():
    config = load_config()

    logging.basicConfig(
        level=str(config["logging"]["level"]).upper(),
        format="%(asctime)s [%(name)s] %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("knxga")

    # Late import so logging is configured before the app logs anything
    from api.app import create_app

    app = create_app(config)

    host = config["api"]["host"]
    port = int(config["api"]["port"])
    logger.info("Management API: http://%s:%d", host, port)
    logger.info("  Health: http://%s:%d/api/v1/health", host, port)
    _run_api_server(app, host, port)


def _run_api_server(app, host: str, port: int):
    """Serve the app with uvicorn until interrupted."""
    import uvicorn

    config = uvicorn.Config(
        app=app,
        host=host,
        port=port,
        log_level="info",
        access_log=False,
    )
    server = uvicorn.Server(config)
    server.run()


if __name__ == "__main__":
    main()
