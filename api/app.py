"""FastAPI application factory for the group address engine API.

Creates the app with all routers mounted and the loaded configuration
stored on app.state.
"""

import logging

from fastapi import FastAPI

from .routes_addresses import router as addresses_router
from .routes_patterns import router as patterns_router
from .routes_zones import router as zones_router

logger = logging.getLogger("knxga.api")

API_VERSION = "1.0.0"


def create_app(config: dict | None = None) -> FastAPI:
    """Create the FastAPI application with all routes.

    Args:
        config: Loaded configuration dict (see knxga.load_config)
    """
    app = FastAPI(
        title="KNX Group Address Generator",
        description="Teach-by-example pattern analysis, address generation and collision checks",
        version=API_VERSION,
    )

    app.state.config = config or {}

    routers = (patterns_router, addresses_router, zones_router)
    for router in routers:
        app.include_router(router)

    @app.get("/api/v1/health", tags=["system"])
    def health():
        """Health check."""
        return {"status": "ok", "version": API_VERSION}

    logger.info("FastAPI app created with %d routers", len(routers))
    return app
