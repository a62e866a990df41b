"""FastAPI application factory with lifespan management."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from xprng import __version__
from xprng.api.dependencies import set_stream_manager
from xprng.api.routes import api_router
from xprng.api.stream_manager import StreamManager
from xprng.config import GeneratorConfig
from xprng.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def create_app(config: GeneratorConfig | None = None) -> FastAPI:
    """Build and return the fully-configured FastAPI application."""
    if config is None:
        config = GeneratorConfig()

    _config = config

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        setup_logging(_config.log_level)
        manager = StreamManager(_config)
        set_stream_manager(manager)
        logger.info("API server started (max_streams=%d).", _config.max_streams)
        yield
        manager.clear()
        set_stream_manager(None)
        logger.info("API server shutting down.")

    app = FastAPI(
        title="x-prng Stream Service",
        description=(
            "Portable, seedable pseudo-random number streams.\n\n"
            "Every stream reproduces the same sequence as any other x-prng "
            "implementation given the same seed. **Not cryptographically secure.**\n\n"
            "## API Groups\n\n"
            "- **Streams**: create streams, draw integers and bytes, reseed, save and restore\n"
            "- **Config**: generator constants and service limits\n"
        ),
        version=__version__,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Streams", "description": "Named generator streams. Each stream owns its own state."},
            {"name": "Config", "description": "Read-only generator constants and request limits."},
        ],
    )

    # CORS: allow any origin in dev
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app
