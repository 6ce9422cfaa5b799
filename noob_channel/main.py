"""noob-channel-bot — FastAPI application factory."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from noob_channel.adapters.network.http_relay_adapter import HttpRelayClient
from noob_channel.adapters.persistence.database import create_tables, engine, ensure_database_dir
from noob_channel.config import settings
from noob_channel.infrastructure.api.dependencies import build_bot
from noob_channel.infrastructure.api.routes_events import router as events_router
from noob_channel.infrastructure.api.routes_status import router as status_router
from noob_channel.logging_config import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load rotation state before serving; refuse to start if it is unusable."""
    configure_logging(settings.log_path, max(settings.log_level, 1) if settings.debug else settings.log_level)

    ensure_database_dir(settings.database_url)
    await create_tables(engine)
    logger.info("Database ready at %s", settings.database_url)

    relay = HttpRelayClient()
    try:
        app.state.relay = relay
        app.state.bot = await build_bot(relay)
        yield
    finally:
        await relay.aclose()
        await engine.dispose()


def create_app() -> FastAPI:
    app = FastAPI(
        title="noob-channel-bot",
        description="Hands out capacity-bounded broadcast channels and rotates them when full",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(status_router, prefix="/api")
    app.include_router(events_router, prefix="/api")

    return app


app = create_app()
