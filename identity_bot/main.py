"""FastAPI entrypoint for the identity bot."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from identity_bot.api.v1.router import api_router
from identity_bot.core.logging_config import configure_logging
from identity_bot.core.settings import settings
from identity_bot.db.session import create_db_engine, create_session_factory
from identity_bot.providers.messaging.mock_messaging import MockMessagingProvider
from identity_bot.providers.store.sql_gateway import SqlStoreGateway
from identity_bot.services.bot_service import build_bot_service, check_store_connectivity

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Connect to the store, fail fast when it is unreachable, and wire the bot."""
    configure_logging(settings.log_level)
    logger.info("Starting bot...")

    engine = create_db_engine(
        settings.sqlalchemy_url,
        pool_size=settings.pg_pool_capacity,
        pool_timeout=settings.pg_pool_timeout,
        connect_timeout=settings.pg_connect_timeout,
        statement_timeout=settings.pg_statement_timeout,
    )
    try:
        gateway = SqlStoreGateway(create_session_factory(engine))
        check_store_connectivity(gateway)
        app.state.bot_service = build_bot_service(
            settings=settings,
            gateway=gateway,
            messaging_provider=MockMessagingProvider(),
        )
        yield
    finally:
        engine.dispose()


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)


@app.get("/")
async def health_check() -> dict[str, str]:
    """Simple health endpoint to validate service status."""
    return {"status": "ok", "message": "Identity bot backend is running"}


# Mount API v1 routes under /api/v1.
app.include_router(api_router, prefix="/api/v1")
