"""FastAPI application setup."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from src.api.controller import product_router
from src.api.error_handlers import register_error_handlers
from src.clients import CosmosDBClient
from src.config import get_config
from src.errors import StorageError
from src.services import ProductService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Open the Cosmos DB connection for the lifetime of the app.

    A connection failure aborts startup; the server does not run without
    its store.
    """
    if app.state.product_service is not None:
        # Injected by the caller, who owns its lifecycle
        yield
        return

    cosmosdb = get_config().cosmosdb
    client = CosmosDBClient(
        endpoint=cosmosdb.endpoint,
        key=cosmosdb.key,
        database_name=cosmosdb.database_name,
        container_name=cosmosdb.container_name,
        partition_key_path=cosmosdb.partition_key_path,
    )

    try:
        await client.connect()
    except Exception as e:
        logger.error("db is disconnected")
        logger.error(str(e))
        raise StorageError(f"Could not connect to {cosmosdb.endpoint}: {e}") from e

    logger.info("db is connected")
    app.state.product_service = ProductService(client)
    try:
        yield
    finally:
        app.state.product_service = None
        await client.close()


def create_app(product_service: Optional[ProductService] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        product_service: Service to serve requests with. When omitted, one is
            built from configuration and connected on startup.
    """
    app = FastAPI(
        title="Products API",
        description="CRUD API for products stored in Cosmos DB",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.product_service = product_service

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)

    @app.get("/", response_class=PlainTextResponse)
    async def homepage() -> str:
        return "welcome to Homepage"

    app.include_router(product_router)

    return app


app = create_app()
