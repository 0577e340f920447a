import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI

from spice_shop.core.config import settings
from spice_shop.api import cart, products, contact, web
from spice_shop.db.session import build_engine, build_sessionmaker
from spice_shop.db.storage import KeyValueStorage, MemoryStorage, SqlStorage
from spice_shop.services.cart import CartStore

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def build_storage(backend: str, database_url: str) -> KeyValueStorage:
    if backend == "memory":
        logger.warning("Using in-memory cart storage, the cart will not survive a restart")
        return MemoryStorage()
    if backend != "sql":
        raise ValueError(f"Unknown CART_STORAGE_BACKEND {backend!r}, expected 'sql' or 'memory'")

    engine = build_engine(database_url)
    return SqlStorage(build_sessionmaker(engine))


def build_cart_store(backend: str, database_url: str) -> CartStore:
    storage = build_storage(backend, database_url)
    return CartStore(
        storage,
        key=settings.CART_STORAGE_KEY,
        feedback_seconds=settings.ADDED_FEEDBACK_SECONDS
    )


def create_app(cart_store: Optional[CartStore] = None) -> FastAPI:
    """Composition root: owns the single cart store for the app's lifetime."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store = cart_store or build_cart_store(settings.CART_STORAGE_BACKEND, settings.DATABASE_URL)
        store.initialize()
        app.state.cart_store = store
        logger.info(f"Starting {settings.SHOP_NAME} shop")
        yield
        logger.info("Shutting down shop application")
        store.close()

    app = FastAPI(
        title=settings.SHOP_NAME,
        description="Spice shop showcase with a persistent cart",
        version="1.0.0",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.include_router(products.router)
    app.include_router(cart.router)
    app.include_router(contact.router)
    app.include_router(web.router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "ok",
            "shop_name": settings.SHOP_NAME
        }

    return app


app = create_app()


def run():
    uvicorn.run("spice_shop.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
