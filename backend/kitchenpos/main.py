# backend/kitchenpos/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from kitchenpos.api import (
    menu_groups_router,
    menus_router,
    orders_router,
    products_router,
    table_groups_router,
    tables_router,
)
from kitchenpos.config import Settings, load_settings
from kitchenpos.storage import InMemoryStorage, SQLAlchemyStorage, Storage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings) -> Storage:
    """Create the storage backend selected by STORAGE_BACKEND."""
    if settings.storage_backend == "sqlalchemy":
        return SQLAlchemyStorage(settings.database_url, use_alembic=settings.use_alembic)
    return InMemoryStorage()


@asynccontextmanager
async def _lifespan(application: FastAPI):
    yield
    application.state.storage.close()


def create_app(settings: Settings = None, storage: Storage = None) -> FastAPI:
    """Build the FastAPI app with its storage attached to app.state."""
    settings = settings or load_settings()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format='%(asctime)s - %(levelname)s - %(message)s'
    )

    application = FastAPI(title="kitchenpos backend", lifespan=_lifespan)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.state.settings = settings
    application.state.storage = storage or build_storage(settings)
    logger.info("Using %s storage", application.state.storage.name)

    for module in (
        products_router,
        menu_groups_router,
        menus_router,
        orders_router,
        tables_router,
        table_groups_router,
    ):
        application.include_router(module.router)

    @application.get("/health", summary="Report liveness and storage backend")
    async def health(request: Request):
        return {"status": "ok", "storage": request.app.state.storage.name}

    return application


app = create_app()
