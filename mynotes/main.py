from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from mynotes import __version__
from mynotes.api.http.health import router as health_router
from mynotes.api.http.notes import router as notes_router
from mynotes.api.ws.notes import router as notes_ws_router
from mynotes.core.config import settings
from mynotes.core.db import init_models
from mynotes.core.dependencies import get_data_service, get_engine
from mynotes.core.logging_config import setup_logging
from mynotes.services.sql import SqlDataService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    data_service = get_data_service()

    if isinstance(data_service, SqlDataService):
        engine = get_engine()
        await init_models(engine)
        await data_service.seed(settings.seed_notes)
        logger.info(f"SQL data service ready at {engine.url!r}")
        yield
        await engine.dispose()
    else:
        logger.info(f"Using {type(data_service).__name__}")
        yield


def create_app() -> FastAPI:
    """Сборка приложения"""
    setup_logging(settings.log_level)

    app = FastAPI(
        title="MyNotes",
        description="Постраничный доступ к заметкам с push-обновлениями списка",
        version=__version__,
        lifespan=lifespan
    )

    app.include_router(health_router)
    app.include_router(notes_router)
    app.include_router(notes_ws_router)

    return app


app = create_app()
