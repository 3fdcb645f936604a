import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import ORJSONResponse
import uvicorn

from influencehub.config import settings
from influencehub.db.base import engine, init_db
from influencehub.db.errors import NotFoundError, StorageError, ValidationError
from influencehub.routers import (
    analytics,
    campaigns,
    collaborations,
    dashboard,
    influencers,
    seed,
    users,
)
from influencehub.storage.database import DatabaseStorage
from influencehub.storage.deps import build_storage

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _app_lifespan(app: FastAPI) -> AsyncIterator[None]:
    storage = build_storage()
    app.state.storage = storage
    logger.info("Using %s storage backend", settings.STORAGE_BACKEND)
    if isinstance(storage, DatabaseStorage) and settings.DB_CREATE_ALL:
        await init_db()
    if settings.SEED_ON_STARTUP:
        await storage.seed_data()
    try:
        yield
    finally:
        if isinstance(storage, DatabaseStorage):
            await engine.dispose()


def create_app() -> FastAPI:
    logging.getLogger("influencehub").setLevel(settings.LOG_LEVEL)

    app = FastAPI(
        title="InfluenceHub API",
        default_response_class=ORJSONResponse,
        lifespan=_app_lifespan,
    )

    allow_origins = sorted(set(settings.BACKEND_CORS_ORIGINS))

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(ValidationError)
    async def validation_error_handler(_request: Request, exc: ValidationError) -> ORJSONResponse:
        return ORJSONResponse(status_code=400, content={"detail": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_error_handler(_request: Request, exc: NotFoundError) -> ORJSONResponse:
        return ORJSONResponse(status_code=404, content={"detail": str(exc)})

    @app.exception_handler(StorageError)
    async def storage_error_handler(_request: Request, exc: StorageError) -> ORJSONResponse:
        logger.exception("Storage failure", exc_info=exc)
        return ORJSONResponse(status_code=500, content={"detail": "Storage operation failed."})

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> ORJSONResponse:
        return ORJSONResponse(
            status_code=400,
            content={"detail": jsonable_encoder(exc.errors())},
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_request: Request, exc: Exception) -> ORJSONResponse:
        logger.exception("Unhandled server exception", exc_info=exc)
        return ORJSONResponse(status_code=500, content={"detail": "Internal server error."})

    @app.get("/health")
    async def health() -> dict[str, bool]:
        return {"ok": True}

    @app.get("/health/db")
    async def health_db(request: Request) -> dict[str, str]:
        try:
            await request.app.state.storage.ping()
        except StorageError as exc:
            return {"db": f"error: {exc}"}
        return {"db": "ok"}

    app.include_router(influencers.router)
    app.include_router(campaigns.router)
    app.include_router(collaborations.router)
    app.include_router(analytics.router)
    app.include_router(users.router)
    app.include_router(dashboard.router)
    app.include_router(seed.router)

    return app


app = create_app()

if __name__ == "__main__":
    uvicorn.run("influencehub.main:app", host=settings.API_HOST, port=settings.API_PORT)
