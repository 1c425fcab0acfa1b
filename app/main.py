"""Entry point for the FastAPI-powered movie catalog API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import settings
from .database import Database
from .errors import InvalidRequest, StorageUnavailable
from .seed import load_catalog_document, seed_catalog
from .services.catalog_service import CatalogService
from .services.catalog_store import CatalogStore

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app: FastAPI


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    database = Database(settings.database_url)
    await database.create_all()

    if settings.catalog_seed_path is not None:
        document = load_catalog_document(settings.catalog_seed_path)
        await seed_catalog(database, document)

    fastapi_app.state.database = database
    fastapi_app.state.catalog_service = CatalogService(
        CatalogStore(database.session_factory)
    )

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        await database.dispose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Read-only movie catalog with genre filtering",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_catalog_service(app: FastAPI) -> CatalogService:
    service = getattr(app.state, "catalog_service", None)
    if not isinstance(service, CatalogService):
        raise RuntimeError("Catalog service not initialised")
    return service


def register_routes(fastapi_app: FastAPI) -> None:
    @fastapi_app.exception_handler(InvalidRequest)
    async def _invalid_request(_: Request, exc: InvalidRequest) -> JSONResponse:
        return JSONResponse({"detail": str(exc)}, status_code=400)

    @fastapi_app.exception_handler(StorageUnavailable)
    async def _storage_unavailable(
        _: Request, exc: StorageUnavailable
    ) -> JSONResponse:
        return JSONResponse({"detail": str(exc)}, status_code=503)

    @fastapi_app.get("/healthz")
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    @fastapi_app.get("/movies")
    async def list_movies() -> list[dict[str, Any]]:
        service = get_catalog_service(fastapi_app)
        return await service.list_movies()

    @fastapi_app.get("/genres")
    async def list_genres() -> list[dict[str, Any]]:
        service = get_catalog_service(fastapi_app)
        return await service.list_genres()

    @fastapi_app.get("/movies/genre/{genre_id}")
    async def list_movies_by_genre(genre_id: str) -> list[dict[str, Any]]:
        service = get_catalog_service(fastapi_app)
        movies = await service.list_movies_by_genre(genre_id)
        if not movies:
            logger.debug("No movies found for genre %s", genre_id)
        return movies


app = create_app()
