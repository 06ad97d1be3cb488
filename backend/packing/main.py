"""FastAPI app factory."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from packing import __version__
from packing.catalog import Catalog, ConfigurationNotFoundError
from packing.config import settings
from packing.engine.errors import PackingError

load_dotenv()

logging.basicConfig(
    level=getattr(logging, settings.packing_log_level.upper(), logging.INFO),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)

logger = logging.getLogger(__name__)


def create_app(catalog: Catalog | None = None) -> FastAPI:
    app = FastAPI(
        title="Extremal Packings",
        description="Perimeter critical-point analysis of rigid disk packings",
        version=__version__,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Built once, read-only afterwards; handlers receive it through get_catalog
    if catalog is None:
        catalog = Catalog.from_directory(settings.catalog_dir or None)
    app.state.catalog = catalog

    _register_error_handlers(app)

    from packing.api.router import api_router

    app.include_router(api_router)

    return app


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ConfigurationNotFoundError)
    async def _not_found(request: Request, exc: ConfigurationNotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content={"detail": str(exc), "name": exc.name, "available": exc.available},
        )

    @app.exception_handler(PackingError)
    async def _packing_error(request: Request, exc: PackingError) -> JSONResponse:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=422, content={"detail": str(exc)})


app = create_app()
