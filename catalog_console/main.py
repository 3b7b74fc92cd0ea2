"""FastAPI application factory and lifespan."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog_console.api.v1 import api_router
from catalog_console.clients.http import HttpCatalogRepository
from catalog_console.core.config import get_settings
from catalog_console.core.exceptions import CatalogConsoleError, TransportError

settings = get_settings()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: open the upstream catalog client; shutdown: close it."""
    app.state.repository = HttpCatalogRepository.from_settings(settings)
    yield
    await app.state.repository.aclose()


async def catalog_error_handler(request: Request, exc: CatalogConsoleError) -> JSONResponse:
    content: dict = {"detail": exc.message}
    if isinstance(exc, TransportError):
        logger.warning("%s %s: %s", request.method, request.url.path, exc.message)
        content["operation"] = exc.operation
    return JSONResponse(status_code=exc.status_code, content=content)


def create_application() -> FastAPI:
    logging.basicConfig(level=settings.log_level.upper())
    app = FastAPI(
        title=settings.app_name,
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    # CORS: allow localhost in dev; in production use CORS_ORIGINS env (comma-separated)
    if settings.debug:
        cors_origins = ["*"]
    elif settings.environment == "development":
        cors_origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
    else:
        cors_origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(CatalogConsoleError, catalog_error_handler)

    @app.get("/")
    def root():
        return {"status": "ok", "message": settings.app_name}

    app.include_router(api_router, prefix=settings.api_v1_prefix)
    return app


app = create_application()
