"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering."""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from storefront import __version__
from storefront.api.v1 import router as v1_router
from storefront.core.config import Settings, get_settings
from storefront.core.errors import StorefrontError, UnauthenticatedError
from storefront.core.logging import configure_logging

logger = logging.getLogger(__name__)


async def storefront_error_handler(request: Request, exc: StorefrontError) -> JSONResponse:
    """Render domain errors as a stable {error, detail} body with the mapped status."""
    if exc.status_code >= 500:
        logger.error(
            "Request failed: %s %s",
            request.method,
            request.url.path,
            extra={"error_code": exc.code, "reason": exc.message[:500]},
        )
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthenticatedError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.code, "detail": exc.message},
        headers=headers,
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)
    if settings.APP_ENV == "prod" and settings.uses_default_jwt_secret:
        logger.warning("JWT_SECRET is the built-in default; set a real secret in production.")

    app = FastAPI(
        title="Storefront API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.APP_ENV == "dev" else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StorefrontError, storefront_error_handler)
    app.include_router(v1_router, prefix=settings.API_V1_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "Storefront API"}

    return app


app = create_app()
