"""FastAPI application entrypoint. No business logic; only wiring, middleware and error rendering.

Run with: uvicorn fleetops.main:create_app --factory
"""

import logging

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from fleetops import __version__
from fleetops.api import router as api_router
from fleetops.core.config import Settings, get_settings
from fleetops.core.logging import configure_logging
from fleetops.core.security import TokenService
from fleetops.services.errors import AuthServiceError

logger = logging.getLogger(__name__)


async def auth_service_error_handler(request: Request, exc: AuthServiceError) -> JSONResponse:
    """Render service errors as {"error": message} with the error's status code."""
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message},
        headers=headers,
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application; the token service is constructed here from the given settings."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="FleetOps API",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings
    app.state.token_service = TokenService.from_settings(settings)

    origins = ["*"] if settings.APP_ENV == "dev" else settings.CORS_ORIGINS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AuthServiceError, auth_service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
    app.include_router(api_router, prefix=settings.API_PREFIX)

    @app.get("/")
    def root() -> dict[str, str]:
        """Root route; minimal payload for discovery."""
        return {"message": "FleetOps API"}

    logger.info(
        "FleetOps API configured: env=%s prefix=%s token_lifetime_min=%s",
        settings.APP_ENV,
        settings.API_PREFIX or "/",
        settings.JWT_EXPIRE_MINUTES,
    )
    return app
