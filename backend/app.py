"""FastAPI application entry point for the radio station API."""

import logging
import sys

import httpx
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import Settings, settings
from errors import register_error_handlers
from services.auth import TokenVerifier
from services.azuracast import AzuraCastClient
from services.cache import TTLCache
from services.station import StationService

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def build_station_service(
    app_settings: Settings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> StationService:
    """Wire the process-wide cache and AzuraCast client into one service."""
    cache = TTLCache(default_ttl_seconds=app_settings.cache_ttl_seconds)
    client = AzuraCastClient(
        base_url=app_settings.azuracast_base_url,
        api_key=app_settings.azuracast_api_key,
        timeout=app_settings.upstream_timeout_seconds,
        transport=transport,
    )
    return StationService(cache, client, ttl_seconds=app_settings.cache_ttl_seconds)


def create_app(
    app_settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    app_settings = app_settings or settings
    app = FastAPI(title="Radio Station API", version="1.0.0")

    app.state.settings = app_settings
    app.state.station_service = build_station_service(app_settings, transport)
    app.state.token_verifier = TokenVerifier(app_settings.jwt_secret, issuer=app_settings.jwt_issuer)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Request logging + security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if app_settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        logger.info("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.admin import router as admin_router
    from routes.health import router as health_router
    from routes.station import router as station_router

    app.include_router(health_router)
    app.include_router(station_router)
    app.include_router(admin_router)

    @app.on_event("startup")
    async def _validate_config() -> None:
        missing = app_settings.validate()
        if missing:
            logger.warning("Missing env vars (song requests will be rejected): %s", ", ".join(missing))
        logger.info(
            "Proxying AzuraCast station %s at %s (cache TTL %ss)",
            app_settings.azuracast_station_id,
            app_settings.azuracast_base_url,
            app_settings.cache_ttl_seconds,
        )

    @app.on_event("shutdown")
    async def _close_upstream() -> None:
        await app.state.station_service.client.aclose()

    return app


app = create_app()
