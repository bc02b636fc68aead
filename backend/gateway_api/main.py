"""FastAPI application."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .error_translator import ErrorTranslator
from .routers import session
from .sessions import SessionAuthority, build_session_authority

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None, session_authority: SessionAuthority | None = None) -> FastAPI:
    """Build the application and register the error translator."""
    settings = settings or get_settings()
    logging.getLogger("gateway_api").setLevel(settings.LOG_LEVEL.upper())

    # Fail closed on wildcard CORS in production.
    if settings.ENV.lower() == "production" and any(origin == "*" for origin in settings.cors_origins):
        raise RuntimeError("ALLOWED_ORIGINS must be explicit in production (no wildcard when using credentials).")

    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Web API for the remote desktop gateway",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.state.session_authority = session_authority or build_session_authority(settings)
    ErrorTranslator(
        app.state.session_authority,
        type_base_url=settings.ERROR_TYPE_BASE_URL,
    ).register(app)

    app.include_router(session.router, prefix="/api/v1")

    @app.get("/api/v1/system/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": settings.APP_VERSION}

    logger.info("app.created env=%s", settings.ENV)
    return app


app = create_app()
