"""ASGI entry point: `uvicorn showplan.main:app`."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from showplan.api.v1 import api_router
from showplan.core.config import Settings, get_settings
from showplan.core.exception_handlers import register_exception_handlers
from showplan.core.lifespan import create_lifespan
from showplan.core.limiter import limiter
from showplan.middleware import RequestIDMiddleware

API_PREFIX = "/api/v1"


def _cors_origins(settings: Settings) -> list[str]:
    return [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]


def create_app() -> FastAPI:
    """Assemble the planning API. Settings are read here, not at import."""
    settings = get_settings()
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=create_lifespan,
    )
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    register_exception_handlers(app)

    # Added last = outermost: CORS and error responses also carry the request id.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cors_origins(settings),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
        expose_headers=[settings.request_id_header],
    )
    app.add_middleware(RequestIDMiddleware, header_name=settings.request_id_header)

    app.include_router(api_router, prefix=API_PREFIX)
    return app


app = create_app()
