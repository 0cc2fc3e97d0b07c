"""Main FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from api.exception_handlers import setup_exception_handlers
from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware
from api.middleware.security import SecurityHeadersMiddleware
from api.v1 import router as v1_router
from api.routes.health import router as health_router
from core.config import settings
from core.logging import setup_logging
from core.rate_limit import READ_LIMIT, WRITE_LIMIT, limiter, rate_limit_exceeded_handler
from infrastructure.database.session import check_connection, engine

logger = structlog.get_logger()

setup_logging()

DESCRIPTION = f"""\
## Developer Social Network

Developers publish a profile, share posts and discuss them.

- **Profiles**: skills, social links, experience and education
- **Posts**: likes and comments
- **GitHub**: a developer's public repositories

### Authentication
Registration and login return a token. Protected endpoints expect it in
the `x-auth-token` header.

### Rate Limits
- Reads: {READ_LIMIT}
- Writes: {WRITE_LIMIT}
"""

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness checks"},
    {"name": "users", "description": "Registration"},
    {"name": "auth", "description": "Login and current user"},
    {"name": "profile", "description": "Developer profiles, experience and education"},
    {"name": "posts", "description": "Posts, likes and comments"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Refuse to start without a database; dispose the pool on shutdown."""
    try:
        await check_connection()
    except Exception:
        logger.exception("database_connection_failed")
        raise SystemExit(1)
    logger.info("database_connected", environment=settings.app_env)

    yield

    await engine.dispose()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        lifespan=lifespan,
        default_response_class=ORJSONResponse,
        title=settings.app_name,
        description=DESCRIPTION,
        version=settings.app_version,
        debug=settings.debug,
        openapi_tags=OPENAPI_TAGS,
    )

    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)
    app.add_middleware(SlowAPIMiddleware)

    # Last added runs outermost
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(v1_router, prefix="/api")

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=not settings.is_production,
    )
