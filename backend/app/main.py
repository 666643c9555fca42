"""FastAPI application factory and main entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.core.app_exceptions import QuestionSyncError
from app.core.config import settings
from app.core.errors import general_exception_handler, question_error_handler
from app.core.logging import get_logger, setup_logging
from app.core.redis_client import init_redis, is_redis_available
from app.db.base import Base
from app.db.engine import engine
from app import models  # noqa: F401  (register tables on Base.metadata)
from app.search.es_client import ping as es_ping
from app.system.health import HealthChecker, get_backend_health

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    init_redis()
    if settings.ENV == "dev":
        Base.metadata.create_all(bind=engine)

    checker = HealthChecker(get_backend_health(), is_redis_available, es_ping)
    checker.check_once()
    checker.start()
    app.state.health_checker = checker
    logger.info("startup_complete", extra={"event": "startup_complete", "env": settings.ENV})
    yield
    checker.stop()


def create_app() -> FastAPI:
    """Create and configure FastAPI application."""
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="Question content sync service",
        openapi_url="/openapi.json" if settings.ENV != "prod" else None,
        docs_url="/docs" if settings.ENV != "prod" else None,
        redoc_url=None,
        lifespan=lifespan,
    )

    app.add_exception_handler(QuestionSyncError, question_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    @app.get("/health", tags=["Health"])
    async def health():
        """Current cache/search usability as seen by the sync layer."""
        snapshot = get_backend_health().snapshot()
        return {
            "status": "ok" if all(snapshot.values()) else "degraded",
            "cache_usable": snapshot["cache"],
            "search_usable": snapshot["search"],
            "cache_enabled": settings.REDIS_ENABLED,
            "search_enabled": settings.ELASTICSEARCH_ENABLED,
        }

    return app


app = create_app()
