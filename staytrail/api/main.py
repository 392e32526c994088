import logging

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from staytrail.api.routes_health import router as health_router
from staytrail.api.routes_listings import router as listings_router
from staytrail.api.routes_metrics import router as metrics_router
from staytrail.api.routes_reports import router as reports_router
from staytrail.core.config import settings
from staytrail.core.errors import register_error_handlers
from staytrail.core.logger import init_logging
from staytrail.db.base_class import Base
from staytrail.db.session import engine

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    init_logging()

    is_production = settings.ENV.lower() == "prod"
    app = FastAPI(
        title=settings.APP_NAME,
        debug=False,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
        openapi_url=None if is_production else "/openapi.json",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    register_error_handlers(app)
    app.include_router(reports_router)
    app.include_router(listings_router)
    app.include_router(metrics_router, tags=["metrics"])
    app.include_router(health_router)

    @app.on_event("startup")
    async def create_schema():
        # Production schemas are managed outside the app
        if not is_production:
            import staytrail.models.models  # noqa: F401 - register tables

            Base.metadata.create_all(bind=engine)
            logger.info("Database schema ensured for env=%s", settings.ENV)

    return app


app = create_app()
