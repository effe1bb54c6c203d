"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from food_calorie_api.api.routes import upload
from food_calorie_api.core.config import Settings, get_settings
from food_calorie_api.core.exceptions import APIError, ConfigurationError
from food_calorie_api.db.mongo import MongoDB
from food_calorie_api.db.repositories.access_log import AccessLogRepository
from food_calorie_api.services.audit import AuditLogger
from food_calorie_api.services.food_mapping import FoodMappingTable
from food_calorie_api.services.prediction import PredictionClient

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Builds the shared services on startup and releases them on shutdown.
    Missing configuration or a bad mapping file aborts startup.
    """
    settings = get_settings()

    missing = settings.missing_prediction_settings()
    if missing:
        raise ConfigurationError(
            f"Missing prediction settings: {', '.join(missing)}",
            details={"missing": missing},
        )

    app.state.food_mapping = FoodMappingTable.load(settings.food_mapping_path)

    MongoDB.connect(settings.mongo_uri, settings.db_name)
    logger.info(f"Audit log store configured at {settings.mongo_uri[:20]}...")

    app.state.prediction_client = PredictionClient.from_settings(settings)
    app.state.audit_logger = AuditLogger(
        AccessLogRepository.from_database(MongoDB.get_database())
    )

    logger.info(f"App {settings.app_name} listening on port {settings.port}")

    yield

    logger.info("Shutting down...")
    await app.state.prediction_client.close()
    MongoDB.close()


def mount_static(app: FastAPI, settings: Settings) -> None:
    """Serve static assets from settings.static_dir at the site root."""
    static_dir = Path(settings.static_dir)
    if not static_dir.is_dir():
        logger.warning(f"Static directory '{static_dir}' not found, not serving static files")
        return
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        version=settings.api_version,
        description="Identify food in a photo and report calories and a recommendation",
        lifespan=lifespan,
    )

    # Exception handlers
    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError):
        """Handle custom API errors."""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": exc.message,
                "details": exc.details,
            },
        )

    # Health check endpoint
    @app.get("/health")
    async def health_check(request: Request):
        """Health check endpoint."""
        food_mapping = getattr(request.app.state, "food_mapping", None)
        prediction_client = getattr(request.app.state, "prediction_client", None)
        prediction_ok = (
            await prediction_client.health_check() if prediction_client is not None else False
        )
        return {
            "status": "healthy",
            "service": settings.app_name,
            "version": settings.api_version,
            "mongodb": MongoDB.is_connected(),
            "prediction_service": prediction_ok,
            "food_mapping_loaded": food_mapping is not None,
            "food_mapping_entries": len(food_mapping) if food_mapping is not None else 0,
        }

    app.include_router(upload.router, prefix="/upload", tags=["Upload"])

    # Mounted last so API routes take precedence over static files
    mount_static(app, settings)

    return app


# Create app instance
app = create_app()


def run() -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
