"""FastAPI dependency injection factories."""

from typing import Annotated

from fastapi import Depends, Request

from food_calorie_api.core.config import Settings, get_settings
from food_calorie_api.services.audit import AuditLogger
from food_calorie_api.services.food_mapping import FoodMappingTable
from food_calorie_api.services.prediction import PredictionClient
from food_calorie_api.services.upload import UploadService


# Type aliases for cleaner route signatures
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_food_mapping(request: Request) -> FoodMappingTable:
    """Get the food mapping table loaded at startup."""
    return request.app.state.food_mapping


def get_prediction_client(request: Request) -> PredictionClient:
    """Get the shared prediction client created at startup."""
    return request.app.state.prediction_client


def get_audit_logger(request: Request) -> AuditLogger:
    """Get the shared audit logger created at startup."""
    return request.app.state.audit_logger


def get_upload_service(
    settings: SettingsDep,
    prediction_client: PredictionClient = Depends(get_prediction_client),
    food_mapping: FoodMappingTable = Depends(get_food_mapping),
) -> UploadService:
    """
    Get UploadService instance.

    Args:
        settings: Application settings
        prediction_client: Injected prediction client
        food_mapping: Injected food mapping table

    Returns:
        UploadService instance
    """
    return UploadService(
        prediction_client=prediction_client,
        food_mapping=food_mapping,
        score_threshold=settings.score_threshold,
    )


# Type aliases for service dependencies
AuditLoggerDep = Annotated[AuditLogger, Depends(get_audit_logger)]
UploadServiceDep = Annotated[UploadService, Depends(get_upload_service)]
