"""Business logic services."""

from .audit import AuditLogger
from .detail_resolver import resolve
from .food_mapping import FoodMappingTable
from .prediction import PredictionClient
from .upload import UploadService

__all__ = [
    "AuditLogger",
    "FoodMappingTable",
    "PredictionClient",
    "UploadService",
    "resolve",
]
