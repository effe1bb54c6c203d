"""Pydantic models."""

from .audit import AuditLogEntry, strip_ip_prefix
from .food import ClassificationResult, FoodDetail, FoodMappingEntry

__all__ = [
    "AuditLogEntry",
    "ClassificationResult",
    "FoodDetail",
    "FoodMappingEntry",
    "strip_ip_prefix",
]
