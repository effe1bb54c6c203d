"""Database module - MongoDB connection and repositories."""

from .mongo import MongoDB
from .repositories import AccessLogRepository

__all__ = ["AccessLogRepository", "MongoDB"]
