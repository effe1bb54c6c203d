"""Repository classes for MongoDB collections."""

from .access_log import AccessLogRepository
from .base import BaseRepository

__all__ = ["AccessLogRepository", "BaseRepository"]
