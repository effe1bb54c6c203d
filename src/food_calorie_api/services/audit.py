"""Upload audit logging."""

import logging

from food_calorie_api.db.repositories.access_log import AccessLogRepository
from food_calorie_api.models.audit import AuditLogEntry

logger = logging.getLogger(__name__)


class AuditLogger:
    """
    Writes one access log record per upload.

    Writes are fire-and-forget: failures are logged and swallowed so
    they never reach the request that produced the entry.
    """

    def __init__(self, repository: AccessLogRepository):
        self._repository = repository

    async def record(self, entry: AuditLogEntry) -> None:
        """
        Persist an audit entry.

        Args:
            entry: Completed audit entry
        """
        try:
            log_id = await self._repository.create_entry(entry)
        except Exception as e:
            logger.error(f"ERROR in logging: {e}")
            return

        logger.info(f"Log {log_id} created successfully.")
