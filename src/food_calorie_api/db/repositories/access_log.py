"""Repository for the access_log collection (one record per upload)."""

from motor.motor_asyncio import AsyncIOMotorCollection, AsyncIOMotorDatabase

from food_calorie_api.models.audit import AuditLogEntry

from .base import BaseRepository


class AccessLogRepository(BaseRepository):
    """
    Append-only store for upload audit records.

    Records are never updated or read back by the service.
    """

    COLLECTION_NAME = "access_log"

    def __init__(self, collection: AsyncIOMotorCollection):
        super().__init__(collection)

    @classmethod
    def from_database(cls, db: AsyncIOMotorDatabase) -> "AccessLogRepository":
        """Create a repository bound to the access_log collection."""
        return cls(db[cls.COLLECTION_NAME])

    async def create_entry(self, entry: AuditLogEntry) -> str:
        """
        Insert an audit entry.

        Args:
            entry: Completed audit entry

        Returns:
            Inserted document ID
        """
        return await self.insert_one(entry.to_document())
