"""Base repository class with common database operations."""

from datetime import UTC, datetime
from typing import Any

from motor.motor_asyncio import AsyncIOMotorCollection


class BaseRepository:
    """Base repository providing common write operations."""

    def __init__(self, collection: AsyncIOMotorCollection):
        """
        Initialize repository with a MongoDB collection.

        Args:
            collection: Motor collection instance
        """
        self.collection = collection

    async def insert_one(self, document: dict[str, Any]) -> str:
        """
        Insert a single document.

        Args:
            document: Document to insert

        Returns:
            Inserted document ID as string
        """
        if "created_at" not in document:
            document["created_at"] = datetime.now(UTC)

        result = await self.collection.insert_one(document)
        return str(result.inserted_id)
