"""MongoDB connection management using Motor async driver."""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase


class MongoDB:
    """
    MongoDB connection manager.

    Holds the single client used for audit log writes. The client
    connects lazily, so startup does not wait for the server.
    """

    client: AsyncIOMotorClient | None = None
    _db_name: str = "food_calorie_db"

    @classmethod
    def connect(cls, uri: str, db_name: str = "food_calorie_db") -> None:
        """
        Initialize MongoDB connection.

        Args:
            uri: MongoDB connection URI
            db_name: Database name to use
        """
        cls.client = AsyncIOMotorClient(uri)
        cls._db_name = db_name

    @classmethod
    def close(cls) -> None:
        """Close MongoDB connection."""
        if cls.client is not None:
            cls.client.close()
            cls.client = None

    @classmethod
    def get_database(cls) -> AsyncIOMotorDatabase:
        """
        Get the configured database.

        Raises:
            RuntimeError: If MongoDB is not connected
        """
        if cls.client is None:
            raise RuntimeError("MongoDB not connected. Call MongoDB.connect() first.")
        return cls.client[cls._db_name]

    @classmethod
    def is_connected(cls) -> bool:
        """Check if MongoDB is connected."""
        return cls.client is not None
