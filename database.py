"""
Database connection management
Async MongoDB access using pymongo's asyncio client
"""

import asyncio
import logging
from typing import Any, Callable, Optional

from pymongo import AsyncMongoClient

from config import DatabaseConfig

logger = logging.getLogger(__name__)


class MongoConnection:
    """
    Process-wide MongoDB handle that connects on first use.

    Every data-touching call goes through ensure_connected(). The first
    caller opens the client under a lock; concurrent callers wait for it and
    then reuse the same handle. There is no explicit teardown on the request
    path; disconnect() exists for the long-running HTTP server.
    """

    def __init__(
        self,
        config: DatabaseConfig,
        client_factory: Callable[..., Any] = AsyncMongoClient,
    ):
        self.config = config
        self.client: Optional[Any] = None
        self.database: Optional[Any] = None
        self._client_factory = client_factory
        self._lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self.database is not None

    async def ensure_connected(self):
        """Return the database handle, connecting if this is the first call"""
        if self.database is not None:
            return self.database

        async with self._lock:
            if self.database is None:
                await self.connect()

        return self.database

    async def connect(self):
        """Open the client and verify the server is reachable"""
        if self.database is not None:
            logger.warning("MongoDB client already initialized")
            return

        client = self._client_factory(
            self.config.uri,
            serverSelectionTimeoutMS=self.config.server_selection_timeout_ms,
            appname=self.config.app_name,
        )
        try:
            await client.admin.command("ping")
        except Exception as e:
            logger.error(f"❌ Failed to connect to MongoDB: {e}")
            await client.close()
            raise

        self.client = client
        self.database = client.get_database(self.config.database)
        logger.info(f"✅ Connected to MongoDB database '{self.config.database}'")

    async def disconnect(self):
        """Close the client"""
        if self.client is not None:
            await self.client.close()
            self.client = None
            self.database = None
            logger.info("MongoDB client closed")

    def collection(self, name: str):
        """Get a collection from the connected database"""
        if self.database is None:
            raise RuntimeError("Database not connected. Call ensure_connected() first.")
        return self.database[name]

    async def check_connection(self) -> bool:
        """Ping the server; used by the health endpoint"""
        try:
            database = await self.ensure_connected()
            await database.command("ping")
            return True
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False
