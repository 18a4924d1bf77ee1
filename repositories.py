"""
Repository layer for document store operations
Provides query, aggregate, distinct and create operations per collection
"""

import logging
import time
from typing import Any, Dict, List, Optional

from database import MongoConnection

logger = logging.getLogger(__name__)


class BaseRepository:
    """Base repository bound to one collection"""

    collection_name: str = ""

    def __init__(self, db: MongoConnection):
        self.db = db

    async def _collection(self):
        await self.db.ensure_connected()
        return self.db.collection(self.collection_name)


class ContentRepository(BaseRepository):
    """
    Generic content repository over a document collection.

    Handlers only ever talk to this interface (find, aggregate, distinct,
    create), never to the driver directly.
    """

    def __init__(self, db: MongoConnection, collection_name: str):
        super().__init__(db)
        self.collection_name = collection_name

    async def find_one(self, filter: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        collection = await self._collection()
        return await collection.find_one(filter)

    async def find(
        self,
        filter: Dict[str, Any],
        sort: Optional[List[tuple]] = None,
        limit: int = 0,
    ) -> List[Dict[str, Any]]:
        collection = await self._collection()
        cursor = collection.find(filter)
        if sort:
            cursor = cursor.sort(sort)
        if limit:
            cursor = cursor.limit(limit)
        return await cursor.to_list()

    async def aggregate(self, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        collection = await self._collection()
        started = time.perf_counter()
        cursor = await collection.aggregate(pipeline)
        documents = await cursor.to_list()
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"Aggregation on {self.collection_name} completed in {elapsed_ms:.0f}ms, "
            f"{len(documents)} document(s)"
        )
        return documents

    async def distinct(self, key: str, filter: Optional[Dict[str, Any]] = None) -> List[Any]:
        collection = await self._collection()
        return await collection.distinct(key, filter or {})

    async def create(self, document: Dict[str, Any]) -> Any:
        """Insert one document and return its generated _id"""
        collection = await self._collection()
        result = await collection.insert_one(document)
        return result.inserted_id
