"""
Repository Container - Centralized dependency injection container

Single source of truth for repository initialization, shared by the
HTTP, serverless and stdio transports.
"""

from database import MongoConnection
from repositories import ContentRepository

CONTENT_ITEMS_COLLECTION = "content_items"
FITNESS_PROFILES_COLLECTION = "fitness_profiles"


class RepositoryContainer:
    """Container for repository instances with attribute access."""

    def __init__(self, db: MongoConnection):
        self.db = db
        self.content_items = ContentRepository(db, CONTENT_ITEMS_COLLECTION)
        self.fitness_profiles = ContentRepository(db, FITNESS_PROFILES_COLLECTION)

    async def ensure_connected(self):
        """Connect-if-absent guard run before every data-touching call"""
        await self.db.ensure_connected()
