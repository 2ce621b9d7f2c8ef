"""
Database Layer

MongoDB access for the report endpoints. Wraps a single pymongo client whose
driver-side connection pool is shared by every request, and exposes the
database and collection handles the report service queries.
"""

import logging
import threading
from typing import Any, Dict, Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from .config import config, DatabaseConfig


class MongoManager:
    """
    Owns the MongoClient for the application.
    The client is created on first use so that importing the app never opens
    a connection.
    """

    def __init__(self, db_config: Optional[DatabaseConfig] = None):
        self.db_config = db_config or config.database
        self._client: Optional[MongoClient] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def client(self) -> MongoClient:
        with self._lock:
            if self._client is None:
                self._client = MongoClient(
                    self.db_config.uri,
                    serverSelectionTimeoutMS=self.db_config.server_selection_timeout_ms,
                    connectTimeoutMS=self.db_config.connect_timeout_ms,
                    maxPoolSize=self.db_config.max_pool_size,
                )
                self.logger.info(f"MongoDB client created for database '{self.db_config.database}'")
            return self._client

    def get_database(self) -> Database:
        """Get the configured database handle"""
        return self.client[self.db_config.database]

    def get_collection(self, name: str) -> Collection:
        """Get a collection from the configured database"""
        return self.get_database()[name]

    def ping(self) -> bool:
        """Check that the server is reachable"""
        try:
            self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            self.logger.warning(f"MongoDB ping failed: {e}")
            return False

    def get_pool_stats(self) -> Dict[str, Any]:
        """Connection settings for monitoring"""
        return {
            'database': self.db_config.database,
            'max_pool_size': self.db_config.max_pool_size,
            'connected': self._client is not None
        }

    def close(self):
        """Close the client and release pooled connections"""
        with self._lock:
            if self._client is not None:
                try:
                    self._client.close()
                    self.logger.info("MongoDB client closed - all connections released")
                except Exception as e:
                    self.logger.error(f"Error closing MongoDB client: {e}", exc_info=True)
                finally:
                    self._client = None


_db_manager: Optional[MongoManager] = None


def get_database_manager() -> MongoManager:
    """Get the global database manager instance"""
    global _db_manager
    if _db_manager is None:
        _db_manager = MongoManager()
    return _db_manager
