"""
================================================================================
APRE Reports - Database Manager Unit Tests
================================================================================
Description:
    Unit tests for MongoManager with the pymongo client patched out.
================================================================================
"""
import pytest
from unittest.mock import MagicMock, patch
from pymongo.errors import ServerSelectionTimeoutError

from apre.config import DatabaseConfig
from apre.database import MongoManager


@pytest.fixture
def db_config():
    return DatabaseConfig(uri='mongodb://test:27017', database='apre_test', max_pool_size=5)


class TestMongoManager:
    """Test suite for MongoManager"""

    @patch('apre.database.MongoClient')
    def test_client_created_lazily(self, mock_client_class, db_config):
        manager = MongoManager(db_config)
        mock_client_class.assert_not_called()

        manager.client
        manager.client

        mock_client_class.assert_called_once_with(
            'mongodb://test:27017',
            serverSelectionTimeoutMS=db_config.server_selection_timeout_ms,
            connectTimeoutMS=db_config.connect_timeout_ms,
            maxPoolSize=5
        )

    @patch('apre.database.MongoClient')
    def test_get_collection(self, mock_client_class, db_config):
        mock_client = MagicMock()
        mock_client_class.return_value = mock_client

        manager = MongoManager(db_config)
        collection = manager.get_collection('sales')

        mock_client.__getitem__.assert_called_once_with('apre_test')
        mock_client.__getitem__.return_value.__getitem__.assert_called_once_with('sales')
        assert collection is mock_client.__getitem__.return_value.__getitem__.return_value

    @patch('apre.database.MongoClient')
    def test_ping_success(self, mock_client_class, db_config):
        manager = MongoManager(db_config)

        assert manager.ping() is True
        mock_client_class.return_value.admin.command.assert_called_once_with('ping')

    @patch('apre.database.MongoClient')
    def test_ping_failure(self, mock_client_class, db_config):
        mock_client_class.return_value.admin.command.side_effect = ServerSelectionTimeoutError("timed out")

        assert MongoManager(db_config).ping() is False

    @patch('apre.database.MongoClient')
    def test_close_releases_client(self, mock_client_class, db_config):
        manager = MongoManager(db_config)
        manager.client

        manager.close()

        mock_client_class.return_value.close.assert_called_once()
        assert manager.get_pool_stats()['connected'] is False

    def test_close_without_client(self, db_config):
        MongoManager(db_config).close()
