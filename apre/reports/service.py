"""
Report Service (Data Access Layer)

Data access layer for report queries. Runs aggregation pipelines and simple
reads against the MongoDB collections and returns plain, JSON-ready lists.
"""

from typing import List, Dict, Any

from bson import ObjectId


class ReportService:
    """Base service for executing report queries"""

    def __init__(self, db_manager):
        self.db_manager = db_manager

    def get_collection(self, name: str):
        """Get a collection handle from the database manager"""
        return self.db_manager.get_collection(name)

    def aggregate(self, collection: str, pipeline: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Run an aggregation pipeline and return the result documents.

        Args:
            collection: Collection name
            pipeline: Aggregation stages

        Returns:
            List of result documents
        """
        cursor = self.get_collection(collection).aggregate(pipeline)
        return [self.serialize_document(doc) for doc in cursor]

    def distinct(self, collection: str, field: str) -> List[Any]:
        """Distinct values of a field across a collection"""
        return list(self.get_collection(collection).distinct(field))

    def find_all(self, collection: str) -> List[Dict[str, Any]]:
        """Every document of a collection, unfiltered"""
        cursor = self.get_collection(collection).find({})
        return [self.serialize_document(doc) for doc in cursor]

    @staticmethod
    def serialize_document(doc: Dict[str, Any]) -> Dict[str, Any]:
        """
        Make a document JSON-safe.

        ObjectId values (top level and nested) are rendered as strings.
        """
        def convert(value):
            if isinstance(value, ObjectId):
                return str(value)
            if isinstance(value, dict):
                return {k: convert(v) for k, v in value.items()}
            if isinstance(value, list):
                return [convert(v) for v in value]
            return value

        return convert(doc)
