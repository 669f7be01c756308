# services/mongo_store.py
"""
MongoDB repositories for work entries and bugs.
"""

import re
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING, ReturnDocument, TEXT
from pymongo.collection import Collection

from utils.logger import get_logger
from utils.mongo_helper import serialize_document, to_object_id

logger = get_logger("MongoStore")


def date_range_filter(start_date: Optional[datetime], end_date: Optional[datetime]) -> Dict[str, Any]:
    if not start_date and not end_date:
        return {}
    bounds = {}
    if start_date:
        bounds["$gte"] = start_date
    if end_date:
        bounds["$lte"] = end_date
    return {"date": bounds}


class MongoRepository:
    """CRUD over a single collection, returning plain dicts with a string ``id``."""

    def __init__(self, collection: Collection):
        self.collection = collection
        logger.info(f"Repository ready: {collection.name}")

    def ensure_indexes(self):
        pass

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        now = datetime.utcnow()
        document = {**data, "created_at": now, "updated_at": now}
        result = self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.debug(f"Document inserted into {self.collection.name} with ID: {result.inserted_id}")
        return serialize_document(document)

    def get(self, item_id: str) -> Optional[Dict[str, Any]]:
        oid = to_object_id(item_id)
        if oid is None:
            return None
        return serialize_document(self.collection.find_one({"_id": oid}))

    def update(self, item_id: str, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        oid = to_object_id(item_id)
        if oid is None:
            return None
        updated = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": {**data, "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        return serialize_document(updated)

    def delete(self, item_id: str) -> bool:
        oid = to_object_id(item_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count == 1

    def _find(self, query: Dict[str, Any], sort_field: str, direction: int) -> List[Dict[str, Any]]:
        cursor = self.collection.find(query).sort(sort_field, direction)
        return [serialize_document(doc) for doc in cursor]


class WorkEntryRepository(MongoRepository):

    def ensure_indexes(self):
        self.collection.create_index([("date", DESCENDING)])
        self.collection.create_index([("extracted_skills.name", ASCENDING)])
        self.collection.create_index([("technologies", ASCENDING)])

    def list(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        technology: Optional[str] = None,
        skill: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        query = date_range_filter(start_date, end_date)
        if technology:
            query["technologies"] = technology
        if skill:
            query["extracted_skills.name"] = {"$regex": re.escape(skill), "$options": "i"}
        return self._find(query, "date", DESCENDING)

    def list_processed(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> List[Dict[str, Any]]:
        """AI-processed entries in the range, oldest first."""
        query = {**date_range_filter(start_date, end_date), "ai_processed": True}
        return self._find(query, "date", ASCENDING)


class BugRepository(MongoRepository):

    def ensure_indexes(self):
        self.collection.create_index(
            [("title", TEXT), ("description", TEXT), ("solution", TEXT)]
        )
        self.collection.create_index([("tags", ASCENDING)])
        self.collection.create_index([("category", ASCENDING)])

    def list(
        self,
        severity: Optional[str] = None,
        category: Optional[str] = None,
        tag: Optional[str] = None,
        search: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        query: Dict[str, Any] = {}
        if severity:
            query["severity"] = severity
        if category:
            query["category"] = category
        if tag:
            query["tags"] = tag
        if search:
            query["$text"] = {"$search": search}
        return self._find(query, "resolved_date", DESCENDING)

    def list_all(self) -> List[Dict[str, Any]]:
        return self._find({}, "resolved_date", DESCENDING)

    def list_with_embeddings(self) -> List[Dict[str, Any]]:
        """Bugs with a stored embedding, in insertion order."""
        return self._find({"embedding": {"$exists": True, "$ne": []}}, "_id", ASCENDING)
