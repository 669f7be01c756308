"""
MongoDB connection helper with proper SSL/TLS configuration for MongoDB Atlas.
"""

from typing import Optional

import certifi
from bson import ObjectId
from pymongo import MongoClient
from pymongo.database import Database

from config import Config
from utils.logger import get_logger

logger = get_logger("MongoHelper")


def get_mongo_client(uri: str = None, timeout_ms: int = 30000) -> Optional[MongoClient]:
    """
    Create a MongoDB client, using certifi's CA bundle for Atlas URIs.

    Args:
        uri: MongoDB connection URI. If None, uses Config.MONGO_URI.
        timeout_ms: Server selection timeout in milliseconds.

    Returns:
        MongoClient instance or None if connection fails.
    """
    uri = uri or Config.MONGO_URI

    if not uri:
        logger.warning("MONGO_URI not provided or not set in environment")
        return None

    is_atlas = uri.startswith("mongodb+srv://")

    try:
        if is_atlas:
            client = MongoClient(
                uri,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
                socketTimeoutMS=timeout_ms,
                tlsCAFile=certifi.where(),
                retryWrites=True,
                w="majority"
            )
        else:
            client = MongoClient(
                uri,
                serverSelectionTimeoutMS=timeout_ms,
                connectTimeoutMS=timeout_ms,
                socketTimeoutMS=timeout_ms,
            )

        # Test the connection
        client.admin.command('ping')
        logger.info("MongoDB connected successfully")
        return client

    except Exception as e:
        logger.error(f"MongoDB connection failed: {e}")
        return None


def get_mongo_database(db_name: str = None, uri: str = None) -> Optional[Database]:
    """
    Get a MongoDB database handle.

    Args:
        db_name: Database name. If None, uses Config.MONGO_DB.
        uri: MongoDB URI. If None, uses Config.MONGO_URI.

    Returns:
        Database or None if the server is unreachable.
    """
    client = get_mongo_client(uri)
    if client is None:
        return None
    return client[db_name or Config.MONGO_DB]


def to_object_id(value: str) -> Optional[ObjectId]:
    """Parse a string id, returning None for anything that is not an ObjectId."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        return None
    return ObjectId(value)


def serialize_document(document: Optional[dict]) -> Optional[dict]:
    """Replace Mongo's ``_id`` with a string ``id``."""
    if document is None:
        return None
    doc = dict(document)
    doc["id"] = str(doc.pop("_id"))
    return doc
