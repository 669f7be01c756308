"""
FastAPI dependencies: provider, repositories and search engine.

Each is built once per process and can be replaced through
``app.dependency_overrides``.
"""

from functools import lru_cache

from fastapi import Depends, HTTPException
from pymongo.database import Database

from config import Config
from RAG.similarity_search import SimilaritySearchEngine
from services.ai_provider import AIProvider
from services.mongo_store import BugRepository, WorkEntryRepository
from services.providers import create_provider
from utils.mongo_helper import get_mongo_database


@lru_cache(maxsize=1)
def get_provider() -> AIProvider:
    return create_provider(Config)


@lru_cache(maxsize=1)
def _connect() -> Database:
    database = get_mongo_database()
    if database is None:
        # Not cached: lru_cache does not store raised exceptions
        raise HTTPException(status_code=503, detail="Database unavailable")
    return database


def get_database() -> Database:
    return _connect()


@lru_cache(maxsize=1)
def _work_entries(database: Database) -> WorkEntryRepository:
    return WorkEntryRepository(database[Config.MONGO_WORK_ENTRIES_COLLECTION])


@lru_cache(maxsize=1)
def _bugs(database: Database) -> BugRepository:
    return BugRepository(database[Config.MONGO_BUGS_COLLECTION])


def get_work_entry_repository(database: Database = Depends(get_database)) -> WorkEntryRepository:
    return _work_entries(database)


def get_bug_repository(database: Database = Depends(get_database)) -> BugRepository:
    return _bugs(database)


def get_search_engine(provider: AIProvider = Depends(get_provider)) -> SimilaritySearchEngine:
    return SimilaritySearchEngine(provider, **Config.get_search_config())
