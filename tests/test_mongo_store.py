"""Repository query construction against a mocked pymongo collection."""

from datetime import datetime
from unittest.mock import MagicMock

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING

from services.mongo_store import BugRepository, WorkEntryRepository, date_range_filter
from utils.mongo_helper import serialize_document, to_object_id


def mock_collection(documents=()):
    collection = MagicMock()
    collection.name = "test"
    collection.find.return_value.sort.return_value = list(documents)
    return collection


def test_date_range_filter():
    start, end = datetime(2024, 1, 1), datetime(2024, 1, 31)

    assert date_range_filter(None, None) == {}
    assert date_range_filter(start, None) == {"date": {"$gte": start}}
    assert date_range_filter(start, end) == {"date": {"$gte": start, "$lte": end}}


def test_to_object_id():
    oid = ObjectId()
    assert to_object_id(str(oid)) == oid
    assert to_object_id("not-an-id") is None
    assert to_object_id(None) is None
    assert to_object_id(12345) is None
    assert to_object_id("") is None


def test_serialize_document():
    oid = ObjectId()
    assert serialize_document({"_id": oid, "title": "x"}) == {"id": str(oid), "title": "x"}
    assert serialize_document(None) is None


def test_create_sets_timestamps_and_id():
    collection = mock_collection()
    oid = ObjectId()
    collection.insert_one.return_value.inserted_id = oid

    created = BugRepository(collection).create({"title": "Bug"})

    assert created["id"] == str(oid)
    assert created["created_at"] == created["updated_at"]
    assert "_id" not in created


def test_invalid_id_is_not_found():
    collection = mock_collection()
    repo = WorkEntryRepository(collection)

    assert repo.get("nope") is None
    assert repo.update("nope", {"title": "x"}) is None
    assert repo.delete("nope") is False
    collection.find_one.assert_not_called()


def test_work_entry_list_query():
    collection = mock_collection([{"_id": ObjectId(), "title": "a"}])

    entries = WorkEntryRepository(collection).list(technology="React", skill="c++")

    collection.find.assert_called_once_with({
        "technologies": "React",
        "extracted_skills.name": {"$regex": r"c\+\+", "$options": "i"},
    })
    collection.find.return_value.sort.assert_called_once_with("date", DESCENDING)
    assert entries[0]["title"] == "a"


def test_list_processed_is_oldest_first():
    collection = mock_collection()

    WorkEntryRepository(collection).list_processed(datetime(2024, 1, 1), datetime(2024, 2, 1))

    query = collection.find.call_args.args[0]
    assert query["ai_processed"] is True
    assert set(query["date"]) == {"$gte", "$lte"}
    collection.find.return_value.sort.assert_called_once_with("date", ASCENDING)


def test_bug_list_full_text_search():
    collection = mock_collection()

    BugRepository(collection).list(severity="High", search="cookie")

    collection.find.assert_called_once_with({"severity": "High", "$text": {"$search": "cookie"}})


def test_list_with_embeddings_skips_empty_vectors():
    collection = mock_collection()

    BugRepository(collection).list_with_embeddings()

    collection.find.assert_called_once_with({"embedding": {"$exists": True, "$ne": []}})
    collection.find.return_value.sort.assert_called_once_with("_id", ASCENDING)
