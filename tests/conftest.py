"""Pytest configuration and fixtures."""

import os
import tempfile

# Config reads the environment on import
_scratch = tempfile.mkdtemp(prefix="progress_tracker_tests_")
os.environ["AI_PROVIDER"] = "mistral"
os.environ["MISTRAL_API_KEY"] = "test-mistral-key"
os.environ["OPENAI_API_KEY"] = "test-openai-key"
os.environ["MONGO_URI"] = "mongodb://localhost:27017/"
os.environ["MONGO_DB"] = "progress_tracker_test"
os.environ["REPORTS_DIR"] = os.path.join(_scratch, "reports")
os.environ["LOGS_DIR"] = os.path.join(_scratch, "logs")
os.environ["SIMILARITY_THRESHOLD_ENABLED"] = "True"

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_bug_repository, get_provider, get_work_entry_repository
from api.main import app
from config import Config
from tests.fakes.fake_provider import FakeProvider
from tests.fakes.fake_store import FakeBugRepository, FakeWorkEntryRepository


@pytest.fixture
def provider():
    return FakeProvider()


@pytest.fixture
def work_repo():
    return FakeWorkEntryRepository()


@pytest.fixture
def bug_repo():
    return FakeBugRepository()


@pytest.fixture
def reports_dir(tmp_path, monkeypatch):
    path = tmp_path / "reports"
    monkeypatch.setattr(Config, "REPORTS_DIR", str(path))
    return path


@pytest.fixture
def client(provider, work_repo, bug_repo, reports_dir):
    """Test client with the provider and repositories replaced by fakes."""
    app.dependency_overrides[get_provider] = lambda: provider
    app.dependency_overrides[get_work_entry_repository] = lambda: work_repo
    app.dependency_overrides[get_bug_repository] = lambda: bug_repo
    yield TestClient(app)
    app.dependency_overrides.clear()
