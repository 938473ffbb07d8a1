"""
Shared fixtures: an in-memory document store with the same interface as
MongoDocumentStore, and an application wired to it.
"""

import copy

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from mflix_api.core.config import Settings
from mflix_api.core.database import DeleteOutcome, UpdateOutcome
from mflix_api.main import create_app


class InMemoryDocumentStore:
    """Dict-backed stand-in for MongoDocumentStore supporting equality filters."""

    def __init__(self):
        self.collections = {}
        self.closed = False

    def _docs(self, collection):
        return self.collections.setdefault(collection, [])

    @staticmethod
    def _matches(document, query):
        return all(document.get(key) == value for key, value in (query or {}).items())

    def find_one(self, collection, query):
        for document in self._docs(collection):
            if self._matches(document, query):
                return copy.deepcopy(document)
        return None

    def find_many(self, collection, query=None):
        return [copy.deepcopy(d) for d in self._docs(collection) if self._matches(d, query)]

    def insert_one(self, collection, document):
        created = copy.deepcopy(document)
        created.setdefault("_id", ObjectId())
        self._docs(collection).append(created)
        return copy.deepcopy(created)

    def update_one(self, collection, query, fields):
        for document in self._docs(collection):
            if self._matches(document, query):
                changed = any(document.get(k) != v for k, v in fields.items())
                document.update(copy.deepcopy(fields))
                return UpdateOutcome(matched_count=1, modified_count=1 if changed else 0)
        return UpdateOutcome(matched_count=0, modified_count=0)

    def delete_one(self, collection, query):
        docs = self._docs(collection)
        for i, document in enumerate(docs):
            if self._matches(document, query):
                del docs[i]
                return DeleteOutcome(deleted_count=1)
        return DeleteOutcome(deleted_count=0)

    def close(self):
        self.closed = True


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def settings():
    return Settings(MONGODB_URI="mongodb://unused:27017", MONGODB_DB_NAME="sample_mflix_test")


@pytest.fixture
def client(store, settings):
    app = create_app(settings=settings, store=store)
    return TestClient(app)


@pytest.fixture
def movie(store):
    """A movie already present in the store."""
    return store.insert_one("movies", {
        "title": "The Great Train Robbery",
        "year": 1903,
        "runtime": 11,
        "genres": ["Short", "Western"],
        "imdb": {"rating": 7.4, "votes": 9847, "id": 439},
    })


@pytest.fixture
def comment(store, movie):
    """A comment attached to the movie fixture."""
    return store.insert_one("comments", {
        "name": "Ann",
        "email": "a@x.com",
        "text": "Great film",
        "date": "2024-01-01T00:00:00Z",
        "movie_id": movie["_id"],
    })
