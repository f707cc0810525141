import copy
from types import SimpleNamespace

import bson
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from database.store import DocumentStore
from main import create_app


def _matches(doc, query):
    return all(doc.get(key) == value for key, value in query.items())


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    async def to_list(self, length=None):
        return [copy.deepcopy(doc) for doc in self.docs[:length]]


class FakeCollection:
    """In-memory collection exposing the motor calls DocumentStore makes.

    Writes are BSON-encoded first so encoding errors surface as they would
    from pymongo.
    """

    def __init__(self):
        self.docs = []

    def find(self, query=None):
        return FakeCursor([doc for doc in self.docs if _matches(doc, query or {})])

    async def find_one(self, query):
        for doc in self.docs:
            if _matches(doc, query):
                return copy.deepcopy(doc)
        return None

    async def insert_one(self, document):
        document.setdefault("_id", ObjectId())
        bson.encode(document)
        self.docs.append(copy.deepcopy(document))
        return SimpleNamespace(inserted_id=document["_id"])

    async def update_one(self, query, update):
        bson.encode(update)
        for doc in self.docs:
            if _matches(doc, query):
                changes = update["$set"]
                modified = any(doc.get(k, object()) != v for k, v in changes.items())
                doc.update(changes)
                return SimpleNamespace(matched_count=1, modified_count=int(modified))
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query):
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)


class FakeDatabase:
    name = "rideHailingApp"

    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        return self.collections.setdefault(name, FakeCollection())

    async def command(self, name):
        return {"ok": 1.0}


class DownCollection:
    """Every call fails the way motor does when the server is unreachable."""

    def _fail(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    find = _fail

    async def find_one(self, *args, **kwargs):
        self._fail()

    async def insert_one(self, *args, **kwargs):
        self._fail()

    async def update_one(self, *args, **kwargs):
        self._fail()

    async def delete_one(self, *args, **kwargs):
        self._fail()


class DownDatabase:
    name = "rideHailingApp"

    def __getitem__(self, name):
        return DownCollection()

    async def command(self, name):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")


@pytest.fixture
def db():
    return FakeDatabase()


@pytest.fixture
def client(db):
    return TestClient(create_app(store=DocumentStore(db)))


@pytest.fixture
def down_client():
    return TestClient(create_app(store=DocumentStore(DownDatabase())))


@pytest.fixture
def unknown_id():
    return str(ObjectId())
