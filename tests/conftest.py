"""Shared test fixtures for DevConnector backend tests."""

import copy
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo import ReturnDocument

from common.auth import BcryptPasswordHasher, JWTTokenService
from devconnector.config import Settings

TEST_SECRET = "test-secret"


# ─────────────────────────────────────────────────────────────────
# In-memory collection double
# ─────────────────────────────────────────────────────────────────
# Implements the subset of Motor's collection API the services use:
# equality / $in / $lt filters, $set / $unset / $setOnInsert updates,
# dotted paths and simple projections.


def _get_path(doc, path):
    value = doc
    for part in path.split("."):
        if not isinstance(value, dict) or part not in value:
            return None
        value = value[part]
    return value


def _set_path(doc, path, value):
    parts = path.split(".")
    target = doc
    for part in parts[:-1]:
        target = target.setdefault(part, {})
    target[parts[-1]] = value


def _unset_path(doc, path):
    parts = path.split(".")
    target = doc
    for part in parts[:-1]:
        target = target.get(part)
        if not isinstance(target, dict):
            return
    target.pop(parts[-1], None)


def _matches(doc, query):
    for key, condition in (query or {}).items():
        value = _get_path(doc, key)
        if isinstance(condition, dict) and any(k.startswith("$") for k in condition):
            for op, operand in condition.items():
                if op == "$in" and value not in operand:
                    return False
                if op == "$lt" and not (value is not None and value < operand):
                    return False
        elif value != condition:
            return False
    return True


def _project(doc, projection):
    doc = copy.deepcopy(doc)
    if not projection:
        return doc
    fields = {k: v for k, v in projection.items() if k != "_id"}
    if fields and not any(fields.values()):
        for key in fields:
            _unset_path(doc, key)
        return doc
    projected = {"_id": doc["_id"]} if projection.get("_id", 1) else {}
    for key, include in fields.items():
        if include and key in doc:
            projected[key] = doc[key]
    return projected


class FakeCursor:
    def __init__(self, docs):
        self._docs = docs

    async def to_list(self, length=None):
        return self._docs if length is None else self._docs[:length]


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = []

    def _apply_update(self, doc, update, inserting):
        for path, value in update.get("$set", {}).items():
            _set_path(doc, path, copy.deepcopy(value))
        for path in update.get("$unset", {}):
            _unset_path(doc, path)
        if inserting:
            for path, value in update.get("$setOnInsert", {}).items():
                _set_path(doc, path, copy.deepcopy(value))

    def _first(self, query):
        return next((d for d in self.docs if _matches(d, query)), None)

    async def find_one(self, query=None, projection=None):
        doc = self._first(query)
        return _project(doc, projection) if doc is not None else None

    def find(self, query=None, projection=None):
        return FakeCursor([_project(d, projection) for d in self.docs if _matches(d, query)])

    async def insert_one(self, doc):
        doc.setdefault("_id", ObjectId())
        self.docs.append(copy.deepcopy(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def update_one(self, query, update, upsert=False):
        doc = self._first(query)
        if doc is None:
            return SimpleNamespace(matched_count=0, modified_count=0)
        self._apply_update(doc, update, inserting=False)
        return SimpleNamespace(matched_count=1, modified_count=1)

    async def find_one_and_update(
        self, query, update, upsert=False, return_document=ReturnDocument.BEFORE
    ):
        doc = self._first(query)
        if doc is None:
            if not upsert:
                return None
            doc = {"_id": ObjectId()}
            for key, value in query.items():
                if not isinstance(value, dict):
                    _set_path(doc, key, value)
            self._apply_update(doc, update, inserting=True)
            self.docs.append(doc)
            return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else None

        before = copy.deepcopy(doc)
        self._apply_update(doc, update, inserting=False)
        return copy.deepcopy(doc) if return_document == ReturnDocument.AFTER else before

    async def replace_one(self, query, replacement):
        for index, doc in enumerate(self.docs):
            if _matches(doc, query):
                self.docs[index] = copy.deepcopy(replacement)
                return SimpleNamespace(matched_count=1, modified_count=1)
        return SimpleNamespace(matched_count=0, modified_count=0)

    async def delete_one(self, query):
        doc = self._first(query)
        if doc is None:
            return SimpleNamespace(deleted_count=0)
        self.docs.remove(doc)
        return SimpleNamespace(deleted_count=1)

    async def delete_many(self, query):
        kept = [d for d in self.docs if not _matches(d, query)]
        deleted = len(self.docs) - len(kept)
        self.docs = kept
        return SimpleNamespace(deleted_count=deleted)


class FakeDatabase:
    def __init__(self):
        self.collections = {}

    def __getitem__(self, name):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]


# ─────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────


@pytest.fixture
def sample_user_id():
    return str(ObjectId())


@pytest.fixture
def mock_collection():
    collection = AsyncMock()
    # Motor's find() returns a cursor synchronously (not a coroutine),
    # so use MagicMock for it. Async methods like find_one, insert_one,
    # delete_many etc. stay as AsyncMock.
    collection.find = MagicMock()
    return collection


@pytest.fixture
def mock_db(mock_collection):
    db = MagicMock()
    db.__getitem__ = MagicMock(return_value=mock_collection)
    return db


@pytest.fixture
def fake_db():
    return FakeDatabase()


@pytest.fixture
def token_service():
    return JWTTokenService(secret=TEST_SECRET)


@pytest.fixture
def password_hasher():
    # Minimum cost keeps the suite fast
    return BcryptPasswordHasher(rounds=4)


@pytest.fixture
def test_settings():
    return Settings(JWT_SECRET=TEST_SECRET, ENVIRONMENT="test")


@pytest.fixture
def client(fake_db, test_settings):
    """HTTP client over the real app, wired to the in-memory database."""
    from api import app
    from devconnector.dependencies import init_all_services

    init_all_services(db=fake_db, settings=test_settings)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def register(client):
    """Register a user through the API and return its token."""

    def _register(email="a@x.com", password="secret123", name="Ada Lovelace"):
        response = client.post(
            "/api/users",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 200, response.text
        return response.json()["token"]

    return _register
