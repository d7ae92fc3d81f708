from threading import Lock
from typing import Any, Dict, List

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from book_catalog.errors import StoreError
from book_catalog.main import create_app
from book_catalog.models import BookRecord


class InMemoryBookStore:
    """
    Dict-backed BookStore keyed by ObjectId, in insertion order.

    Set ``fail`` to make every call raise StoreError.
    """

    def __init__(self):
        self._documents: Dict[ObjectId, Dict[str, Any]] = {}
        self._lock = Lock()
        self.fail = False
        self.calls: List[str] = []

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if self.fail:
            raise StoreError(f"{name} failed: connection refused")

    def find_all(self) -> List[BookRecord]:
        return self.find_by_filter({})

    def find_by_filter(self, filter: Dict[str, Any]) -> List[BookRecord]:
        self._check("find")
        return [
            BookRecord.from_document(doc)
            for doc in self._documents.values()
            if all(doc.get(k) == v for k, v in filter.items())
        ]

    def insert_one(self, record: BookRecord) -> ObjectId:
        self._check("insert_one")
        with self._lock:
            document = record.to_document()
            document["_id"] = ObjectId()
            self._documents[document["_id"]] = document
        return document["_id"]

    def update_one(self, identifier: ObjectId, fields: Dict[str, Any]) -> int:
        self._check("update_one")
        document = self._documents.get(identifier)
        if document is None:
            return 0
        document.update(fields)
        return 1

    def delete_one(self, identifier: ObjectId) -> int:
        self._check("delete_one")
        return 1 if self._documents.pop(identifier, None) is not None else 0

    def get(self, identifier: ObjectId) -> BookRecord:
        return BookRecord.from_document(self._documents[identifier])


@pytest.fixture
def store() -> InMemoryBookStore:
    return InMemoryBookStore()


@pytest.fixture
def client(store) -> TestClient:
    return TestClient(create_app(store=store, service="all"))


@pytest.fixture
def dune(store) -> ObjectId:
    return store.insert_one(
        BookRecord(name="Dune", author="Herbert", isbn="0441013597", pages=412, year=1965)
    )
