"""
Document store gateway.

``BookStore`` is the narrow capability the handlers depend on: one
logical collection of book records exposing find-all, find-by-filter,
insert-one, update-one and delete-one. ``MongoBookStore`` implements it
over a pymongo collection. Every write is a single independent call;
there are no transactions and no retries, so concurrent writers to the
same identifier race at MongoDB's per-document atomicity.

``connect`` and ``prepare_collection`` are the startup half of this
module: they open the client, check connectivity within the configured
timeout and make sure the collection exists.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Protocol

from bson import ObjectId
from pydantic import ValidationError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from .config import Settings
from .errors import StartupError, StoreError
from .models import BookRecord


logger = logging.getLogger(__name__)

MISSING_URI_MESSAGE = "failure to load env variable"
CLIENT_MESSAGE = "failed to create client for MongoDB"
PING_MESSAGE = "failed to connect to MongoDB, please make sure the database is running"


class BookStore(Protocol):
    """Capability over a single collection of book records."""

    def find_all(self) -> List[BookRecord]:
        ...

    def find_by_filter(self, filter: Dict[str, Any]) -> List[BookRecord]:
        ...

    def insert_one(self, record: BookRecord) -> ObjectId:
        ...

    def update_one(self, identifier: ObjectId, fields: Dict[str, Any]) -> int:
        ...

    def delete_one(self, identifier: ObjectId) -> int:
        ...


class MongoBookStore:
    """``BookStore`` backed by a pymongo collection."""

    def __init__(self, collection: Collection):
        self._collection = collection

    def find_all(self) -> List[BookRecord]:
        """Return every record in cursor order; empty list when none."""
        return self.find_by_filter({})

    def find_by_filter(self, filter: Dict[str, Any]) -> List[BookRecord]:
        try:
            documents = list(self._collection.find(filter))
            return [BookRecord.from_document(doc) for doc in documents]
        except PyMongoError as exc:
            raise StoreError(f"find failed: {exc}") from exc
        except ValidationError as exc:
            raise StoreError(f"could not decode book document: {exc}") from exc

    def insert_one(self, record: BookRecord) -> ObjectId:
        try:
            result = self._collection.insert_one(record.to_document())
        except PyMongoError as exc:
            raise StoreError(f"insert failed: {exc}") from exc
        return result.inserted_id

    def update_one(self, identifier: ObjectId, fields: Dict[str, Any]) -> int:
        """Replace only the named fields; returns the matched count."""
        try:
            result = self._collection.update_one({"_id": identifier}, {"$set": fields})
        except PyMongoError as exc:
            raise StoreError(f"update failed: {exc}") from exc
        return result.matched_count

    def delete_one(self, identifier: ObjectId) -> int:
        try:
            result = self._collection.delete_one({"_id": identifier})
        except PyMongoError as exc:
            raise StoreError(f"delete failed: {exc}") from exc
        return result.deleted_count


def connect(settings: Settings) -> MongoClient:
    """Create a client and ping the primary within the startup timeout.

    Raises
    ------
    StartupError
        When no connection string is configured, the client cannot be
        created, or the ping does not succeed in time.
    """
    if not settings.mongo_uri:
        raise StartupError(MISSING_URI_MESSAGE)

    timeout_ms = int(settings.connect_timeout_seconds * 1000)
    try:
        client: MongoClient = MongoClient(
            settings.mongo_uri,
            serverSelectionTimeoutMS=timeout_ms,
            connectTimeoutMS=timeout_ms,
        )
    except (PyMongoError, ValueError) as exc:
        raise StartupError(CLIENT_MESSAGE) from exc

    try:
        client.admin.command("ping")
    except PyMongoError as exc:
        client.close()
        raise StartupError(PING_MESSAGE) from exc

    logger.info("Connected to MongoDB")
    return client


def prepare_collection(client: MongoClient, database_name: str, collection_name: str) -> Collection:
    """Return the collection, creating it first when it does not exist."""
    database = client[database_name]
    try:
        if collection_name not in database.list_collection_names():
            logger.info("Creating collection %s.%s", database_name, collection_name)
            database.create_collection(collection_name)
    except PyMongoError as exc:
        raise StartupError(f"failed to prepare collection {collection_name}: {exc}") from exc
    return database[collection_name]
