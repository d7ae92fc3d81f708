"""
Request handlers shared by every service instance.

Each function takes the injected ``BookStore`` and an already parsed
request, performs exactly one store call and returns the value the
route sends back. Failures are raised as ``CatalogError`` subclasses
and rendered by the app-level exception handlers.
"""

import logging
from typing import Any, Dict, List

from bson import ObjectId

from .errors import INVALID_ID, MalformedInputError, NotFoundError, StoreError
from .models import Book, CreateBookRequest, UpdateBookRequest
from .storage import BookStore


logger = logging.getLogger(__name__)

# Request field -> stored document key
UPDATABLE_FIELDS = {
    "name": "bookname",
    "author": "bookauthor",
    "isbn": "bookisbn",
    "pages": "bookpages",
    "year": "bookyear",
}


def list_books(store: BookStore) -> List[Book]:
    """Return every stored book as a response projection, in store order."""
    try:
        records = store.find_all()
    except StoreError as exc:
        logger.error("Failed to fetch books: %s", exc)
        raise StoreError("Failed to fetch books") from exc
    return [Book.from_record(record) for record in records]


def create_book(store: BookStore, request: CreateBookRequest) -> ObjectId:
    """Insert a new record and return the identifier the store assigned.

    The identifier is logged but not sent back to the client.
    """
    record = request.to_record()
    try:
        inserted_id = store.insert_one(record)
    except StoreError as exc:
        logger.error("Failed to add book: %s", exc)
        raise StoreError("Failed to add book") from exc
    logger.info("Created book %s", inserted_id)
    return inserted_id


def sparse_update_fields(request: UpdateBookRequest) -> Dict[str, Any]:
    """Build the ``$set`` document for an update.

    A field is included only when it differs from its type's zero
    value, so an update can never set ``pages`` or ``year`` to 0 or
    clear ``name``, ``author`` or ``isbn``.
    """
    fields: Dict[str, Any] = {}
    for attr, key in UPDATABLE_FIELDS.items():
        value = getattr(request, attr)
        if value:
            fields[key] = value
    return fields


def update_book(store: BookStore, request: UpdateBookRequest) -> int:
    """Apply a sparse update and return the matched count.

    A missing record is not reported as an error: callers get the same
    success message whether or not anything matched.
    """
    identifier = request.object_id()
    if identifier is None:
        logger.warning("Invalid book ID in update request")
        raise MalformedInputError(INVALID_ID)

    fields = sparse_update_fields(request)
    logger.debug("Update fields for %s: %s", identifier, fields)
    try:
        matched = store.update_one(identifier, fields)
    except StoreError as exc:
        logger.error("Failed to update book %s: %s", identifier, exc)
        raise StoreError("Failed to update book") from exc
    logger.info("Updated book %s (matched=%d)", identifier, matched)
    return matched


def parse_book_id(raw: str) -> ObjectId:
    if not ObjectId.is_valid(raw):
        raise MalformedInputError(INVALID_ID)
    return ObjectId(raw)


def delete_book(store: BookStore, raw_id: str) -> int:
    """Delete one record by its hex identifier; returns the deleted count."""
    identifier = parse_book_id(raw_id)
    try:
        deleted = store.delete_one(identifier)
    except StoreError as exc:
        logger.error("Failed to delete book %s: %s", identifier, exc)
        raise StoreError("Failed to delete book") from exc
    if deleted == 0:
        raise NotFoundError("Book not found")
    logger.info("Deleted book %s", identifier)
    return deleted
