"""
Startup seeding of the book collection.

Each seed book is looked up by exact match on all of its stored fields
and inserted only if nothing matches. Finding more than one match means
the collection holds duplicates that this process would otherwise hide,
so startup is aborted.
"""

import logging
from typing import Any, Dict, List

from .errors import StartupError
from .models import BookRecord
from .storage import BookStore


logger = logging.getLogger(__name__)


SEED_BOOKS: List[BookRecord] = [
    BookRecord(
        name="The Vortex",
        author="José Eustasio Rivera",
        isbn="958-30-0804-4",
        pages=292,
        year=1924,
    ),
    BookRecord(
        name="Frankenstein",
        author="Mary Shelley",
        isbn="978-3-649-64609-9",
        pages=280,
        year=1818,
    ),
    BookRecord(
        name="The Black Cat",
        author="Edgar Allan Poe",
        isbn="978-3-99168-238-7",
        pages=280,
        year=1843,
    ),
]


def exact_match_filter(record: BookRecord) -> Dict[str, Any]:
    """Filter matching every stored field of ``record`` except ``_id``."""
    document = record.to_document()
    document.pop("_id", None)
    return document


def seed_books(store: BookStore, books: List[BookRecord] = SEED_BOOKS) -> int:
    """Insert the seed books that are not stored yet.

    Returns
    -------
    int
        The number of books inserted.

    Raises
    ------
    StartupError
        When a seed book is already stored more than once.
    """
    inserted = 0
    for book in books:
        matches = store.find_by_filter(exact_match_filter(book))
        if len(matches) > 1:
            raise StartupError(f"more records were found for seed book {book.name!r}")
        if matches:
            logger.info("Seed book %r already present as %s", book.name, matches[0].id)
            continue
        inserted_id = store.insert_one(book)
        logger.info("Inserted seed book %r as %s", book.name, inserted_id)
        inserted += 1
    return inserted
