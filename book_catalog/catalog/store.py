"""
Read-only queries behind the HTML views.

All three derive from a single ``find_all`` call on the injected store.
Authors and years are de-duplicated while keeping the order in which
the store cursor first yields them.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, TypeVar

from ..errors import StoreError
from ..models import BookRecord
from ..storage import BookStore
from .schemas import BookRow


logger = logging.getLogger(__name__)


T = TypeVar("T")


def _unique(values: Iterable[T]) -> List[T]:
    seen = set()
    result: List[T] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def _find_all(store: BookStore) -> List[BookRecord]:
    try:
        return store.find_all()
    except StoreError as exc:
        logger.error("Failed to fetch books for view: %s", exc)
        raise StoreError("Failed to fetch books") from exc


def find_book_rows(store: BookStore) -> List[BookRow]:
    return [BookRow.from_record(record) for record in _find_all(store)]


def find_authors(store: BookStore) -> List[str]:
    """Distinct authors, first-seen order."""
    return _unique(record.author for record in _find_all(store))


def find_years(store: BookStore) -> List[int]:
    """Distinct publication years, first-seen order."""
    return _unique(record.year for record in _find_all(store))
