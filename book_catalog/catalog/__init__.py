"""
Server-rendered HTML views over the book collection.

The views are htmx-style fragments: ``/`` serves the full page, and
``/books``, ``/authors``, ``/years`` and ``/search`` return the pieces
the page swaps in. They read through the same ``BookStore`` as the
JSON API and never write.
"""

from .router import router as catalog_router  # noqa: F401
