"""
Pydantic schema for rows of the HTML book table.

``BookRow`` flattens a stored record into the strings the templates
print, so a missing ISBN renders as an empty cell instead of ``None``.
"""

from pydantic import BaseModel

from ..models import BookRecord


class BookRow(BaseModel):
    """One row of the book table fragment."""

    id: str
    name: str
    author: str
    isbn: str = ""
    pages: int = 0
    year: int = 0

    @classmethod
    def from_record(cls, record: BookRecord) -> "BookRow":
        return cls(
            id=str(record.id) if record.id is not None else "",
            name=record.name,
            author=record.author,
            isbn=record.isbn,
            pages=record.pages,
            year=record.year,
        )
