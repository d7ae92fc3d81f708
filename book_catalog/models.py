"""
Book record model and its wire projections.

``BookRecord`` is the stored shape. Its field aliases are the document
keys used by the existing ``information`` collection (``bookname``,
``bookauthor`` ...), so records written by earlier deployments decode
unchanged. ``CreateBookRequest`` and ``UpdateBookRequest`` are the
request bodies and ``Book`` is the response projection.

Request bodies are parsed strictly: a missing key takes the zero value
of its type, unknown keys are ignored, and a value of the wrong JSON
type is a parse failure. JSON ``null`` counts as a missing key, and
integers must fit the 64-bit range the document store can hold.
"""

from typing import Any, Dict, Optional

from bson import ObjectId
from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
)


ZERO_OBJECT_ID = "0" * 24
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class BookRecord(BaseModel):
    """A book as stored in the document collection."""

    model_config = ConfigDict(populate_by_name=True, arbitrary_types_allowed=True)

    # Assigned by the store on insert; never set by callers.
    id: Optional[ObjectId] = Field(default=None, alias="_id")
    name: str = Field(default="", alias="bookname")
    author: str = Field(default="", alias="bookauthor")
    isbn: str = Field(default="", alias="bookisbn")
    pages: int = Field(default=0, alias="bookpages")
    year: int = Field(default=0, alias="bookyear")

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "BookRecord":
        return cls.model_validate(document)

    def to_document(self) -> Dict[str, Any]:
        """Return the stored form; ``_id`` is left out until assigned."""
        return self.model_dump(by_alias=True, exclude_none=True)


class _RequestBody(BaseModel):
    model_config = ConfigDict(strict=True)

    @field_validator("*", mode="before")
    @classmethod
    def null_is_zero_value(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return cls.model_fields[info.field_name].default
        return v


class CreateBookRequest(_RequestBody):
    """Body of ``POST /api/books``.

    No content validation happens here: empty names, empty authors and
    negative page counts are all accepted.
    """

    name: str = ""
    author: str = ""
    pages: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    year: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    isbn: str = ""

    def to_record(self) -> BookRecord:
        return BookRecord(
            name=self.name,
            author=self.author,
            isbn=self.isbn,
            pages=self.pages,
            year=self.year,
        )


class UpdateBookRequest(_RequestBody):
    """Body of ``PUT /api/books``: an identifier plus the fields to change.

    A field equal to its zero value (``""`` or ``0``) counts as "not
    supplied"; see ``handlers.sparse_update_fields``.
    """

    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "ID"))
    name: str = ""
    author: str = ""
    isbn: str = ""
    pages: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)
    year: int = Field(default=0, ge=INT64_MIN, le=INT64_MAX)

    @field_validator("id")
    @classmethod
    def id_is_object_id(cls, v: Optional[str]) -> Optional[str]:
        if v and not ObjectId.is_valid(v):
            raise ValueError("id must be a 24 character hex string")
        return v

    def object_id(self) -> Optional[ObjectId]:
        """Return the identifier, or ``None`` when missing, empty or all zeros."""
        if not self.id or self.id == ZERO_OBJECT_ID:
            return None
        return ObjectId(self.id)


class Book(BaseModel):
    """Response projection of a stored book."""

    id: str
    name: str
    author: str
    pages: int
    year: int
    # Omitted from JSON when empty.
    isbn: Optional[str] = None

    @classmethod
    def from_record(cls, record: BookRecord) -> "Book":
        return cls(
            id=str(record.id),
            name=record.name,
            author=record.author,
            pages=record.pages,
            year=record.year,
            isbn=record.isbn or None,
        )


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
