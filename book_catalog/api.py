"""
JSON routes under ``/api/books``.

One router per operation so that each service instance mounts only the
route it owns (see ``main.SERVICES``):

- GET    /api/books       : list every book
- POST   /api/books       : create a book (empty 200 response)
- PUT    /api/books       : sparse update by identifier in the body
- DELETE /api/books/{id}  : delete one book
"""

from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Response, status

from . import handlers
from .dependencies import get_store
from .models import Book, CreateBookRequest, ErrorResponse, MessageResponse, UpdateBookRequest
from .storage import BookStore


PREFIX = "/api/books"

_bad_request = {status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}}
_store_failure = {status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse}}


list_router = APIRouter(prefix=PREFIX, tags=["books"])
create_router = APIRouter(prefix=PREFIX, tags=["books"])
update_router = APIRouter(prefix=PREFIX, tags=["books"])
delete_router = APIRouter(prefix=PREFIX, tags=["books"])


@list_router.get(
    "",
    response_model=List[Book],
    response_model_exclude_none=True,
    responses=_store_failure,
)
def list_books(store: BookStore = Depends(get_store)) -> List[Book]:
    return handlers.list_books(store)


@create_router.post("", responses={**_bad_request, **_store_failure})
def create_book(
    req: CreateBookRequest,
    store: BookStore = Depends(get_store),
) -> Response:
    handlers.create_book(store, req)
    return Response(status_code=status.HTTP_200_OK)


@update_router.put(
    "",
    response_model=MessageResponse,
    responses={**_bad_request, **_store_failure},
)
def update_book(
    req: UpdateBookRequest,
    store: BookStore = Depends(get_store),
) -> MessageResponse:
    handlers.update_book(store, req)
    return MessageResponse(message="Book updated successfully")


@delete_router.delete(
    "/{book_id}",
    response_model=MessageResponse,
    responses={
        **_bad_request,
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
        **_store_failure,
    },
)
def delete_book(book_id: str, store: BookStore = Depends(get_store)) -> MessageResponse:
    handlers.delete_book(store, book_id)
    return MessageResponse(message="Book deleted successfully")
