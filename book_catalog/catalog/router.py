"""
Route definitions for the HTML views.

Endpoints:
- GET /         : full page shell
- GET /books    : book table fragment
- GET /authors  : author list fragment
- GET /years    : year list fragment
- GET /search   : search bar fragment
- GET /create   : placeholder, 204 No Content
"""

from __future__ import annotations

from pathlib import Path

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from ..dependencies import get_store
from ..storage import BookStore
from .store import find_authors, find_book_rows, find_years


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
STATIC_DIR = Path(__file__).resolve().parent / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

router = APIRouter(tags=["views"], default_response_class=HTMLResponse)


@router.get("/")
def index(request: Request):
    return templates.TemplateResponse(request, "index.html", {})


@router.get("/books")
def book_table(request: Request, store: BookStore = Depends(get_store)):
    return templates.TemplateResponse(
        request, "book_table.html", {"books": find_book_rows(store)}
    )


@router.get("/authors")
def authors(request: Request, store: BookStore = Depends(get_store)):
    return templates.TemplateResponse(
        request, "authors.html", {"authors": find_authors(store)}
    )


@router.get("/years")
def years(request: Request, store: BookStore = Depends(get_store)):
    return templates.TemplateResponse(
        request, "years.html", {"years": find_years(store)}
    )


@router.get("/search")
def search_bar(request: Request):
    return templates.TemplateResponse(request, "search_bar.html", {})


@router.get("/create", status_code=status.HTTP_204_NO_CONTENT)
def create_placeholder() -> Response:
    return Response(status_code=status.HTTP_204_NO_CONTENT)
