from fastapi import Request

from .storage import BookStore


def get_store(request: Request) -> BookStore:
    """
    Dependency provider for the book store bound to this app instance.
    """
    return request.app.state.store
