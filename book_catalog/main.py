"""
Application factory for the book catalog services.

``create_app`` assembles a FastAPI app for one named service (see
``SERVICES``). The store is injected: tests and embedders pass their own
``BookStore``, while ``uvicorn book_catalog.main:app`` builds one from
the environment during startup::

    MONGO_URI=mongodb://localhost:27017 uvicorn book_catalog.main:app

Only the ``all`` service prepares the collection and inserts the seed
books; the single-operation services expect them to exist already.
"""

import logging
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from fastapi import APIRouter, FastAPI, Request
from fastapi.staticfiles import StaticFiles
from pymongo import MongoClient

from . import __version__
from .api import create_router, delete_router, list_router, update_router
from .catalog import catalog_router
from .catalog.router import STATIC_DIR
from .config import Settings, get_settings
from .errors import StartupError, StoreError, register_exception_handlers
from .logging_config import setup_logging
from .seed import seed_books
from .storage import BookStore, MongoBookStore, connect, prepare_collection


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Service:
    """A deployable slice of the application bound to a fixed port."""

    name: str
    port: int
    routers: Sequence[APIRouter]
    html: bool = False
    seed: bool = False


SERVICES: Dict[str, Service] = {
    "list": Service("list", 8080, (list_router,)),
    "create": Service("create", 8081, (create_router,)),
    "update": Service("update", 8082, (update_router,)),
    "delete": Service("delete", 8083, (delete_router,)),
    "web": Service("web", 8084, (catalog_router,), html=True),
    "all": Service(
        "all",
        3030,
        (list_router, create_router, update_router, delete_router, catalog_router),
        html=True,
        seed=True,
    ),
}


def open_store(settings: Settings, service: Service) -> Tuple[MongoClient, MongoBookStore]:
    """Connect, prepare the collection and seed it when the service asks for it.

    Raises
    ------
    StartupError
        On any configuration, connectivity or seeding failure.
    """
    client = connect(settings)
    try:
        if service.seed:
            collection = prepare_collection(
                client, settings.database_name, settings.collection_name
            )
        else:
            collection = client[settings.database_name][settings.collection_name]
        store = MongoBookStore(collection)
        if service.seed:
            inserted = seed_books(store)
            logger.info("Seeding finished, %d book(s) inserted", inserted)
    except StoreError as exc:
        client.close()
        raise StartupError(f"failed to seed collection: {exc}") from exc
    except StartupError:
        client.close()
        raise
    return client, store


def create_app(
    store: Optional[BookStore] = None,
    service: str = "all",
    settings: Optional[Settings] = None,
) -> FastAPI:
    """Create and configure the FastAPI app for ``service``.

    Parameters
    ----------
    store : Optional[BookStore]
        Store shared by every request. When omitted, a MongoDB store is
        opened from ``settings`` at startup and closed at shutdown.
    service : str
        Key of ``SERVICES`` selecting which routes are mounted.
    settings : Optional[Settings]
        Defaults to ``get_settings()``.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)
    selected = SERVICES[service]

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        if app.state.store is None:
            client, app.state.store = open_store(settings, selected)
        yield
        if client is not None:
            client.close()
            logger.info("MongoDB client closed")

    app = FastAPI(
        title=f"Book Catalog ({selected.name})",
        description="CRUD API and HTML views over a MongoDB book collection.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.store = store
    app.state.service = selected

    register_exception_handlers(app)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "%s %s -> 500 (%.1f ms)",
                request.method,
                request.url.path,
                (time.perf_counter() - started) * 1000,
            )
            raise
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    for router in selected.routers:
        app.include_router(router)

    if selected.html and (STATIC_DIR / "css").is_dir():
        app.mount("/css", StaticFiles(directory=str(STATIC_DIR / "css")), name="css")

    return app


# Instance for ``uvicorn book_catalog.main:app``; connects on startup.
app = create_app()
