"""
Command line entry point.

Usage:
    python -m book_catalog serve                  # all routes on :3030
    python -m book_catalog serve --service list   # GET /api/books on :8080
    python -m book_catalog seed                   # insert missing seed books
    python -m book_catalog services               # print the service table

The connection string is read from ``MONGO_URI`` (or ``DATABASE_URI``).
Startup problems print a single diagnostic line and exit with status 1
before any request is served.
"""

import argparse
import logging
import sys
from typing import List, Optional

import uvicorn

from .config import get_settings
from .errors import StartupError
from .logging_config import setup_logging
from .main import SERVICES, create_app, open_store


logger = logging.getLogger("book_catalog")


def serve(args: argparse.Namespace) -> int:
    settings = get_settings()
    service = SERVICES[args.service]
    client, store = open_store(settings, service)
    try:
        app = create_app(store=store, service=service.name, settings=settings)
        uvicorn.run(
            app,
            host=args.host or settings.host,
            port=args.port or service.port,
            log_level=settings.log_level.lower(),
        )
    finally:
        client.close()
    return 0


def seed(args: argparse.Namespace) -> int:
    settings = get_settings()
    client, _ = open_store(settings, SERVICES["all"])
    client.close()
    return 0


def list_services(args: argparse.Namespace) -> int:
    for service in SERVICES.values():
        paths = ", ".join(
            f"{','.join(sorted(route.methods))} {route.path}"
            for router in service.routers
            for route in router.routes
        )
        print(f"{service.name:<8} :{service.port:<5} {paths}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="book-catalog",
        description="Book catalog CRUD services over MongoDB",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Run one service instance")
    serve_parser.add_argument(
        "-s", "--service",
        choices=sorted(SERVICES),
        default="all",
        help="Which routes to serve (default: all)",
    )
    serve_parser.add_argument(
        "-p", "--port",
        type=int,
        help="Override the service's fixed port",
    )
    serve_parser.add_argument("--host", help="Bind address (default: HOST or 0.0.0.0)")
    serve_parser.set_defaults(func=serve)

    seed_parser = subparsers.add_parser("seed", help="Create the collection and insert seed books")
    seed_parser.set_defaults(func=seed)

    services_parser = subparsers.add_parser("services", help="Show services and their ports")
    services_parser.set_defaults(func=list_services)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(get_settings().log_level)
    try:
        return args.func(args)
    except StartupError as exc:
        logger.error("%s", exc)
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
