"""arcbrowse FastAPI application factory and server bootstrap."""

from __future__ import annotations

import argparse
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from arcbrowse import __version__
from arcbrowse.config import settings
from arcbrowse.services import init_services, shutdown_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def _lifespan(app: FastAPI):
    """Startup / shutdown lifecycle."""
    _setup_logging()
    init_services()
    logger.info("arcbrowse v%s serving %s", __version__, app.state.root_dir)
    try:
        yield
    finally:
        shutdown_services()
        logger.info("arcbrowse shutting down")


def _setup_logging() -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def create_app(root: str | None = None) -> FastAPI:
    """Application factory for one browsed root."""
    from arcbrowse.api.routes import api_router

    # Every path belongs to the browsed tree, so no docs/openapi routes
    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.root_dir = root or settings.root_dir

    if settings.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=["Content-Disposition"],
        )

    app.include_router(api_router)
    return app


app = create_app()


class FileServer:
    """A browsed root plus the HTTP server that exposes it."""

    def __init__(self, root: str):
        self.root = root
        self.app = create_app(root)

    def listen(self, port: int | str, host: str = "") -> None:
        import uvicorn

        uvicorn.run(
            self.app,
            host=host or settings.host,
            port=int(port),
            log_level=settings.log_level.lower(),
        )

    def listen_to_port(self, port: int | str) -> None:
        self.listen(port, "")


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="arcbrowse",
        description="Read-only HTTP browser over a directory tree and its archives.",
    )
    parser.add_argument("root", help="Directory to serve")
    parser.add_argument("--host", default=settings.host, help=f"Bind address (default: {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Port (default: {settings.port})")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    _setup_logging()

    root = Path(args.root)
    if not root.exists():
        logger.error("Root directory does not exist: %s", root)
        return 1
    if not root.is_dir():
        logger.error("Is not a directory: %s", root)
        return 1

    server = FileServer(str(root.resolve()))
    server.listen(args.port, args.host)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
