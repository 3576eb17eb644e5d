"""FastAPI host serving the Gradio frontend."""
from __future__ import annotations

import logging

import gradio as gr
import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from . import __version__, dependencies
from .config import Settings
from .frontend import create_frontend
from .logging import setup_logging

LOGGER = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or dependencies.get_settings()
    setup_logging(settings)

    app = FastAPI(title=settings.frontend.title, version=__version__, docs_url=None, redoc_url=None)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.frontend.cors_allow_origins,
        allow_credentials=settings.frontend.cors_allow_credentials,
        allow_methods=settings.frontend.cors_allow_methods,
        allow_headers=settings.frontend.cors_allow_headers,
    )
    app.add_middleware(GZipMiddleware, minimum_size=settings.frontend.gzip_minimum_size)

    @app.get("/healthz", include_in_schema=False)
    async def healthz() -> dict[str, str]:
        return {"status": "ok", "backend": settings.backend.base_url}

    demo = create_frontend(settings, transport=transport)
    app = gr.mount_gradio_app(app, demo, path=settings.frontend.mount_path)
    LOGGER.info(
        "Frontend mounted | path=%s backend=%s",
        settings.frontend.mount_path,
        settings.backend.base_url,
    )
    return app


def main() -> None:
    settings = dependencies.get_settings()
    uvicorn.run(create_app(settings), host=settings.frontend.host, port=settings.frontend.port)


if __name__ == "__main__":
    main()
