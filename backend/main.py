"""
main.py
=======
FastAPI application entry point for the plant-care chat backend.

Run locally:
  uvicorn backend.main:app --reload --port 3000

The lifespan handler spawns knowledge base population as a background task
once the app starts, so requests are served (ungrounded) while documents are
still being embedded.  Nothing blocks on the population finishing.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import os
from contextlib import asynccontextmanager, suppress
from typing import Callable, Optional

from dotenv import load_dotenv  # type: ignore
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.api.chat import router as chat_router
from backend.api.health import API_VERSION
from backend.api.health import router as health_router
from backend.api.plants import router as plants_router
from backend.config import Settings, load_settings
from plant_data.catalog import Catalog, CatalogError, load_catalog
from rag_pipeline.chat import ChatService, Generator
from rag_pipeline.embedder import OllamaEmbedder
from rag_pipeline.knowledge_base import Embedder, KnowledgeBase
from rag_pipeline.llm_engine import OllamaGenerator

# Load .env from project root (one level above this file's package)
load_dotenv(os.path.join(os.path.dirname(__file__), "..", ".env"))

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ---------------------------------------------------------------------------
# Lifespan: startup / shutdown
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Kick off knowledge base population without waiting for it."""
    logger.info("Plant-care backend starting up…")

    task: Optional[asyncio.Task] = None
    if app.state.populate_on_startup:
        task = asyncio.create_task(
            app.state.knowledge_base.populate(app.state.catalog, app.state.embedder),
            name="knowledge-base-population",
        )
        task.add_done_callback(_report_population_crash)
    app.state.population_task = task

    yield

    if task is not None and not task.done():
        task.cancel()
        with suppress(asyncio.CancelledError):
            await task
    logger.info("Plant-care backend shutting down.")


def _report_population_crash(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Knowledge base population crashed: %s", exc, exc_info=exc)


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------

def create_app(
    settings: Optional[Settings] = None,
    *,
    catalog_loader: Optional[Callable[[], Catalog]] = None,
    knowledge_base: Optional[KnowledgeBase] = None,
    embedder: Optional[Embedder] = None,
    generator: Optional[Generator] = None,
    populate_on_startup: bool = True,
) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title       = "Plant Care Assistant API",
        description = (
            "Country-wise plant care catalog and a chat assistant backed by a "
            "local Ollama model, grounded on the catalog via embedding retrieval."
        ),
        version     = API_VERSION,
        docs_url    = "/docs",
        redoc_url   = "/redoc",
        lifespan    = lifespan,
    )

    # ── Shared state (owned here, read by routers) ────────────────────────
    catalog = catalog_loader or functools.lru_cache(maxsize=1)(
        functools.partial(load_catalog, settings.plant_data_path)
    )
    embedder = embedder or OllamaEmbedder(
        settings.ollama_base_url, settings.embed_model, timeout=settings.timeout_seconds,
    )
    generator = generator or OllamaGenerator(
        settings.ollama_base_url, settings.chat_model, timeout=settings.timeout_seconds,
    )
    knowledge_base = knowledge_base if knowledge_base is not None else KnowledgeBase()

    app.state.settings            = settings
    app.state.catalog             = catalog
    app.state.embedder            = embedder
    app.state.knowledge_base      = knowledge_base
    app.state.populate_on_startup = populate_on_startup
    app.state.chat_service        = ChatService(knowledge_base, embedder, generator, top_k=settings.top_k)

    # ── CORS ──────────────────────────────────────────────────────────────
    origins = list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins     = origins,
        allow_credentials = "*" not in origins,
        allow_methods     = ["*"],
        allow_headers     = ["*"],
    )

    # ── Errors ────────────────────────────────────────────────────────────
    @app.exception_handler(CatalogError)
    async def _catalog_unavailable(request: Request, exc: CatalogError):
        logger.error("Plant catalog unavailable: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"error": "Plant catalog unavailable"},
        )

    # ── Routers ───────────────────────────────────────────────────────────
    app.include_router(chat_router)
    app.include_router(health_router)
    app.include_router(plants_router)

    return app


_settings = load_settings()
configure_logging(_settings.log_level)
app = create_app(_settings)
