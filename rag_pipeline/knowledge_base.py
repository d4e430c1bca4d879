"""
knowledge_base.py
=================
In-memory store of embedded plant-care documents.

The store holds one immutable snapshot (documents + ready flag).  Population
builds a complete replacement off to the side and publishes it with a single
assignment, so request handlers only ever see "empty / not ready" or a fully
embedded collection, never a half-built one.

Population is all-or-nothing: if the dataset cannot be loaded or any single
document fails to embed, the store is reset to empty / not ready and chat
continues ungrounded.  There is no incremental update and no persistence;
the store is rebuilt only when the process restarts.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Tuple

from plant_data.catalog import Catalog, CatalogError
from rag_pipeline.documents import Document, build_documents
from rag_pipeline.errors import EmbeddingUnavailable, KnowledgeBasePopulationFailed

logger = logging.getLogger(__name__)


class Embedder(Protocol):
    async def embed(self, text: str) -> list[float]: ...


@dataclass(frozen=True)
class Snapshot:
    documents: Tuple[Document, ...] = ()
    ready: bool = False


_EMPTY = Snapshot()


class KnowledgeBase:
    """Owned store handed to the chat handler; never a module-level global."""

    def __init__(self, documents: Optional[Iterable[Document]] = None) -> None:
        if documents is None:
            self._snapshot = _EMPTY
        else:
            self._snapshot = Snapshot(documents=_check_embedded(tuple(documents)), ready=True)

    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def ready(self) -> bool:
        return self._snapshot.ready

    @property
    def documents(self) -> Tuple[Document, ...]:
        return self._snapshot.documents

    async def populate(self, load_catalog: Callable[[], Catalog], embedder: Embedder) -> bool:
        """
        Build and embed every document, then publish the result.

        Returns True when the knowledge base is ready afterwards.  Failures
        are logged at WARNING and leave the store empty and not ready.
        """
        try:
            documents = await self._build(load_catalog, embedder)
        except KnowledgeBasePopulationFailed as exc:
            self._snapshot = _EMPTY
            logger.warning("Knowledge base population failed, chat will run ungrounded: %s", exc)
            return False

        self._snapshot = Snapshot(documents=documents, ready=True)
        logger.info(
            "Knowledge base ready: %d documents (dim=%d).",
            len(documents), len(documents[0].embedding or ()),
        )
        return True

    async def _build(
        self,
        load_catalog: Callable[[], Catalog],
        embedder: Embedder,
    ) -> Tuple[Document, ...]:
        try:
            catalog = await asyncio.to_thread(load_catalog)
            drafts = build_documents(catalog)
        except CatalogError as exc:
            raise KnowledgeBasePopulationFailed(f"Could not load plant dataset: {exc}") from exc

        if not drafts:
            raise KnowledgeBasePopulationFailed("Plant dataset produced no documents.")

        embedded = []
        dim: Optional[int] = None
        for draft in drafts:
            try:
                vector = await embedder.embed(draft.text)
            except EmbeddingUnavailable as exc:
                raise KnowledgeBasePopulationFailed(f"Embedding failed for {draft.id}: {exc}") from exc

            if dim is None:
                dim = len(vector)
            elif len(vector) != dim:
                raise KnowledgeBasePopulationFailed(
                    f"Embedding for {draft.id} has dimension {len(vector)}, expected {dim}."
                )
            embedded.append(draft.with_embedding(vector))
            logger.debug("Embedded %s (%d chars).", draft.id, len(draft.text))

        return tuple(embedded)


def _check_embedded(documents: Tuple[Document, ...]) -> Tuple[Document, ...]:
    dims = {len(doc.embedding) for doc in documents if doc.embedding is not None}
    if any(doc.embedding is None for doc in documents) or len(dims) > 1:
        raise ValueError("Every document needs an embedding of one shared dimension.")
    return documents
