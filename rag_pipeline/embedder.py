"""
embedder.py
===========
Convert text strings into dense embedding vectors via the Ollama
embeddings endpoint (POST /api/embeddings).

Used twice: once per document while the knowledge base is populated, and
once per incoming chat message.  There is no retry and no caching; each
call is exactly one outbound request.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Optional

import httpx
from ollama import AsyncClient, ResponseError

from rag_pipeline.errors import EmbeddingUnavailable

logger = logging.getLogger(__name__)


class OllamaEmbedder:
    """Async embedding client bound to one embedding model."""

    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: Optional[float] = None,
        client: Optional[AsyncClient] = None,
        **client_kwargs: Any,
    ) -> None:
        self.model = model
        self._client = client or AsyncClient(host=base_url, timeout=timeout, **client_kwargs)

    async def embed(self, text: str) -> List[float]:
        """Return the embedding vector for *text*, or raise EmbeddingUnavailable."""
        try:
            response = await self._client.embeddings(model=self.model, prompt=text)
        except (ResponseError, ConnectionError, httpx.HTTPError) as exc:
            raise EmbeddingUnavailable(f"Embedding request failed ({self.model}): {exc}") from exc
        except (ValueError, TypeError) as exc:
            raise EmbeddingUnavailable(f"Unparseable embedding response ({self.model}): {exc}") from exc

        return _as_vector(getattr(response, "embedding", None), self.model)


def _as_vector(raw: Any, model: str) -> List[float]:
    if not raw:
        raise EmbeddingUnavailable(f"Embedding response from {model} has no 'embedding' field.")
    try:
        vector = [float(x) for x in raw]
    except (TypeError, ValueError) as exc:
        raise EmbeddingUnavailable(f"Embedding from {model} is not a list of numbers.") from exc
    if not all(math.isfinite(x) for x in vector):
        raise EmbeddingUnavailable(f"Embedding from {model} contains non-finite values.")
    return vector
