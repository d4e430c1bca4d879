"""
llm_engine.py
=============
Non-streaming text generation against a locally hosted Ollama model
(POST /api/generate with stream=false).

The assembled prompt is sent as-is; the model's ``response`` field is the
reply.  Every failure (network error, timeout, non-success status,
malformed body) surfaces as GenerationUnavailable.  No retries.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from ollama import AsyncClient, ResponseError

from rag_pipeline.errors import GenerationUnavailable

logger = logging.getLogger(__name__)


class OllamaGenerator:
    """Async generation client bound to one chat model."""

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

    async def generate(self, prompt: str) -> str:
        try:
            result = await self._client.generate(model=self.model, prompt=prompt, stream=False)
        except (ResponseError, ConnectionError, httpx.HTTPError) as exc:
            raise GenerationUnavailable(f"Generation request failed ({self.model}): {exc}") from exc
        except (ValueError, TypeError) as exc:
            raise GenerationUnavailable(f"Unparseable generation response ({self.model}): {exc}") from exc

        text = getattr(result, "response", None)
        if not isinstance(text, str):
            raise GenerationUnavailable(f"Generation response from {self.model} has no 'response' text.")

        logger.debug("Generated %d chars with %s.", len(text), self.model)
        return text
