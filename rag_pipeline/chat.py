"""
chat.py
=======
Per-request orchestration of a grounded chat reply:

  1. Validate the user message                    (InvalidRequest)
  2. Embed the message + rank documents           (best-effort)
  3. Assemble the prompt                          (always)
  4. Generate with the local model                (GenerationUnavailable)

Grounding is strictly additive: any failure in step 2 is logged and the
request carries on with "(no context available)".  Steps run sequentially
within a request; concurrent requests share only the read-only knowledge
base snapshot.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from rag_pipeline.errors import GenerationUnavailable, InvalidRequest
from rag_pipeline.knowledge_base import Embedder, KnowledgeBase
from rag_pipeline.prompt import SYSTEM_INSTRUCTION, assemble, join_context
from rag_pipeline.retriever import DEFAULT_TOP_K, rank

logger = logging.getLogger(__name__)


class Generator(Protocol):
    async def generate(self, prompt: str) -> str: ...


class ChatService:
    def __init__(
        self,
        knowledge_base: KnowledgeBase,
        embedder: Embedder,
        generator: Generator,
        top_k: int = DEFAULT_TOP_K,
        system_instruction: str = SYSTEM_INSTRUCTION,
    ) -> None:
        self.knowledge_base = knowledge_base
        self.embedder = embedder
        self.generator = generator
        self.top_k = top_k
        self.system_instruction = system_instruction

    async def reply(self, message: Any) -> str:
        """Return the model's reply to *message*."""
        text = validate_message(message)
        prompt = await self.build_prompt(text)

        try:
            return await self.generator.generate(prompt)
        except GenerationUnavailable as exc:
            logger.error("Generation failed: %s", exc, exc_info=True)
            raise

    async def build_prompt(self, message: str) -> str:
        context = await self.retrieve_context(message)
        return assemble(self.system_instruction, context, message)

    async def retrieve_context(self, message: str) -> str:
        """Best-effort retrieval; returns "" whenever grounding is unavailable."""
        snapshot = self.knowledge_base.snapshot()
        if not snapshot.ready:
            logger.debug("Knowledge base not ready; answering ungrounded.")
            return ""

        try:
            query_vector = await self.embedder.embed(message)
            chunks = rank(query_vector, snapshot.documents, self.top_k)
        except Exception as exc:
            logger.warning("Context retrieval skipped: %s", exc, exc_info=True)
            return ""

        return join_context(chunks)


def validate_message(message: Any) -> str:
    if not isinstance(message, str) or not message.strip():
        raise InvalidRequest("Message is required")
    return message.strip()
