"""
errors.py
=========
Failure taxonomy for the chat grounding pipeline.

Only InvalidRequest and GenerationUnavailable ever reach a caller;
the rest are absorbed so that grounding degrades instead of failing.
"""


class ChatPipelineError(RuntimeError):
    """Base class for chat pipeline failures."""


class InvalidRequest(ChatPipelineError):
    """Raised when the user message is absent or empty."""


class EmbeddingUnavailable(ChatPipelineError):
    """Raised when the embedding endpoint cannot produce a vector."""


class KnowledgeBasePopulationFailed(ChatPipelineError):
    """Raised when any step of knowledge base population fails."""


class GenerationUnavailable(ChatPipelineError):
    """Raised when the generative model does not return a usable reply."""


class DimensionMismatch(ChatPipelineError):
    """Raised when a query vector and a document vector differ in length."""
