"""
retriever.py
============
Dense similarity ranking over the in-memory knowledge base.

Score = cosine similarity between the query vector and each document
vector, i.e. dot(q, d) / (|q| * |d| + 1e-8).  The epsilon keeps an all-zero
vector from dividing by zero (its score is simply 0.0).

Ranking is a stable descending sort, so documents with equal scores keep
their knowledge-base order.

Returns: ordered list of document texts ready for prompt injection.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import numpy as np

from rag_pipeline.documents import Document
from rag_pipeline.errors import DimensionMismatch

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 3
_EPSILON = 1e-8


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    va = np.asarray(a, dtype=float)
    vb = np.asarray(b, dtype=float)
    if va.shape != vb.shape:
        raise DimensionMismatch(f"Vector dimensions differ: {va.shape[0]} vs {vb.shape[0]}")
    denom = float(np.linalg.norm(va) * np.linalg.norm(vb)) + _EPSILON
    return float(np.dot(va, vb)) / denom


def rank(
    query_vector: Sequence[float],
    documents: Sequence[Document],
    top_k: int = DEFAULT_TOP_K,
) -> List[str]:
    """
    Return the texts of the *top_k* documents most similar to *query_vector*.

    An empty list (never an error) is returned when top_k <= 0 or there are
    no documents.  Raises DimensionMismatch if any document embedding has a
    different length than the query.
    """
    if top_k <= 0 or not documents:
        return []

    scores = [cosine_similarity(query_vector, doc.embedding or ()) for doc in documents]
    order = sorted(range(len(documents)), key=lambda i: scores[i], reverse=True)
    top = order[:top_k]

    logger.debug(
        "Ranked %d documents; top=%s",
        len(documents),
        [(documents[i].id, round(scores[i], 4)) for i in top],
    )
    return [documents[i].text for i in top]
