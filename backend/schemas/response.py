"""
schemas/response.py
===================
Pydantic v2 request/response models for the chat and catalog endpoints.

Wire names follow the browser client and the dataset: ``message`` in,
``reply`` / ``error`` out, camelCase plant fields.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from plant_data.records import CountryRecord, PlantInfo


# ---------------------------------------------------------------------------
# Chat
# ---------------------------------------------------------------------------

class ChatRequest(BaseModel):
    message: Optional[str] = None


class ChatResponse(BaseModel):
    reply: str


class ErrorResponse(BaseModel):
    error: str


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------

class CountryResponse(BaseModel):
    country: str
    fallback: bool = Field(False, description="True when the default country was substituted")
    record: CountryRecord


class PlantMatch(BaseModel):
    country: str
    plant: PlantInfo


class PlantSearchResponse(BaseModel):
    query: str
    results: List[PlantMatch] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "ok"
    knowledge_base_ready: bool
    knowledge_base_documents: int
    chat_model: str
    embedding_model: str
    api_version: str
