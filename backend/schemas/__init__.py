# backend/schemas/__init__.py
from backend.schemas.response import (
    ChatRequest,
    ChatResponse,
    CountryResponse,
    ErrorResponse,
    HealthResponse,
    PlantMatch,
    PlantSearchResponse,
)

__all__ = [
    "ChatRequest", "ChatResponse", "ErrorResponse",
    "CountryResponse", "PlantMatch", "PlantSearchResponse",
    "HealthResponse",
]
