"""
api/health.py
=============
GET /api/health — liveness and readiness probe for the plant-care backend.
"""

from fastapi import APIRouter, Request

from backend.schemas.response import HealthResponse

router = APIRouter()

API_VERSION = "1.0.0"


@router.get("/api/health", response_model=HealthResponse)
async def health_check(request: Request):
    """Return service status and knowledge base readiness."""
    state = request.app.state
    snapshot = state.knowledge_base.snapshot()

    return HealthResponse(
        status                   = "ok",
        knowledge_base_ready     = snapshot.ready,
        knowledge_base_documents = len(snapshot.documents),
        chat_model               = state.settings.chat_model,
        embedding_model          = state.settings.embed_model,
        api_version              = API_VERSION,
    )
