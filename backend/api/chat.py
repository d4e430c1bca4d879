"""
api/chat.py
===========
POST /chat (alias: POST /api/chat)
----------------------------------
Accepts a JSON body ``{"message": "..."}`` and returns ``{"reply": "..."}``.

Errors are returned as ``{"error": "..."}``:
  • 400: message absent, empty, not a string, or the body is not a JSON object
  • 500: the local model did not answer (the message never says which
          upstream call failed)
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from backend.schemas.response import ChatRequest, ChatResponse, ErrorResponse
from rag_pipeline.chat import ChatService
from rag_pipeline.errors import GenerationUnavailable, InvalidRequest

logger = logging.getLogger(__name__)

router = APIRouter()

GENERATION_ERROR_MESSAGE = "Ollama not responding"


def get_chat_service(request: Request) -> ChatService:
    return request.app.state.chat_service


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    openapi_extra={
        "requestBody": {"content": {"application/json": {"schema": ChatRequest.model_json_schema()}}},
    },
)
@router.post("/api/chat", response_model=ChatResponse, include_in_schema=False)
async def chat(
    request: Request,
    service: ChatService = Depends(get_chat_service),
):
    """Answer a plant-care question, grounded on the plant catalog when possible."""
    message = await _read_message(request)

    try:
        reply = await service.reply(message)
    except InvalidRequest as exc:
        return _error(status.HTTP_400_BAD_REQUEST, str(exc))
    except GenerationUnavailable:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERATION_ERROR_MESSAGE)

    return ChatResponse(reply=reply)


async def _read_message(request: Request) -> Any:
    """Pull ``message`` out of the body; malformed bodies yield None."""
    try:
        payload = await request.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    return payload.get("message")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())
