# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: chat.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from api.errors import internal_error
from api.dependencies import get_chat_service
from api.schemas.chat import ChatMessageModel, ChatRequest, ChatResponse, TranscriptResponse
from services.InvoiceChatService import InvoiceChatService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("", response_model=ChatResponse)
def post_chat(
        req: ChatRequest,
        svc: InvoiceChatService = Depends(get_chat_service),
) -> ChatResponse:
    message = (req.message or "").strip()
    if not message:
        raise HTTPException(status_code=400, detail="Message is required")

    logger.info("POST /chat (start) message_len=%d conversation_id=%s", len(message), req.conversation_id)

    try:
        out: Dict[str, Any] = svc.ask(question=message, conversation_id=req.conversation_id)
    except Exception as e:
        logger.exception("post_chat failed: %s", e)
        raise internal_error("Chat processing failed", e)

    logger.info(
        "POST /chat (done) answer_len=%d relevant=%d confidence=%.4f",
        len(out["answer"]),
        len(out["relevant_invoices"]),
        out["confidence"],
    )

    return ChatResponse(
        response=out["answer"],
        conversation_id=out["conversation_id"],
        relevant_invoices=out["relevant_invoices"],
        confidence=out["confidence"],
        refined=out["refined"],
    )


@router.get("/{conversation_id}", response_model=TranscriptResponse)
def get_transcript(
        conversation_id: str,
        svc: InvoiceChatService = Depends(get_chat_service),
) -> TranscriptResponse:
    try:
        messages = svc.transcript(conversation_id)
    except KeyError as e:
        logger.warning("GET /chat/{conversation_id} -> 404 conversation_id='%s'", conversation_id)
        raise HTTPException(status_code=404, detail="Conversation not found") from e

    return TranscriptResponse(
        conversation_id=conversation_id,
        messages=[
            ChatMessageModel(id=m.id, role=m.role, content=m.content, timestamp=m.timestamp)
            for m in messages
        ],
    )
