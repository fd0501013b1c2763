# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: api/schemas/chat.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import Field

from api.schemas.common import CamelModel


class ChatRequest(CamelModel):
    message: str = Field(..., min_length=1, max_length=4000)
    conversation_id: Optional[str] = None


class ChatResponse(CamelModel):
    response: str
    conversation_id: str
    relevant_invoices: List[str] = Field(default_factory=list)
    confidence: float

    # set when a language model rewrote the templated answer
    refined: bool = False


class ChatMessageModel(CamelModel):
    id: str
    role: Literal["user", "assistant", "system"]
    content: str
    timestamp: str


class TranscriptResponse(CamelModel):
    conversation_id: str
    messages: List[ChatMessageModel]
