# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: InvoiceChatService.py
# -----------------------------------------------------------------------------
import json
import logging
import re
import uuid
from typing import Any, Callable, Dict, List, Optional, Tuple

from chat.ConversationLog import ConversationLog
from chat.OpenAIChat import OpenAIChat
from document.InvoiceRecord import ChatMessage, InvoiceFields, InvoiceRecord, ScoredMatch
from services.InvoiceQueryService import InvoiceQueryService
from utility.logging_utils import get_class_logger

ESCALATION_MESSAGE = (
    "I couldn't find that information in your uploaded invoices. "
    "Let me transfer you to a live agent who can help you further."
)


def _charge_follow_up(f: InvoiceFields) -> str:
    out = ""
    if f.store and f.date:
        out += f'I can see a transaction at "{f.store}" on {f.date}. '
    if f.amount:
        out += f"The amount was ${f.amount}. "
    return out + "What would you like to verify about this charge?"


def _invoice_follow_up(f: InvoiceFields) -> str:
    out = f"The invoice number is {f.invoice_number}. " if f.invoice_number else ""
    return out + "What else would you like to know about this invoice?"


def _date_follow_up(f: InvoiceFields) -> str:
    out = f"This invoice is dated {f.date}. " if f.date else ""
    return out + "Is there anything specific about the timing you'd like to discuss?"


def _store_follow_up(f: InvoiceFields) -> str:
    out = f"This was from {f.store}. " if f.store else ""
    return out + "Do you have questions about this merchant?"


# Checked in order, first hit wins
INTENT_RULES: Tuple[Tuple[str, re.Pattern, Callable[[InvoiceFields], str]], ...] = (
    ("charge", re.compile(r"charge|transaction|amount|total|cost|price", re.I), _charge_follow_up),
    ("invoice", re.compile(r"invoice|number|reference", re.I), _invoice_follow_up),
    ("date", re.compile(r"date|when|time", re.I), _date_follow_up),
    ("store", re.compile(r"store|shop|merchant|vendor|where", re.I), _store_follow_up),
)
GENERIC_FOLLOW_UP = "How can I help you with this invoice?"


def detect_intent(question: str) -> Optional[str]:
    for name, pattern, _ in INTENT_RULES:
        if pattern.search(question or ""):
            return name
    return None


def build_templated_answer(question: str, fields: InvoiceFields) -> str:
    """Deterministic answer from one invoice's fields plus an intent follow-up."""
    if fields.invoice_number:
        answer = f"Found Invoice {fields.invoice_number}"
    else:
        answer = "Found a matching invoice"

    if fields.store:
        answer += f" from {fields.store}"
    if fields.date:
        answer += f" dated {fields.date}"
    if fields.amount:
        answer += f" totaling ${fields.amount}"
    answer += ". "

    intent = detect_intent(question)
    for name, _, follow_up in INTENT_RULES:
        if name == intent:
            return answer + follow_up(fields)
    return answer + GENERIC_FOLLOW_UP


class InvoiceChatService:
    """
    Chat Service (answer composer):
        - retrieves the top invoices using InvoiceQueryService
        - escalates when nothing clears the relevance threshold
        - otherwise builds a templated answer from the best match
        - optionally refines it with OpenAIChat; refinement failures
          fall back to the templated answer silently
    """

    system_prompt_template: str = (
        "You are a helpful invoice assistant. Use the following invoice context "
        "to answer the user's question accurately and concisely.\n\n"
        "Invoice Context:\n{fields}\n\n"
        "Original Invoice Text Preview:\n{preview}...\n\n"
        "Guidelines:\n"
        "- Be specific and reference actual invoice details\n"
        "- If asked about charges you cannot verify, offer to escalate to a live agent\n"
        "- Keep responses conversational and concise\n"
        "- If the question cannot be answered from the invoice data, say so clearly\n"
    )

    def __init__(
            self,
            *,
            query_service: InvoiceQueryService,
            chat_client: Optional[OpenAIChat] = None,
            conversation_log: Optional[ConversationLog] = None,
            relevance_threshold: float = 0.7,
            top_k: int = 3,
            temperature: float = 0.7,
            max_tokens: int = 150,
            text_preview_chars: int = 500,
            logger: logging.Logger | None = None,
    ) -> None:
        self.query_service = query_service
        self.chat_client = chat_client
        self.conversation_log = conversation_log if conversation_log is not None else ConversationLog()
        self.relevance_threshold = relevance_threshold
        self.top_k = top_k
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.text_preview_chars = text_preview_chars
        self.logger = logger or get_class_logger(self.__class__)
        self.logger.info(
            "InvoiceChatService initialised (threshold=%.2f chat_client=%s)",
            self.relevance_threshold,
            type(chat_client).__name__ if chat_client else None,
        )

    def ask(self, *, question: str, conversation_id: Optional[str] = None) -> Dict[str, Any]:
        """
            Returns:
            {
                "answer": str,
                "conversation_id": str,
                "relevant_invoices": [id] | [],
                "confidence": float,
                "refined": bool,
            }
        """
        q = (question or "").strip()
        if not q:
            raise ValueError("question must not be empty")

        conversation_id = conversation_id or str(uuid.uuid4())
        self.conversation_log.append(conversation_id, ChatMessage(role="user", content=q))

        self.logger.info("ask: conversation='%s' question='%s' (start)", conversation_id, q[:120])

        matches = self.query_service.query(q, n_results=self.top_k)
        self.logger.info("ask: retrieved matches=%d hits=%s", len(matches), self.query_service.to_hits(matches))

        if not self._is_relevant(matches):
            self.logger.info("ask: no relevant invoice, escalating")
            out = self._response(ESCALATION_MESSAGE, conversation_id, [], 0.0, refined=False)
        else:
            best = matches[0]
            self.logger.info("ask: best=%s score=%.4f intent=%s", best.record.id, best.score, detect_intent(q))
            answer = build_templated_answer(q, best.record.fields)
            refined_answer = self._refine(q, best.record)
            out = self._response(
                refined_answer or answer,
                conversation_id,
                [best.record.id],
                best.score,
                refined=refined_answer is not None,
            )

        self.conversation_log.append(conversation_id, ChatMessage(role="assistant", content=out["answer"]))
        self.logger.info(
            "ask: answer_chars=%d confidence=%.4f refined=%s (done)",
            len(out["answer"]),
            out["confidence"],
            out["refined"],
        )
        return out

    def transcript(self, conversation_id: str) -> List[ChatMessage]:
        messages = self.conversation_log.get(conversation_id)
        if messages is None:
            raise KeyError(f"conversation '{conversation_id}' not found")
        return messages

    def _is_relevant(self, matches: List[ScoredMatch]) -> bool:
        return bool(matches) and matches[0].score >= self.relevance_threshold

    def _build_system_prompt(self, record: InvoiceRecord) -> str:
        return self.system_prompt_template.format(
            fields=json.dumps(record.fields.to_dict(), indent=2),
            preview=record.text[: self.text_preview_chars],
        )

    def _refine(self, question: str, record: InvoiceRecord) -> Optional[str]:
        if self.chat_client is None:
            return None

        try:
            resp = self.chat_client.simple_chat(
                user_text=question,
                system_text=self._build_system_prompt(record),
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
            content = (resp.get("answer") or "").strip()
        except Exception as e:
            self.logger.warning("Refinement failed, keeping templated answer: %s", e, exc_info=True)
            return None

        if not content:
            self.logger.warning("Refinement returned empty content, keeping templated answer")
            return None
        return content

    @staticmethod
    def _response(
            answer: str,
            conversation_id: str,
            relevant_invoices: List[str],
            confidence: float,
            *,
            refined: bool,
    ) -> Dict[str, Any]:
        return {
            "answer": answer,
            "conversation_id": conversation_id,
            "relevant_invoices": relevant_invoices,
            "confidence": float(confidence),
            "refined": refined,
        }
