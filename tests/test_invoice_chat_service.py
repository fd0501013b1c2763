# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_invoice_chat_service.py
# -----------------------------------------------------------------------------
import pytest

from conftest import ACME_TEXT, DIM, FakeChatClient, FakeExtractor, FixedEmbedding
from embedding.InvoiceEmbedder import InvoiceEmbedder
from parsing.InvoiceFieldParser import InvoiceFieldParser
from retrieval.InvoiceRetriever import InvoiceRetriever
from services.InvoiceChatService import (
    ESCALATION_MESSAGE,
    InvoiceChatService,
    build_templated_answer,
    detect_intent,
)
from chat.ConversationLog import ConversationLog
from document.InvoiceRecord import ChatMessage, InvoiceFields
from services.InvoiceIngestService import InvoiceIngestService, UploadedFile
from services.InvoiceQueryService import InvoiceQueryService
from vectorstore.InMemoryInvoiceStore import InMemoryInvoiceStore

ACME_FIELDS = InvoiceFields(invoice_number="INV-000123", date="2024-01-05", store="Acme", amount="42.50")


def _build(embedder: InvoiceEmbedder, chat_client=None, texts=None):
    store = InMemoryInvoiceStore(dim=DIM)
    ingest = InvoiceIngestService(
        extractor=FakeExtractor(texts or {}),
        parser=InvoiceFieldParser(),
        embedder=embedder,
        store=store,
    )
    query = InvoiceQueryService(embedder=embedder, retriever=InvoiceRetriever(store))
    chat = InvoiceChatService(query_service=query, chat_client=chat_client)
    return ingest, chat, store


def _ingest_acme(ingest: InvoiceIngestService) -> str:
    out = ingest.ingest_files([UploadedFile(filename="acme.png", data=b"img")])
    assert out["processed_count"] == 1
    return out["invoices"][0]["id"]


def test_empty_store_escalates(fixed_embedder):
    _, chat, _ = _build(fixed_embedder)

    out = chat.ask(question="What was the total?")

    assert out["answer"] == ESCALATION_MESSAGE
    assert out["relevant_invoices"] == []
    assert out["confidence"] == 0.0
    assert out["refined"] is False
    assert out["conversation_id"]


def test_matching_invoice_answer_mentions_fields(fixed_embedder):
    ingest, chat, _ = _build(fixed_embedder, texts={"acme.png": ACME_TEXT})
    invoice_id = _ingest_acme(ingest)

    out = chat.ask(question="What was the total on invoice INV-000123?")

    assert out["relevant_invoices"] == [invoice_id]
    assert out["confidence"] >= 0.7
    assert out["refined"] is False
    for needle in ("INV-000123", "Acme", "2024-01-05", "$42.50"):
        assert needle in out["answer"]
    assert out["answer"].endswith("What would you like to verify about this charge?")


def test_below_threshold_escalates():
    # invoice text and question embed to orthogonal vectors
    e1 = [1.0] + [0.0] * (DIM - 1)
    e2 = [0.0, 1.0] + [0.0] * (DIM - 2)
    embedder = InvoiceEmbedder(dim=DIM, remote=FixedEmbedding({"ACME SUPPLIES": e1}, default=e2))
    ingest, chat, _ = _build(embedder, texts={"acme.png": ACME_TEXT})
    _ingest_acme(ingest)

    out = chat.ask(question="when did I buy it?")

    assert out["answer"] == ESCALATION_MESSAGE
    assert out["relevant_invoices"] == []
    assert out["confidence"] == 0.0


def test_threshold_is_inclusive(fixed_embedder):
    ingest, chat, _ = _build(fixed_embedder, texts={"acme.png": ACME_TEXT})
    _ingest_acme(ingest)
    chat.relevance_threshold = 1.0

    out = chat.ask(question="hello")

    assert out["relevant_invoices"]
    assert out["answer"] != ESCALATION_MESSAGE


def test_failing_refinement_keeps_templated_answer(fixed_embedder):
    client = FakeChatClient(error=RuntimeError("llm down"))
    ingest, chat, _ = _build(fixed_embedder, chat_client=client, texts={"acme.png": ACME_TEXT})
    _ingest_acme(ingest)

    out = chat.ask(question="What store was this from?")

    assert out["refined"] is False
    assert out["answer"] == build_templated_answer("What store was this from?", ACME_FIELDS)
    assert len(client.calls) == 1


def test_successful_refinement_replaces_answer(fixed_embedder):
    client = FakeChatClient(answer="  You paid $42.50 at Acme.  ")
    ingest, chat, _ = _build(fixed_embedder, chat_client=client, texts={"acme.png": ACME_TEXT})
    _ingest_acme(ingest)

    out = chat.ask(question="How much did I pay?")

    assert out["answer"] == "You paid $42.50 at Acme."
    assert out["refined"] is True

    call = client.calls[0]
    assert call["user_text"] == "How much did I pay?"
    assert '"invoice_number": "INV-000123"' in call["system_text"]
    assert "ACME SUPPLIES" in call["system_text"]
    assert call["temperature"] == 0.7
    assert call["max_tokens"] == 150


def test_empty_refinement_keeps_templated_answer(fixed_embedder):
    ingest, chat, _ = _build(fixed_embedder, chat_client=FakeChatClient(answer="   "), texts={"acme.png": ACME_TEXT})
    _ingest_acme(ingest)

    out = chat.ask(question="anything")

    assert out["refined"] is False
    assert out["answer"].startswith("Found Invoice INV-000123")


def test_empty_question_rejected(fixed_embedder):
    _, chat, _ = _build(fixed_embedder)
    with pytest.raises(ValueError):
        chat.ask(question="   ")


@pytest.mark.parametrize(
    "question, intent",
    [
        ("What is the total cost?", "charge"),
        ("Which invoice number and what total?", "charge"),
        ("Give me the reference", "invoice"),
        ("When was this?", "date"),
        ("Where did I shop?", "store"),
        ("hello there", None),
    ],
)
def test_detect_intent_priority(question, intent):
    assert detect_intent(question) == intent


def test_templated_answer_shapes():
    assert build_templated_answer("when", ACME_FIELDS) == (
        "Found Invoice INV-000123 from Acme dated 2024-01-05 totaling $42.50. "
        "This invoice is dated 2024-01-05. "
        "Is there anything specific about the timing you'd like to discuss?"
    )
    assert build_templated_answer("hi", InvoiceFields()) == (
        "Found a matching invoice. How can I help you with this invoice?"
    )
    # store/date sentence needs both values
    assert build_templated_answer("charge", InvoiceFields(store="Acme", amount="5")) == (
        "Found a matching invoice from Acme totaling $5. "
        "The amount was $5. What would you like to verify about this charge?"
    )


def test_transcript_records_both_turns(fixed_embedder):
    _, chat, _ = _build(fixed_embedder)

    out = chat.ask(question="hi", conversation_id="conv-1")
    chat.ask(question="again", conversation_id="conv-1")

    messages = chat.transcript("conv-1")
    assert out["conversation_id"] == "conv-1"
    assert [m.role for m in messages] == ["user", "assistant", "user", "assistant"]
    assert messages[0].content == "hi"
    assert messages[1].content == ESCALATION_MESSAGE

    with pytest.raises(KeyError):
        chat.transcript("unknown")


def test_conversation_log_evicts_least_recent_transcript():
    log = ConversationLog(max_messages=2, max_conversations=3)
    for cid in ("a", "b", "c"):
        log.append(cid, ChatMessage(role="user", content=cid))

    # touching "a" makes "b" the oldest
    log.append("a", ChatMessage(role="assistant", content="reply"))
    log.append("d", ChatMessage(role="user", content="d"))

    assert len(log) == 3
    assert log.get("b") is None
    assert [m.content for m in log.get("a")] == ["a", "reply"]
    assert log.get("d") is not None


def test_conversation_count_stays_bounded_under_many_new_chats(fixed_embedder):
    _, built, _ = _build(fixed_embedder)
    log = ConversationLog(max_conversations=5)
    chat = InvoiceChatService(query_service=built.query_service, conversation_log=log)
    assert chat.conversation_log is log

    ids = [chat.ask(question=f"question {i}")["conversation_id"] for i in range(50)]

    assert len(chat.conversation_log) == 5
    with pytest.raises(KeyError):
        chat.transcript(ids[0])
    assert len(chat.transcript(ids[-1])) == 2
