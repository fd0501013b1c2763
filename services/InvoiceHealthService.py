# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: InvoiceHealthService.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Dict, Optional

from api.schemas.health import DeepHealthResponse, HealthSummary
from chat.OpenAIChat import OpenAIChat
from embedding.InvoiceEmbedder import InvoiceEmbedder
from extractor.InvoiceTextExtractor import InvoiceTextExtractor
from services.InvoiceSpeechService import InvoiceSpeechService
from vectorstore.InvoiceVectorStore import InvoiceVectorStore


@dataclass
class InvoiceHealthService:
    """
    Reports which collaborators are usable. Missing optional services show
    up as False without failing the probe; only OCR is required for
    overall "ok".
    """
    extractor: InvoiceTextExtractor
    embedder: InvoiceEmbedder
    store: InvoiceVectorStore
    speech_service: InvoiceSpeechService
    chat_client: Optional[OpenAIChat] = None

    def deep_health(self, run_live_chat: bool = False) -> DeepHealthResponse:
        results: Dict[str, bool] = {
            "ocr": self.extractor.tesseract_available(),
            "remote_embedding": self.embedder.remote is not None,
            "chat_refinement": self.chat_client is not None,
            "speech": self.speech_service.configured,
        }
        if run_live_chat and self.chat_client is not None:
            results["chat_live"] = self.chat_client.healthcheck()

        return DeepHealthResponse(
            status="ok" if results["ocr"] else "degraded",
            results=results,
            summary=HealthSummary(
                invoice_count=self.store.count(),
                embedding_dim=self.store.dim,
                total=len(results),
                passed=sum(1 for ok in results.values() if ok),
            ),
        )
