# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-07
# Description: InvoiceQueryService
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from document.InvoiceRecord import ScoredMatch
from embedding.InvoiceEmbedder import InvoiceEmbedder
from retrieval.InvoiceRetriever import InvoiceRetriever


@dataclass
class InvoiceQueryService:
    embedder: InvoiceEmbedder
    retriever: InvoiceRetriever
    n_results: int = 3

    def query(self, query_text: str, n_results: Optional[int] = None) -> List[ScoredMatch]:
        # Embed the question with the same strategy selection as ingestion
        vector = self.embedder.embed(query_text)
        return self.retriever.search(vector, k=n_results or self.n_results)

    @staticmethod
    def to_hits(matches: List[ScoredMatch], include_text: bool = False) -> List[Dict[str, Any]]:
        """Flatten ScoredMatch objects into plain dicts for logging/prompting."""
        hits: List[Dict[str, Any]] = []
        for m in matches:
            hit: Dict[str, Any] = {
                "id": m.record.id,
                "filename": m.record.filename,
                "score": m.score,
                "fields": m.record.fields.to_dict(),
            }
            if include_text:
                hit["text"] = m.record.text
            hits.append(hit)
        return hits
