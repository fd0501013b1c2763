# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: InvoiceRetriever
# -----------------------------------------------------------------------------
from typing import List, Sequence

import numpy as np

from document.InvoiceRecord import ScoredMatch
from utility.exceptions import EmbeddingDimensionError
from utility.logging_utils import get_class_logger
from vectorstore.InvoiceVectorStore import InvoiceVectorStore


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    dot(a, b) / (|a| * |b|), defined as 0.0 when either norm is zero.
    Vectors of different length raise EmbeddingDimensionError.
    """
    va = np.asarray(a, dtype=np.float64).reshape(-1)
    vb = np.asarray(b, dtype=np.float64).reshape(-1)
    if va.shape[0] != vb.shape[0]:
        raise EmbeddingDimensionError(expected=va.shape[0], actual=vb.shape[0])

    denom = float(np.linalg.norm(va)) * float(np.linalg.norm(vb))
    if denom == 0.0:
        return 0.0
    return float(np.dot(va, vb) / denom)


class InvoiceRetriever:
    """Brute-force cosine top-K over every record in the store."""

    def __init__(self, store: InvoiceVectorStore, *, default_k: int = 3, logger=None):
        self.store = store
        self.default_k = default_k
        self.logger = logger or get_class_logger(self.__class__)

    def search(self, query_vector: Sequence[float], k: int | None = None) -> List[ScoredMatch]:
        k = self.default_k if k is None else k
        if k < 1:
            raise ValueError("k must be >= 1")

        query = np.asarray(query_vector, dtype=np.float64).reshape(-1)
        if query.shape[0] != self.store.dim:
            raise EmbeddingDimensionError(expected=self.store.dim, actual=query.shape[0])

        records = self.store.list()
        scored = [ScoredMatch(record=r, score=cosine_similarity(query, r.embedding)) for r in records]

        # sorted() is stable, so equal scores keep store insertion order
        ranked = sorted(scored, key=lambda m: m.score, reverse=True)[:k]

        self.logger.debug(
            "search: candidates=%d k=%d top=%s",
            len(records),
            k,
            f"{ranked[0].score:.4f}" if ranked else None,
        )
        return ranked
