# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: conftest.py
# -----------------------------------------------------------------------------

import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

os.environ.setdefault("INVOICE_LOG_TO_FILE", "0")

from embedding.InvoiceEmbedder import InvoiceEmbedder  # noqa: E402
from extractor.InvoiceTextExtractor import InvoiceTextExtractor  # noqa: E402
from utility.exceptions import TextExtractionError  # noqa: E402

DIM = 8

ACME_TEXT = (
    "ACME SUPPLIES\n"
    "Store: Acme\n"
    "Invoice Number: INV-000123\n"
    "Date: 2024-01-05\n"
    "Total: $42.50\n"
)


class FakeExtractor(InvoiceTextExtractor):
    """Returns canned text per filename; a value of None simulates an OCR crash."""

    def __init__(self, texts: Dict[str, Optional[str]]):
        super().__init__()
        self.texts = texts
        self.progress: List[int] = []

    def extract(self, data, *, filename="", on_progress=None):
        text = self.texts.get(filename, "")
        if text is None:
            raise TextExtractionError(filename, "OCR failed: simulated")
        if on_progress:
            on_progress(0)
            on_progress(100)
        return text


class FixedEmbedding:
    """Maps known texts to preset vectors; anything else gets `default`."""
    name = "fixed"

    def __init__(self, vectors: Dict[str, List[float]], default: Optional[List[float]] = None):
        self.vectors = vectors
        self.default = default if default is not None else [1.0] + [0.0] * (DIM - 1)
        self.calls: List[str] = []

    def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        for key, vec in self.vectors.items():
            if key in text:
                return np.asarray(vec, dtype=np.float32)
        return np.asarray(self.default, dtype=np.float32)


class FailingEmbedding:
    name = "remote"

    def embed(self, text: str) -> np.ndarray:
        raise RuntimeError("embedding service down")


class FakeChatClient:
    def __init__(self, answer: str = "", error: Optional[Exception] = None):
        self.answer = answer
        self.error = error
        self.calls: List[dict] = []

    def simple_chat(self, user_text: str, system_text: Optional[str] = None, **kwargs) -> dict:
        self.calls.append({"user_text": user_text, "system_text": system_text, **kwargs})
        if self.error is not None:
            raise self.error
        return {"answer": self.answer, "raw": None, "usage": None, "model": "fake"}


@pytest.fixture
def fixed_embedder() -> InvoiceEmbedder:
    # everything lands on the same unit vector -> similarity 1.0
    return InvoiceEmbedder(dim=DIM, remote=FixedEmbedding({}))
