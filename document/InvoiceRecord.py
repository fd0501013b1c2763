# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: InvoiceRecord
# -----------------------------------------------------------------------------
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Literal, Optional

import numpy as np


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class InvoiceFields:
    """Structured fields detected in invoice text. None means not detected."""
    invoice_number: Optional[str] = None
    date: Optional[str] = None
    store: Optional[str] = None
    amount: Optional[str] = None

    def to_dict(self) -> Dict[str, Optional[str]]:
        return asdict(self)

    def is_empty(self) -> bool:
        return not any(self.to_dict().values())


@dataclass(frozen=True)
class InvoiceRecord:
    """
    One ingested invoice. Built in a single step once OCR, parsing and
    embedding have all succeeded; never mutated afterwards.
    """
    id: str
    filename: str
    text: str
    embedding: np.ndarray
    fields: InvoiceFields
    uploaded_at: str = field(default_factory=utc_now_iso)
    filepath: Optional[str] = None

    def __post_init__(self) -> None:
        vec = np.array(self.embedding, dtype=np.float32).reshape(-1)
        vec.flags.writeable = False
        object.__setattr__(self, "embedding", vec)

    @staticmethod
    def new_id() -> str:
        return uuid.uuid4().hex

    @property
    def text_length(self) -> int:
        return len(self.text)

    def summary(self) -> Dict[str, Any]:
        """Metadata view without raw text or embedding."""
        return {
            "id": self.id,
            "filename": self.filename,
            "fields": self.fields.to_dict(),
            "uploaded_at": self.uploaded_at,
            "text_length": self.text_length,
        }


@dataclass(frozen=True)
class ScoredMatch:
    record: InvoiceRecord
    score: float


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["user", "assistant", "system"]
    content: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(default_factory=utc_now_iso)
