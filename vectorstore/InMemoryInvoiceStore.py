# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: InMemoryInvoiceStore
# -----------------------------------------------------------------------------
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from document.InvoiceRecord import InvoiceRecord
from utility.exceptions import EmbeddingDimensionError
from utility.logging_utils import get_class_logger
from vectorstore.InvoiceVectorStore import InvoiceVectorStore


@dataclass
class InMemoryInvoiceStore(InvoiceVectorStore):
    """
    Process-lifetime store of InvoiceRecords.

    Records are kept in an id index plus an insertion-ordered list; both
    are changed under one lock so a delete is never half-visible. Readers
    take the same lock and get a snapshot.
    """
    dim: int
    logger: Any = None
    _by_id: Dict[str, InvoiceRecord] = field(default_factory=dict, init=False, repr=False)
    _ordered: List[InvoiceRecord] = field(default_factory=list, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        self.logger.info("InMemoryInvoiceStore ready (dim=%d)", self.dim)

    def add(self, record: InvoiceRecord) -> None:
        actual = int(record.embedding.shape[0])
        if actual != self.dim:
            raise EmbeddingDimensionError(expected=self.dim, actual=actual)

        with self._lock:
            if record.id in self._by_id:
                raise ValueError(f"Invoice id '{record.id}' already stored")
            self._by_id[record.id] = record
            self._ordered.append(record)
            total = len(self._ordered)

        self.logger.info("add: id='%s' filename='%s' total=%d", record.id, record.filename, total)

    def get(self, invoice_id: str) -> Optional[InvoiceRecord]:
        with self._lock:
            return self._by_id.get(invoice_id)

    def delete(self, invoice_id: str) -> bool:
        with self._lock:
            record = self._by_id.pop(invoice_id, None)
            if record is None:
                return False
            self._ordered = [r for r in self._ordered if r.id != invoice_id]
            total = len(self._ordered)

        self.logger.info("delete: id='%s' total=%d", invoice_id, total)
        return True

    def list(self) -> List[InvoiceRecord]:
        with self._lock:
            return list(self._ordered)

    def count(self) -> int:
        with self._lock:
            return len(self._ordered)
