# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: InvoiceVectorStore
# -----------------------------------------------------------------------------

from typing import List, Optional, Protocol, runtime_checkable

from document.InvoiceRecord import InvoiceRecord


@runtime_checkable
class InvoiceVectorStore(Protocol):
    dim: int

    def add(self, record: InvoiceRecord) -> None:
        ...

    def get(self, invoice_id: str) -> Optional[InvoiceRecord]:
        ...

    def delete(self, invoice_id: str) -> bool:
        ...

    def list(self) -> List[InvoiceRecord]:
        ...

    def count(self) -> int:
        ...
