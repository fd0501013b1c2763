# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: InvoiceDocumentService.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, List, Optional

from services.InvoiceFileService import InvoiceFileService
from utility.exceptions import InvoiceNotFoundError
from vectorstore.InvoiceVectorStore import InvoiceVectorStore


class InvoiceDocumentService:
    """
    Invoice facade used by FastAPI
    - list stored invoices (metadata only)
    - get one invoice including its raw OCR text
    - delete an invoice and its stored original
    """

    def __init__(self,
                 *,
                 store: InvoiceVectorStore,
                 file_service: Optional[InvoiceFileService] = None,
                 logger: logging.Logger | None = None, ) -> None:
        self.store = store
        self.file_service = file_service

        self.logger = logger or logging.getLogger(__name__)

        self.logger.info("InvoiceDocumentService initialised successfully (store=%s, files=%s)",
                         type(store).__name__, type(file_service).__name__ if file_service else None)

    def list_invoices(self) -> List[Dict[str, Any]]:
        records = self.store.list()
        self.logger.info("list_invoices: count=%d", len(records))
        return [r.summary() for r in records]

    def get_invoice(self, invoice_id: str) -> Dict[str, Any]:
        record = self.store.get(invoice_id)
        if record is None:
            raise InvoiceNotFoundError(invoice_id)

        out = record.summary()
        out["text"] = record.text
        return out

    def delete_invoice(self, invoice_id: str) -> bool:
        record = self.store.get(invoice_id)
        if record is None or not self.store.delete(invoice_id):
            raise InvoiceNotFoundError(invoice_id)

        file_deleted = False
        if self.file_service is not None:
            file_deleted = self.file_service.delete_file(record.filepath)

        self.logger.info("delete_invoice: id='%s' file_deleted=%s", invoice_id, file_deleted)
        return True
