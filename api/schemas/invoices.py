# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: invoices.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import List

from pydantic import Field

from api.schemas.common import CamelModel, InvoiceFieldsModel


class InvoiceInfo(CamelModel):
    id: str
    filename: str
    fields: InvoiceFieldsModel
    uploaded_at: str
    text_length: int


class InvoiceDetail(InvoiceInfo):
    text: str


class ListInvoicesResponse(CamelModel):
    count: int
    invoices: List[InvoiceInfo]


class GetInvoiceResponse(CamelModel):
    invoice: InvoiceDetail


class DeleteInvoiceResponse(CamelModel):
    id: str
    deleted: bool
    message: str = "Invoice deleted successfully"


class ProcessedInvoice(CamelModel):
    id: str
    filename: str
    fields: InvoiceFieldsModel
    text_length: int


class SkippedFile(CamelModel):
    filename: str
    reason: str


class UploadInvoicesResponse(CamelModel):
    processed_count: int
    invoices: List[ProcessedInvoice]
    skipped: List[SkippedFile] = Field(default_factory=list)
