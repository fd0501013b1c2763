# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: invoices.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, HTTPException

from api.errors import internal_error
from api.dependencies import get_document_service
from api.schemas.invoices import (
    DeleteInvoiceResponse,
    GetInvoiceResponse,
    InvoiceDetail,
    InvoiceInfo,
    ListInvoicesResponse,
)
from services.InvoiceDocumentService import InvoiceDocumentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/invoices", tags=["invoices"])


@router.get("", response_model=ListInvoicesResponse)
def get_invoices(
        svc: InvoiceDocumentService = Depends(get_document_service),
) -> ListInvoicesResponse:
    logger.info("GET /invoices (start)")
    try:
        invoices = [InvoiceInfo(**d) for d in svc.list_invoices()]
    except Exception as e:
        logger.exception("GET /invoices -> 500: %s", e)
        raise internal_error("list invoices failed", e)

    logger.info("GET /invoices (done) count=%d", len(invoices))
    return ListInvoicesResponse(count=len(invoices), invoices=invoices)


@router.get("/{invoice_id}", response_model=GetInvoiceResponse)
def get_invoice(
        invoice_id: str,
        svc: InvoiceDocumentService = Depends(get_document_service),
) -> GetInvoiceResponse:
    invoice_id = (invoice_id or "").strip()
    logger.info("GET /invoices/{invoice_id} (start) invoice_id='%s'", invoice_id)

    if not invoice_id:
        raise HTTPException(status_code=400, detail="invoice_id must not be empty")

    try:
        raw = svc.get_invoice(invoice_id)
    except KeyError as e:
        logger.warning("GET /invoices/{invoice_id} -> 404 invoice_id='%s'", invoice_id)
        raise HTTPException(status_code=404, detail="Invoice not found") from e
    except Exception as e:
        logger.exception("GET /invoices/{invoice_id} -> 500 invoice_id='%s': %s", invoice_id, e)
        raise internal_error("get invoice failed", e)

    logger.info("GET /invoices/{invoice_id} (done) invoice_id='%s'", invoice_id)
    return GetInvoiceResponse(invoice=InvoiceDetail(**raw))


@router.delete("/{invoice_id}", response_model=DeleteInvoiceResponse)
def delete_invoice(
        invoice_id: str,
        svc: InvoiceDocumentService = Depends(get_document_service),
) -> DeleteInvoiceResponse:
    invoice_id = (invoice_id or "").strip()
    logger.info("DELETE /invoices/{invoice_id} (start) invoice_id='%s'", invoice_id)

    if not invoice_id:
        raise HTTPException(status_code=400, detail="invoice_id must not be empty")

    try:
        deleted = svc.delete_invoice(invoice_id)
    except KeyError as e:
        logger.warning("DELETE /invoices/{invoice_id} -> 404 invoice_id='%s'", invoice_id)
        raise HTTPException(status_code=404, detail="Invoice not found") from e
    except Exception as e:
        logger.exception("DELETE /invoices/{invoice_id} -> 500 invoice_id='%s': %s", invoice_id, e)
        raise internal_error("Failed to delete invoice", e)

    logger.info("DELETE /invoices/{invoice_id} (done) invoice_id='%s'", invoice_id)
    return DeleteInvoiceResponse(id=invoice_id, deleted=deleted)
