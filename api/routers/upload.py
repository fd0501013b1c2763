# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: api/routers/upload.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from starlette.concurrency import run_in_threadpool

import settings
from api.errors import internal_error
from api.dependencies import get_ingest_service
from api.schemas.invoices import UploadInvoicesResponse
from services.InvoiceIngestService import InvoiceIngestService, UploadedFile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/upload", tags=["upload"])


@router.post("", response_model=UploadInvoicesResponse)
async def upload_invoices(
        files: Optional[List[UploadFile]] = File(None),
        svc: InvoiceIngestService = Depends(get_ingest_service),
) -> UploadInvoicesResponse:
    if not files:
        raise HTTPException(status_code=400, detail="No files uploaded")
    if len(files) > settings.MAX_FILES_PER_UPLOAD:
        logger.warning("POST /upload -> 400 (too many files) files=%d", len(files))
        raise HTTPException(
            status_code=400,
            detail=f"At most {settings.MAX_FILES_PER_UPLOAD} files per upload",
        )

    logger.info("POST /upload (start) files=%d", len(files))

    batch: List[UploadedFile] = []
    for f in files:
        filename = (f.filename or "").strip() or "upload.bin"
        try:
            data = await f.read()
        finally:
            await f.close()

        if len(data) > settings.MAX_UPLOAD_BYTES:
            logger.warning("POST /upload -> 400 (file too large) filename='%s' bytes=%d", filename, len(data))
            raise HTTPException(
                status_code=400,
                detail=f"'{filename}' exceeds {settings.MAX_UPLOAD_BYTES} bytes",
            )
        batch.append(UploadedFile(filename=filename, data=data, content_type=f.content_type))

    try:
        out: Dict[str, Any] = await run_in_threadpool(svc.ingest_files, batch)
    except Exception as e:
        logger.exception("upload_invoices failed: %s", e)
        raise internal_error("Upload processing failed", e)

    logger.info(
        "POST /upload (done) processed=%d skipped=%d",
        out["processed_count"],
        len(out["skipped"]),
    )
    return UploadInvoicesResponse(**out)
