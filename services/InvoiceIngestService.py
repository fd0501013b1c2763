# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-06
# Description: InvoiceIngestService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from document.InvoiceRecord import InvoiceRecord
from embedding.InvoiceEmbedder import InvoiceEmbedder
from extractor.InvoiceTextExtractor import InvoiceTextExtractor, ProgressCallback
from parsing.InvoiceFieldParser import InvoiceFieldParser
from services.InvoiceFileService import InvoiceFileService
from utility.exceptions import IngestionError, TextExtractionError
from utility.logging_utils import get_class_logger
from vectorstore.InvoiceVectorStore import InvoiceVectorStore


@dataclass(frozen=True)
class UploadedFile:
    filename: str
    data: bytes
    content_type: Optional[str] = None


class InvoiceIngestService:
    """
    Owns the ingest pipeline, one file at a time:
      - extract text (OCR)
      - reject near-empty text
      - parse invoice fields
      - embed
      - keep the original on disk and add the record to the store

    A failure in any step skips that file only.
    """

    def __init__(
            self,
            *,
            extractor: InvoiceTextExtractor,
            parser: InvoiceFieldParser,
            embedder: InvoiceEmbedder,
            store: InvoiceVectorStore,
            file_service: Optional[InvoiceFileService] = None,
            min_text_length: int = 10,
            max_files: int = 4,
            logger: logging.Logger | None = None,
    ) -> None:
        self.extractor = extractor
        self.parser = parser
        self.embedder = embedder
        self.store = store
        self.file_service = file_service
        self.min_text_length = min_text_length
        self.max_files = max_files
        self.logger = logger or get_class_logger(self.__class__)

    def ingest_files(
            self,
            files: Sequence[UploadedFile],
            *,
            on_progress: Optional[ProgressCallback] = None,
    ) -> Dict[str, Any]:
        """
        Returns:
            {
                "processed_count": int,
                "invoices": [ {id, filename, fields, text_length}, ... ],
                "skipped": [ {filename, reason}, ... ],
            }
        """
        if not files:
            raise ValueError("files must not be empty")
        if len(files) > self.max_files:
            raise ValueError(f"at most {self.max_files} files per upload, got {len(files)}")

        processed: List[Dict[str, Any]] = []
        skipped: List[Dict[str, str]] = []

        for f in files:
            try:
                record = self._process_single_file(f, on_progress=on_progress)
                processed.append({
                    "id": record.id,
                    "filename": record.filename,
                    "fields": record.fields.to_dict(),
                    "text_length": record.text_length,
                })
            except IngestionError as e:
                self.logger.warning("Skipped '%s': %s", f.filename, e.reason)
                skipped.append({"filename": f.filename, "reason": e.reason})
            except Exception as e:
                self.logger.error("Failed ingest for '%s': %s", f.filename, e, exc_info=True)
                skipped.append({"filename": f.filename, "reason": "processing failed"})

        self.logger.info(
            "Upload ingest complete: %d/%d files indexed",
            len(processed),
            len(files),
        )
        return {"processed_count": len(processed), "invoices": processed, "skipped": skipped}

    def _process_single_file(
            self,
            f: UploadedFile,
            *,
            on_progress: Optional[ProgressCallback] = None,
    ) -> InvoiceRecord:
        self.logger.info("Processing file '%s' (%d bytes)", f.filename, len(f.data or b""))

        if not self.extractor.is_supported(f.filename):
            raise IngestionError(f.filename, "unsupported file type")

        try:
            text = self.extractor.extract(f.data, filename=f.filename, on_progress=on_progress)
        except TextExtractionError as e:
            self.logger.warning("OCR failed for '%s', treating as no text: %s", f.filename, e.reason)
            text = ""

        if len(text) < self.min_text_length:
            raise IngestionError(f.filename, "insufficient text extracted")

        fields = self.parser.parse(text)
        embedding = self.embedder.embed(text)

        invoice_id = InvoiceRecord.new_id()
        filepath = None
        if self.file_service:
            filepath = self.file_service.save_bytes(filename=f.filename, data=f.data, file_id=invoice_id)

        record = InvoiceRecord(
            id=invoice_id,
            filename=f.filename,
            text=text,
            embedding=embedding,
            fields=fields,
            filepath=filepath,
        )

        try:
            self.store.add(record)
        except Exception:
            if self.file_service:
                self.file_service.delete_file(filepath)
            raise

        self.logger.info(
            "Ingested '%s' as id='%s' (embedding=%s, fields=%r)",
            f.filename,
            record.id,
            self.embedder.last_strategy,
            fields,
        )
        return record
