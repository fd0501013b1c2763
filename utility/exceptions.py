# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: exceptions.py
# -----------------------------------------------------------------------------
"""
Exception hierarchy for the invoice assistant.

    InvoiceAssistantError (base)
    ├── InvoiceValidationError       -> 400 at the API boundary
    ├── IngestionError               -> one file skipped, batch continues
    │   └── TextExtractionError
    ├── ExternalServiceError         -> absorbed (fallback / templated answer)
    │   └── ServiceNotConfiguredError  -> 503 for speech endpoints
    ├── EmbeddingDimensionError      -> store inconsistency, propagates
    └── InvoiceNotFoundError (+KeyError) -> 404
"""
from typing import Any, Dict, Optional


class InvoiceAssistantError(Exception):
    """Base exception carrying a message plus optional diagnostic details."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class InvoiceValidationError(InvoiceAssistantError):
    pass


class IngestionError(InvoiceAssistantError):
    """Raised for a single file that cannot be turned into an InvoiceRecord."""

    def __init__(self, filename: str, reason: str):
        super().__init__(f"Ingestion failed for '{filename}': {reason}", {"filename": filename})
        self.filename = filename
        self.reason = reason


class TextExtractionError(IngestionError):
    pass


class ExternalServiceError(InvoiceAssistantError):
    pass


class ServiceNotConfiguredError(ExternalServiceError):
    def __init__(self, service: str):
        super().__init__(f"{service} service not configured", {"service": service})
        self.service = service


class EmbeddingDimensionError(InvoiceAssistantError):
    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Embedding dimension mismatch: expected {expected}, got {actual}",
            {"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvoiceNotFoundError(InvoiceAssistantError, KeyError):
    def __init__(self, invoice_id: str):
        super().__init__(f"Invoice '{invoice_id}' not found", {"invoice_id": invoice_id})
        self.invoice_id = invoice_id

    def __str__(self) -> str:
        return self.message
