# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: api/schemas/common.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """snake_case in Python, camelCase on the wire; either is accepted on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InvoiceFieldsModel(CamelModel):
    invoice_number: Optional[str] = None
    date: Optional[str] = None
    store: Optional[str] = None
    amount: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None
