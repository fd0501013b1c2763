# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: health.py
# -----------------------------------------------------------------------------
from typing import Dict

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    timestamp: str


class HealthSummary(BaseModel):
    invoice_count: int
    embedding_dim: int
    total: int
    passed: int


class DeepHealthResponse(BaseModel):
    status: str
    results: Dict[str, bool]
    summary: HealthSummary
