# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-09
# Description: api/schemas/speech.py
# -----------------------------------------------------------------------------
from pydantic import BaseModel, Field


class TTSRequest(BaseModel):
    text: str = Field(..., min_length=1, max_length=4096)


class STTResponse(BaseModel):
    transcription: str
