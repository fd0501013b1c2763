# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: api/errors.py
# -----------------------------------------------------------------------------
from fastapi import HTTPException

import settings


def internal_error(message: str, exc: Exception) -> HTTPException:
    """500 with a generic message; exception text only in development."""
    detail = f"{message}: {exc}" if settings.DEBUG_ERRORS else message
    return HTTPException(status_code=500, detail=detail)
