# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: health.py
# -----------------------------------------------------------------------------
import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, Query

from api.errors import internal_error
from api.dependencies import get_health_service
from api.schemas.health import DeepHealthResponse, HealthResponse
from services.InvoiceHealthService import InvoiceHealthService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok", timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/deep", response_model=DeepHealthResponse)
def deep_health_check(
        svc: InvoiceHealthService = Depends(get_health_service),
        run_live_chat: bool = Query(False, description="Send a ping to the chat model"),
) -> DeepHealthResponse:
    logger.info("GET /health/deep called (run_live_chat=%s)", run_live_chat)
    try:
        result = svc.deep_health(run_live_chat=run_live_chat)
    except Exception as e:
        logger.exception("GET /health/deep failed: %s", e)
        raise internal_error("deep health check failed", e)

    logger.info("GET /health/deep completed (status=%s)", result.status)
    return result
