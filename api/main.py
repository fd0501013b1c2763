# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: main.py
# -----------------------------------------------------------------------------
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import settings
from api.routers import chat, health, invoices, speech, upload

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",)
logger = logging.getLogger(__name__)

app = FastAPI(title="Invoice Voice Assistant API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(health.router)
app.include_router(upload.router)
app.include_router(chat.router)
app.include_router(invoices.router)
app.include_router(speech.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s: %s", request.method, request.url.path, exc)
    body = {"error": "Internal server error"}
    if settings.DEBUG_ERRORS:
        body["details"] = str(exc)
    return JSONResponse(status_code=500, content=body)
