# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-11
# Description: api/routers/speech.py
# -----------------------------------------------------------------------------
import logging

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from fastapi.responses import Response
from starlette.concurrency import run_in_threadpool

from api.errors import internal_error
from api.dependencies import get_speech_service
from api.schemas.speech import STTResponse, TTSRequest
from services.InvoiceSpeechService import InvoiceSpeechService
from utility.exceptions import ServiceNotConfiguredError

logger = logging.getLogger(__name__)

router = APIRouter(tags=["speech"])


@router.post("/tts")
def post_tts(
        req: TTSRequest,
        svc: InvoiceSpeechService = Depends(get_speech_service),
) -> Response:
    text = (req.text or "").strip()
    if not text:
        raise HTTPException(status_code=400, detail="Text is required")

    try:
        audio = svc.text_to_speech(text)
    except ServiceNotConfiguredError as e:
        logger.warning("POST /tts -> 503: %s", e)
        raise HTTPException(status_code=503, detail="TTS service not configured")
    except Exception as e:
        logger.exception("POST /tts -> 500: %s", e)
        raise internal_error("Text-to-speech conversion failed", e)

    return Response(content=audio, media_type="audio/mpeg")


@router.post("/stt", response_model=STTResponse)
async def post_stt(
        audio: UploadFile = File(...),
        svc: InvoiceSpeechService = Depends(get_speech_service),
) -> STTResponse:
    try:
        data = await audio.read()
    finally:
        await audio.close()

    if not data:
        raise HTTPException(status_code=400, detail="Audio file is required")

    try:
        text = await run_in_threadpool(svc.speech_to_text, filename=audio.filename or "audio.webm", data=data)
    except ServiceNotConfiguredError as e:
        logger.warning("POST /stt -> 503: %s", e)
        raise HTTPException(status_code=503, detail="STT service not configured")
    except Exception as e:
        logger.exception("POST /stt -> 500: %s", e)
        raise internal_error("Speech-to-text conversion failed", e)

    return STTResponse(transcription=text)
