# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-08
# Description: services/InvoiceSpeechService.py
# -----------------------------------------------------------------------------
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from openai import OpenAI

from config.Config import Config
from utility.exceptions import ServiceNotConfiguredError
from utility.logging_utils import get_class_logger


@dataclass
class InvoiceSpeechService:
    """
    Text-to-speech and speech-to-text pass-through to the OpenAI audio APIs.
    Without an OpenAI key both operations raise ServiceNotConfiguredError.
    """
    cfg: Config
    client: Any = None
    logger: Any = None

    def __post_init__(self) -> None:
        self.logger = self.logger or get_class_logger(self.__class__)
        if self.client is None and self.cfg.openai_configured:
            self.client = OpenAI(
                api_key=self.cfg.openai_api_key,
                base_url=self.cfg.openai_base_url or None,
            )
        self.logger.info("InvoiceSpeechService initialised (configured=%s)", self.configured)

    @property
    def configured(self) -> bool:
        return self.client is not None

    def text_to_speech(self, text: str) -> bytes:
        if not self.configured:
            raise ServiceNotConfiguredError("TTS")

        self.logger.info("text_to_speech: chars=%d model=%s (start)", len(text), self.cfg.openai_tts_model)
        resp = self.client.audio.speech.create(
            model=self.cfg.openai_tts_model,
            voice=self.cfg.openai_tts_voice,
            input=text,
        )
        audio = resp.content
        self.logger.info("text_to_speech: bytes=%d (done)", len(audio))
        return audio

    def speech_to_text(self, *, filename: str, data: bytes) -> str:
        if not self.configured:
            raise ServiceNotConfiguredError("STT")

        self.logger.info("speech_to_text: filename='%s' bytes=%d (start)", filename, len(data))
        transcription = self.client.audio.transcriptions.create(
            file=(filename or "audio.webm", data),
            model=self.cfg.openai_stt_model,
        )
        text = (transcription.text or "").strip()
        self.logger.info("speech_to_text: chars=%d (done)", len(text))
        return text
