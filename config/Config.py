# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: Config
# -----------------------------------------------------------------------------

import os
from dataclasses import dataclass
from dotenv import load_dotenv, find_dotenv

# Load .env once globally
load_dotenv(find_dotenv(usecwd=True), override=True)


@dataclass(frozen=True)
class Config:
    # OpenAI (embeddings, chat refinement, speech)
    openai_api_key: str = ""
    openai_base_url: str = ""
    openai_chat_model: str = "gpt-4o-mini"
    openai_embed_model: str = "text-embedding-3-small"

    # Speech pass-through
    openai_tts_model: str = "tts-1"
    openai_tts_voice: str = "alloy"
    openai_stt_model: str = "whisper-1"

    # ---- Single source of truth: field_name -> ENV VAR NAME ----
    ENV_VARS = {
        "openai_api_key": "OPENAI_API_KEY",
        "openai_base_url": "OPENAI_BASE_URL",      # e.g. https://api.openai.com/v1
        "openai_chat_model": "OPENAI_CHAT_MODEL",
        "openai_embed_model": "INVOICE_EMBED_MODEL",
        "openai_tts_model": "INVOICE_TTS_MODEL",
        "openai_tts_voice": "INVOICE_TTS_VOICE",
        "openai_stt_model": "INVOICE_STT_MODEL",
    }

    OPENAI_ENV_VARS = (
        "OPENAI_API_KEY",
        "OPENAI_CHAT_MODEL",
    )

    @staticmethod
    def from_env() -> "Config":
        """
        Build Config object from environment variables.

        Unset variables keep the dataclass defaults. Nothing here is
        mandatory: without OPENAI_API_KEY the app runs on the local
        fallback embedding and templated answers only.
        """
        kwargs = {}
        for field_name, env_name in Config.ENV_VARS.items():
            value = (os.getenv(env_name) or "").strip()
            if value:
                kwargs[field_name] = value
        return Config(**kwargs)

    @property
    def openai_configured(self) -> bool:
        return bool(self.openai_api_key)

    def summary(self) -> dict:
        """Return a safe, non-sensitive summary for logging."""
        return {
            "openai_configured": self.openai_configured,
            "openai_base_url": self.openai_base_url or None,
            "openai_chat_model": self.openai_chat_model,
            "openai_embed_model": self.openai_embed_model,
            "openai_tts_model": self.openai_tts_model,
            "openai_stt_model": self.openai_stt_model,
        }
