# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-02
# Description: settings.py
# -----------------------------------------------------------------------------
import os


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    v = _env(name, "")
    if v == "":
        return default
    v = v.lower()
    if v in ("1", "true", "t", "yes", "y", "on"):
        return True
    if v in ("0", "false", "f", "no", "n", "off"):
        return False
    raise RuntimeError(f"Env var {name} must be a boolean, got {v!r}")


# -----------------------------------------------------------------------------
# Runtime environment
# -----------------------------------------------------------------------------
# "development" exposes exception text in 500 responses
ENVIRONMENT = _env("INVOICE_ENV", "production").lower()
DEBUG_ERRORS = ENVIRONMENT == "development"


# -----------------------------------------------------------------------------
# Ingestion
# -----------------------------------------------------------------------------
MAX_FILES_PER_UPLOAD = _env_int("INVOICE_MAX_FILES_PER_UPLOAD", 4)
MAX_UPLOAD_BYTES = _env_int("INVOICE_MAX_UPLOAD_BYTES", 10 * 1024 * 1024)  # 10MB

# OCR output shorter than this is treated as unusable
MIN_TEXT_LENGTH = _env_int("INVOICE_MIN_TEXT_LENGTH", 10)

OCR_LANG = _env("INVOICE_OCR_LANG", "eng")
OCR_TIMEOUT_SECONDS = _env_float("INVOICE_OCR_TIMEOUT_SECONDS", 60.0)

UPLOAD_DIR = _env("INVOICE_UPLOAD_DIR", "./uploads")
KEEP_UPLOADS = _env_bool("INVOICE_KEEP_UPLOADS", True)


# -----------------------------------------------------------------------------
# Embeddings / retrieval
# -----------------------------------------------------------------------------
EMBEDDING_DIM = _env_int("INVOICE_EMBEDDING_DIM", 1536)
TOP_K = _env_int("INVOICE_TOP_K", 3)

# Minimum top cosine score before answering instead of escalating
RELEVANCE_THRESHOLD = _env_float("INVOICE_RELEVANCE_THRESHOLD", 0.7)


# -----------------------------------------------------------------------------
# Answer refinement
# -----------------------------------------------------------------------------
CHAT_TEMPERATURE = _env_float("INVOICE_CHAT_TEMPERATURE", 0.7)
CHAT_MAX_TOKENS = _env_int("INVOICE_CHAT_MAX_TOKENS", 150)
TEXT_PREVIEW_CHARS = _env_int("INVOICE_TEXT_PREVIEW_CHARS", 500)

# Transcripts kept in memory; the least recently used one is dropped first
MAX_CONVERSATIONS = _env_int("INVOICE_MAX_CONVERSATIONS", 1000)
MAX_MESSAGES_PER_CONVERSATION = _env_int("INVOICE_MAX_MESSAGES_PER_CONVERSATION", 200)

# Remote calls (embeddings, chat)
OPENAI_REQUEST_TIMEOUT_SECONDS = _env_float("INVOICE_OPENAI_TIMEOUT_SECONDS", 30.0)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if EMBEDDING_DIM < 1:
    raise RuntimeError("EMBEDDING_DIM must be a positive integer")

if MAX_FILES_PER_UPLOAD < 1:
    raise RuntimeError("MAX_FILES_PER_UPLOAD must be at least 1")

if TOP_K < 1:
    raise RuntimeError("TOP_K must be at least 1")

if MAX_CONVERSATIONS < 1:
    raise RuntimeError("MAX_CONVERSATIONS must be at least 1")
