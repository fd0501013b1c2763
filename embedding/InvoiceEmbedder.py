# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-04
# Description: InvoiceEmbedder
# -----------------------------------------------------------------------------
import math
import time
from typing import Optional, Protocol, runtime_checkable

import numpy as np
from openai import OpenAI

from config.Config import Config
from utility.exceptions import ExternalServiceError
from utility.logging_utils import get_class_logger


def fit_dimension(vec: np.ndarray, dim: int) -> np.ndarray:
    """Zero-pad or trim a vector to exactly `dim` components."""
    arr = np.asarray(vec, dtype=np.float32).reshape(-1)
    if arr.shape[0] == dim:
        return arr
    if arr.shape[0] > dim:
        return arr[:dim].copy()
    out = np.zeros(dim, dtype=np.float32)
    out[: arr.shape[0]] = arr
    return out


def rolling_hash32(text: str) -> int:
    """hash = hash * 31 + code point, wrapped to a signed 32-bit integer."""
    h = 0
    for ch in text:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
    if h >= 0x80000000:
        h -= 0x100000000
    return h


@runtime_checkable
class EmbeddingStrategy(Protocol):
    name: str

    def embed(self, text: str) -> np.ndarray:
        ...


class LocalFallbackEmbedding:
    """
    Deterministic, network-free embedding: component i = sin(hash + i) * 0.1.

    Structurally valid but semantically weak; it only keeps ingestion and
    chat working when the remote service is missing or failing.
    """
    name = "local_fallback"

    def __init__(self, dim: int):
        self.dim = dim

    def embed(self, text: str) -> np.ndarray:
        h = rolling_hash32(text or "")
        return np.asarray([math.sin(h + i) * 0.1 for i in range(self.dim)], dtype=np.float32)


class RemoteEmbedding:
    """OpenAI embeddings API with a short retry/backoff loop."""
    name = "remote"

    def __init__(
            self,
            cfg: Config,
            *,
            dim: int,
            max_retries: int = 2,
            request_timeout: float = 30.0,
            client: Optional[OpenAI] = None,
            logger=None,
    ):
        self.cfg = cfg
        self.dim = dim
        self.max_retries = max_retries
        self.request_timeout = request_timeout
        self.model = cfg.openai_embed_model
        self.logger = logger or get_class_logger(self.__class__)

        # retries are driven by embed(), not by the SDK
        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url or None,
            timeout=request_timeout,
            max_retries=0,
        )
        self.logger.info(
            "OpenAI embedder initialised (model=%s, dim=%d, timeout=%.1fs)",
            self.model, self.dim, self.request_timeout,
        )

    def embed(self, text: str) -> np.ndarray:
        delay = 0.8
        for attempt in range(1, self.max_retries + 1):
            try:
                resp = self.client.embeddings.create(
                    model=self.model,
                    input=text,
                    dimensions=self.dim,
                )
                return np.asarray(resp.data[0].embedding, dtype=np.float32)
            except Exception as e:
                self.logger.warning(
                    "Embedding call failed (attempt %d/%d): %s", attempt, self.max_retries, e
                )
                if attempt == self.max_retries:
                    raise ExternalServiceError("embedding request failed", {"model": self.model}) from e
                time.sleep(delay)
                delay *= 1.7  # backoff

        # Unreachable and include for type checkers
        raise ExternalServiceError("embedding request failed", {"model": self.model})


class InvoiceEmbedder:
    """
    Picks an embedding strategy per call: remote when configured, local
    fallback when not configured or when the remote call fails. Every
    vector leaves here with exactly `dim` components.
    """

    def __init__(
            self,
            *,
            dim: int,
            remote: Optional[EmbeddingStrategy] = None,
            fallback: Optional[EmbeddingStrategy] = None,
            logger=None,
    ):
        self.dim = dim
        self.remote = remote
        self.fallback = fallback or LocalFallbackEmbedding(dim)
        self.last_strategy: Optional[str] = None
        self.logger = logger or get_class_logger(self.__class__)
        self.logger.info(
            "InvoiceEmbedder initialised (dim=%d, remote=%s)",
            self.dim,
            type(remote).__name__ if remote else None,
        )

    @classmethod
    def from_config(cls, cfg: Config, *, dim: int, request_timeout: float = 30.0) -> "InvoiceEmbedder":
        remote = RemoteEmbedding(cfg, dim=dim, request_timeout=request_timeout) if cfg.openai_configured else None
        return cls(dim=dim, remote=remote)

    def select_strategy(self) -> EmbeddingStrategy:
        return self.remote if self.remote is not None else self.fallback

    def embed(self, text: str) -> np.ndarray:
        strategy = self.select_strategy()
        try:
            vec = strategy.embed(text)
        except Exception as e:
            if strategy is self.fallback:
                raise
            self.logger.warning("Remote embedding unavailable, using local fallback: %s", e)
            strategy = self.fallback
            vec = strategy.embed(text)

        self.last_strategy = strategy.name
        vec = np.asarray(vec, dtype=np.float32).reshape(-1)
        if vec.shape[0] != self.dim:
            self.logger.warning(
                "Embedding from '%s' has %d components, fitting to %d",
                strategy.name, vec.shape[0], self.dim,
            )
            vec = fit_dimension(vec, self.dim)
        return vec
