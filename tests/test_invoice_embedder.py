# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_invoice_embedder.py
# -----------------------------------------------------------------------------
import math

import numpy as np
import pytest

from config.Config import Config
from conftest import FailingEmbedding, FixedEmbedding
from embedding.InvoiceEmbedder import (
    InvoiceEmbedder,
    LocalFallbackEmbedding,
    RemoteEmbedding,
    fit_dimension,
    rolling_hash32,
)


def test_rolling_hash_wraps_to_signed_32_bit():
    assert rolling_hash32("") == 0
    assert rolling_hash32("a") == 97
    assert rolling_hash32("ab") == 97 * 31 + 98

    h = rolling_hash32("x" * 200)
    assert -(2 ** 31) <= h < 2 ** 31


def test_local_fallback_is_deterministic_and_sized():
    emb = LocalFallbackEmbedding(dim=16)
    v1 = emb.embed("Invoice INV-000123")
    v2 = emb.embed("Invoice INV-000123")

    assert v1.shape == (16,)
    assert np.array_equal(v1, v2)

    h = rolling_hash32("Invoice INV-000123")
    assert v1[3] == pytest.approx(math.sin(h + 3) * 0.1, abs=1e-6)
    assert np.all(np.abs(v1) <= 0.1 + 1e-6)


def test_fit_dimension_pads_and_trims():
    assert fit_dimension(np.ones(3), 5).tolist() == [1, 1, 1, 0, 0]
    assert fit_dimension(np.arange(6), 4).tolist() == [0, 1, 2, 3]
    assert fit_dimension(np.ones(4), 4).shape == (4,)


def test_without_remote_uses_fallback():
    embedder = InvoiceEmbedder(dim=12)
    vec = embedder.embed("hello")

    assert embedder.last_strategy == "local_fallback"
    assert vec.shape == (12,)


def test_remote_failure_falls_back():
    embedder = InvoiceEmbedder(dim=12, remote=FailingEmbedding())
    vec = embedder.embed("hello")

    assert embedder.last_strategy == "local_fallback"
    assert np.array_equal(vec, LocalFallbackEmbedding(12).embed("hello"))


def test_remote_vector_is_fitted_to_process_dimension():
    embedder = InvoiceEmbedder(dim=4, remote=FixedEmbedding({}, default=[1, 2, 3, 4, 5, 6]))
    vec = embedder.embed("anything")

    assert embedder.last_strategy == "fixed"
    assert vec.tolist() == [1, 2, 3, 4]


def test_from_config_without_key_has_no_remote():
    embedder = InvoiceEmbedder.from_config(Config(), dim=8)
    assert embedder.remote is None
    assert embedder.select_strategy() is embedder.fallback


def test_remote_client_has_bounded_timeout_and_no_sdk_retries():
    remote = RemoteEmbedding(Config(openai_api_key="sk-test"), dim=8, request_timeout=12.5)

    assert remote.client.timeout == 12.5
    assert remote.client.max_retries == 0


def test_from_config_passes_request_timeout():
    embedder = InvoiceEmbedder.from_config(Config(openai_api_key="sk-test"), dim=8, request_timeout=7.0)

    assert isinstance(embedder.remote, RemoteEmbedding)
    assert embedder.remote.client.timeout == 7.0
