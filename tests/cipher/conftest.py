from __future__ import annotations

import random

import pytest
from Crypto.Cipher import AES

_rng = random.Random(20251123)


def _randbytes(n: int) -> bytes:
    return bytes(_rng.randrange(0, 256) for _ in range(n))


def _split_blocks(data: bytes, bs: int = 16) -> list[bytes]:
    return [data[i : i + bs] for i in range(0, len(data), bs)]


class FailingTransform:
    """Wrap a transform so it fails on the ``fail_at``-th call."""

    def __init__(self, inner, fail_at: int, raise_error: bool = False) -> None:
        self.inner = inner
        self.fail_at = fail_at
        self.raise_error = raise_error
        self.calls = 0

    def __call__(self, block: bytes) -> bytes | None:
        idx = self.calls
        self.calls += 1
        if idx == self.fail_at:
            if self.raise_error:
                raise RuntimeError("primitive exploded")
            return None
        return self.inner(block)


@pytest.fixture
def randbytes():
    """Deterministic pseudo-random byte strings."""
    return _randbytes


@pytest.fixture
def split_blocks():
    """Cut a byte string into 16-byte blocks, keeping a short tail."""
    return _split_blocks


@pytest.fixture
def key() -> bytes:
    return _randbytes(16)


@pytest.fixture
def iv() -> bytes:
    return _randbytes(16)


@pytest.fixture
def ecb(key):
    """A raw AES block primitive (forward = encrypt, inverse = decrypt)."""
    return AES.new(key, AES.MODE_ECB)


@pytest.fixture
def forward(ecb):
    return ecb.encrypt


@pytest.fixture
def inverse(ecb):
    return ecb.decrypt


@pytest.fixture
def failing_transform():
    return FailingTransform
