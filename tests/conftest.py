"""Pytest configuration and shared fixtures."""

import os
from pathlib import Path

import pytest

from choretally.core.cipher import CipherCodec
from choretally.core.document_store import DocumentStore


@pytest.fixture
def encryption_key() -> bytes:
    """Random 256-bit key per test."""
    return os.urandom(32)


@pytest.fixture
def codec(encryption_key: bytes) -> CipherCodec:
    return CipherCodec(encryption_key)


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    """Location of the encrypted document; not created until the first save."""
    return tmp_path / "data" / "data.enc"


@pytest.fixture
def document_store(monkeypatch: pytest.MonkeyPatch, data_file: Path, codec: CipherCodec) -> DocumentStore:
    """Real encrypted store in a temp directory, installed as the process-wide store."""
    store = DocumentStore(data_file, codec)
    monkeypatch.setattr("choretally.core.document_store._document_store", store)
    return store
