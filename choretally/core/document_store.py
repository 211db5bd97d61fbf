"""Encrypted single-file document store.

The whole application state is one JSON document, encrypted with
AES-256-GCM and written to one file. Every operation loads the document,
mutates it, and writes it back in full. Within a process those sequences are
serialized by a per-store lock; the file itself is replaced atomically so a
crash mid-write leaves the previous version in place.
"""

import asyncio
import contextlib
import json
import logging
import os
import tempfile
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError

from choretally.core.cipher import CipherCodec, Envelope
from choretally.core.config import settings
from choretally.core.errors import DocumentFormatError, IntegrityError, StorageError
from choretally.domain.document import Document
from choretally.domain.repair import repair_document, round_fractional_values


logger = logging.getLogger(__name__)


class DocumentStore:
    """Reads and writes the encrypted document file."""

    def __init__(self, path: Path | str, codec: CipherCodec, *, reset_on_corrupt: bool = False) -> None:
        self.path = Path(path)
        self._codec = codec
        self._reset_on_corrupt = reset_on_corrupt
        self._lock = asyncio.Lock()

    def _read(self) -> tuple[Document, int] | None:
        """Read, decrypt and parse the file.

        Returns:
            The document and the number of fractional values rounded while
            parsing, or None if the file does not exist
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            msg = f"Failed to read document file {self.path}: {e}"
            raise StorageError(msg) from e

        plaintext = self._codec.decrypt(Envelope.from_json(raw))

        try:
            data = json.loads(plaintext)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            msg = f"Decrypted document is not valid JSON: {e}"
            raise DocumentFormatError(msg) from e

        rounded = round_fractional_values(data)

        try:
            return Document.model_validate(data), rounded
        except PydanticValidationError as e:
            first = e.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            msg = (
                f"Decrypted document does not match the expected structure at '{location}': {first['msg']}"
                f" ({e.error_count()} errors)"
            )
            raise DocumentFormatError(msg) from e

    def load(self) -> Document:
        """Load and repair the document.

        A missing file yields an empty document. Unreadable, undecryptable or
        malformed files raise unless the store was built with
        ``reset_on_corrupt=True``, in which case they also yield an empty
        document.

        Raises:
            StorageError: If the file exists but cannot be read
            IntegrityError: If the authentication tag does not verify
            DocumentFormatError: If the record or the decrypted JSON is malformed
        """
        try:
            result = self._read()
        except (StorageError, IntegrityError, DocumentFormatError) as e:
            if not self._reset_on_corrupt:
                logger.error(
                    "document_load_failed",
                    extra={"path": str(self.path), "error_code": e.code, "error": e.message},
                )
                raise
            logger.warning(
                "document_load_failed_starting_fresh",
                extra={"path": str(self.path), "error_code": e.code, "error": e.message},
            )
            return Document.empty()

        if result is None:
            logger.info("document_file_missing_starting_fresh", extra={"path": str(self.path)})
            return Document.empty()

        document, rounded = result
        repair_document(document, values_rounded=rounded)
        return document

    def save(self, document: Document) -> None:
        """Encrypt the full document and atomically replace the file.

        Raises:
            StorageError: If writing, syncing or renaming fails
        """
        envelope = self._codec.encrypt(document.model_dump_json().encode("utf-8"))
        payload = envelope.to_json()

        tmp_path: str | None = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            msg = f"Failed to write document file {self.path}: {e}"
            logger.error("document_save_failed", extra={"path": str(self.path), "error": str(e)})
            raise StorageError(msg) from e
        finally:
            if tmp_path is not None:
                with contextlib.suppress(OSError):
                    os.unlink(tmp_path)

        logger.debug("document_saved", extra={"path": str(self.path), "households": len(document.households)})

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[Document]:
        """Load the document, hand it to the caller, and save it on success.

        Nothing is written if the body raises. Transactions on the same store
        run one at a time.
        """
        async with self._lock:
            document = await asyncio.to_thread(self.load)
            yield document
            await asyncio.to_thread(self.save, document)

    async def snapshot(self) -> Document:
        """Load the document for reading without saving it back."""
        async with self._lock:
            return await asyncio.to_thread(self.load)


_document_store: DocumentStore | None = None


def create_document_store() -> DocumentStore:
    """Build a store from the application settings.

    Raises:
        ValueError: If ENCRYPTION_KEY is not configured
    """
    key_hex = settings.require_credential("encryption_key", "Encryption key")
    return DocumentStore(
        settings.data_file,
        CipherCodec.from_hex(key_hex),
        reset_on_corrupt=settings.reset_on_corrupt_store,
    )


def get_document_store() -> DocumentStore:
    """Get the process-wide store, building it from settings on first use."""
    global _document_store  # noqa: PLW0603
    if _document_store is None:
        _document_store = create_document_store()
    return _document_store


def set_document_store(store: DocumentStore | None) -> None:
    """Replace the process-wide store. ``None`` rebuilds from settings on next use."""
    global _document_store  # noqa: PLW0603
    _document_store = store
