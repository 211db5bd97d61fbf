"""AES-256-GCM codec for the document file.

The backing file holds one JSON record::

    {"iv": "<24 hex chars>", "tag": "<32 hex chars>", "data": "<hex ciphertext>"}

``data`` decrypted under the fixed key and ``iv``, with ``tag`` verified,
yields the UTF-8 JSON document.
"""

import json
import os
from typing import NamedTuple

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from choretally.core.config import constants
from choretally.core.errors import DocumentFormatError, IntegrityError


class Envelope(NamedTuple):
    """Encrypted payload: IV, authentication tag and ciphertext."""

    iv: bytes
    tag: bytes
    ciphertext: bytes

    def to_json(self) -> str:
        """Encode as the on-disk JSON record."""
        return json.dumps(
            {
                "iv": self.iv.hex(),
                "tag": self.tag.hex(),
                "data": self.ciphertext.hex(),
            }
        )

    @classmethod
    def from_json(cls, text: str) -> "Envelope":
        """Decode the on-disk JSON record.

        Raises:
            DocumentFormatError: If the record is not valid JSON, misses a field,
                holds non-hex values, or has an IV/tag of the wrong length
        """
        try:
            record = json.loads(text)
            iv = bytes.fromhex(record["iv"])
            tag = bytes.fromhex(record["tag"])
            ciphertext = bytes.fromhex(record["data"])
        except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
            msg = f"Malformed encrypted record: {type(e).__name__}"
            raise DocumentFormatError(msg) from e

        if len(iv) != constants.IV_BYTES or len(tag) != constants.TAG_BYTES:
            msg = f"Malformed encrypted record: iv={len(iv)} bytes, tag={len(tag)} bytes"
            raise DocumentFormatError(msg)

        return cls(iv=iv, tag=tag, ciphertext=ciphertext)


class CipherCodec:
    """Authenticated encryption of opaque byte blobs under one fixed 256-bit key."""

    def __init__(self, key: bytes) -> None:
        if len(key) != constants.KEY_BYTES:
            msg = f"Encryption key must be {constants.KEY_BYTES} bytes, got {len(key)}"
            raise ValueError(msg)
        self._aesgcm = AESGCM(key)

    @classmethod
    def from_hex(cls, key_hex: str) -> "CipherCodec":
        """Build a codec from a 64-character hex key."""
        try:
            key = bytes.fromhex(key_hex)
        except ValueError as e:
            msg = "Encryption key must be a hex string"
            raise ValueError(msg) from e
        return cls(key)

    def encrypt(self, plaintext: bytes) -> Envelope:
        """Encrypt with a fresh random 96-bit IV."""
        iv = os.urandom(constants.IV_BYTES)
        sealed = self._aesgcm.encrypt(iv, plaintext, None)
        # AESGCM appends the tag to the ciphertext
        return Envelope(
            iv=iv,
            tag=sealed[-constants.TAG_BYTES :],
            ciphertext=sealed[: -constants.TAG_BYTES],
        )

    def decrypt(self, envelope: Envelope) -> bytes:
        """Verify the tag and return the plaintext.

        Raises:
            IntegrityError: If the tag does not verify (wrong key, tampered or
                corrupted iv/tag/data)
        """
        if len(envelope.iv) != constants.IV_BYTES or len(envelope.tag) != constants.TAG_BYTES:
            msg = "Authentication failed: malformed iv or tag"
            raise IntegrityError(msg)

        try:
            return self._aesgcm.decrypt(envelope.iv, envelope.ciphertext + envelope.tag, None)
        except InvalidTag as e:
            msg = "Authentication failed: wrong key or tampered data"
            raise IntegrityError(msg) from e
