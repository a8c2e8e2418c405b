"""Text framing for encrypted lines.

Layout (before base64):
- salt_size bytes: KDF salt
- nonce_size bytes: cipher nonce
- remaining bytes minus tag_size: ciphertext
- tag_size bytes: authentication tag

Salt, nonce and tag sizes are fixed by the selected algorithm, so no length
prefixes are written. The bytes are encoded as padded standard base64
(RFC 4648), which keeps every record on one whitespace-free line.
"""
from __future__ import annotations

import base64
import binascii

from linecrypt.core.exceptions import FormatError
from linecrypt.core.models import EncryptedRecord
from .algorithms import CipherAlgorithm
from .kdf import SALT_SIZE


class TextCodec:
    def __init__(self, salt_size: int, nonce_size: int, tag_size: int = 0):
        self.salt_size = salt_size
        self.nonce_size = nonce_size
        self.tag_size = tag_size

    @classmethod
    def for_algorithm(cls, algorithm: CipherAlgorithm, salt_size: int = SALT_SIZE) -> "TextCodec":
        return cls(salt_size, algorithm.nonce_size, algorithm.tag_size)

    @property
    def min_length(self) -> int:
        return self.salt_size + self.nonce_size + self.tag_size

    def encode(self, record: EncryptedRecord) -> str:
        if len(record.salt) != self.salt_size or len(record.nonce) != self.nonce_size:
            raise FormatError(
                f"Record framing mismatch: expected {self.salt_size}B salt and "
                f"{self.nonce_size}B nonce, got {len(record.salt)}B and {len(record.nonce)}B"
            )
        if len(record.tag) != self.tag_size:
            raise FormatError(f"Record tag must be {self.tag_size} bytes, got {len(record.tag)}")
        return base64.b64encode(record.to_bytes()).decode("ascii")

    def decode(self, text: str) -> EncryptedRecord:
        try:
            raw = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError) as e:
            # ValueError covers non-ASCII input
            raise FormatError(f"Invalid encoded record: {e}") from e

        if len(raw) < self.min_length:
            raise FormatError(
                f"Encoded record too short: {len(raw)} bytes, need at least {self.min_length}"
            )

        nonce_end = self.salt_size + self.nonce_size
        ct_end = len(raw) - self.tag_size
        return EncryptedRecord(
            salt=raw[: self.salt_size],
            nonce=raw[self.salt_size : nonce_end],
            ciphertext=raw[nonce_end:ct_end],
            tag=raw[ct_end:],
        )
