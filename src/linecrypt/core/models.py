"""
Base data models for encrypted lines
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class EncryptedRecord:
    """One encrypted line before text encoding.

    Field order matches the wire layout: salt, nonce, ciphertext, tag.
    ``tag`` is empty for algorithms without an integrity tag.
    """

    salt: bytes
    nonce: bytes
    ciphertext: bytes
    tag: bytes = b""

    def to_bytes(self) -> bytes:
        return self.salt + self.nonce + self.ciphertext + self.tag

    @property
    def sealed(self) -> bytes:
        # ciphertext||tag, the shape CipherAlgorithm.open() expects
        return self.ciphertext + self.tag

    def __repr__(self):
        # sizes only; the bytes themselves are noise in logs
        return (
            f"EncryptedRecord(salt={len(self.salt)}B, nonce={len(self.nonce)}B, "
            f"ciphertext={len(self.ciphertext)}B, tag={len(self.tag)}B)"
        )
