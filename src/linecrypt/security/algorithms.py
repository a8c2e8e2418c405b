"""Pluggable cipher algorithms for the line crypter.

Each algorithm exposes its key, nonce and tag sizes plus a ``seal``/``open``
pair working on raw bytes. ``seal`` returns ``ciphertext || tag``; ``open``
takes the same shape back and raises :class:`AuthError` when the tag does
not verify.

Two variants exist:

- ``chacha20``: ChaCha20-Poly1305 AEAD (RFC 8439), 32-byte key, 12-byte nonce,
  16-byte tag.
- ``sm4``: SM4-CTR with an HMAC-SHA256 tag over ``nonce || ciphertext``
  (encrypt-then-MAC), 16-byte key, 16-byte initial counter block, 32-byte tag.
  The derived key is split into encryption and MAC subkeys with HKDF.
"""

from __future__ import annotations

import hashlib
import hmac
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes
from cryptography.hazmat.primitives.ciphers.aead import ChaCha20Poly1305
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from linecrypt.core.exceptions import AuthError, ConfigError


class CipherMode(Enum):
    # Selector values accepted on the command line
    CHACHA20 = "chacha20"
    SM4 = "sm4"


DEFAULT_MODE = CipherMode.CHACHA20


class CipherAlgorithm(ABC):
    """Stateless descriptor and transform for one symmetric cipher."""

    name: str = ""
    key_size: int = 0
    nonce_size: int = 0
    tag_size: int = 0

    @abstractmethod
    def seal(self, key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
        """Encrypt ``plaintext`` and return ``ciphertext || tag``."""

    @abstractmethod
    def open(self, key: bytes, nonce: bytes, data: bytes) -> bytes:
        """Verify and decrypt ``ciphertext || tag``; raise AuthError on failure."""

    def _check_inputs(self, key: bytes, nonce: bytes) -> None:
        if len(key) != self.key_size:
            raise ConfigError(f"{self.name} key must be {self.key_size} bytes, got {len(key)}")
        if len(nonce) != self.nonce_size:
            raise ConfigError(f"{self.name} nonce must be {self.nonce_size} bytes, got {len(nonce)}")

    def info(self) -> Dict:
        return {
            "name": self.name,
            "key_bytes": self.key_size,
            "nonce_bytes": self.nonce_size,
            "tag_bytes": self.tag_size,
        }

    def __repr__(self):
        return f"{type(self).__name__}()"


class ChaCha20CipherAlgorithm(CipherAlgorithm):
    name = CipherMode.CHACHA20.value
    key_size = 32
    nonce_size = 12
    tag_size = 16

    def seal(self, key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
        self._check_inputs(key, nonce)
        return ChaCha20Poly1305(bytes(key)).encrypt(nonce, plaintext, None)

    def open(self, key: bytes, nonce: bytes, data: bytes) -> bytes:
        self._check_inputs(key, nonce)
        if len(data) < self.tag_size:
            raise AuthError("Ciphertext too short to contain authentication tag")
        try:
            return ChaCha20Poly1305(bytes(key)).decrypt(nonce, data, None)
        except InvalidTag as e:
            raise AuthError("authentication failed (Poly1305 tag mismatch)") from e


class Sm4CipherAlgorithm(CipherAlgorithm):
    name = CipherMode.SM4.value
    key_size = 16
    nonce_size = 16
    tag_size = 32

    _ENC_INFO = b"linecrypt-sm4-enc"
    _MAC_INFO = b"linecrypt-sm4-mac"

    def _derive_subkey(self, key: bytes, info: bytes, length: int) -> bytes:
        hkdf = HKDF(algorithm=hashes.SHA256(), length=length, salt=None, info=info)
        return hkdf.derive(bytes(key))

    def _mac(self, mac_key: bytes, nonce: bytes, ciphertext: bytes) -> bytes:
        return hmac.new(mac_key, nonce + ciphertext, hashlib.sha256).digest()

    def _ctr(self, enc_key: bytes, nonce: bytes) -> Cipher:
        return Cipher(algorithms.SM4(enc_key), modes.CTR(nonce))

    def seal(self, key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
        self._check_inputs(key, nonce)
        enc_key = self._derive_subkey(key, self._ENC_INFO, self.key_size)
        mac_key = self._derive_subkey(key, self._MAC_INFO, 32)

        encryptor = self._ctr(enc_key, nonce).encryptor()
        ct = encryptor.update(plaintext) + encryptor.finalize()
        return ct + self._mac(mac_key, nonce, ct)

    def open(self, key: bytes, nonce: bytes, data: bytes) -> bytes:
        self._check_inputs(key, nonce)
        if len(data) < self.tag_size:
            raise AuthError("Ciphertext too short to contain authentication tag")
        ct, tag = data[: -self.tag_size], data[-self.tag_size :]

        mac_key = self._derive_subkey(key, self._MAC_INFO, 32)
        expected = self._mac(mac_key, nonce, ct)
        if not hmac.compare_digest(tag, expected):
            raise AuthError("authentication failed (HMAC mismatch)")

        enc_key = self._derive_subkey(key, self._ENC_INFO, self.key_size)
        decryptor = self._ctr(enc_key, nonce).decryptor()
        return decryptor.update(ct) + decryptor.finalize()


_ALGORITHMS: Dict[CipherMode, CipherAlgorithm] = {
    CipherMode.CHACHA20: ChaCha20CipherAlgorithm(),
    CipherMode.SM4: Sm4CipherAlgorithm(),
}


def parse_mode(value: CipherMode | str) -> CipherMode:
    """Turn a selector string (case-insensitive) into a CipherMode."""
    if isinstance(value, CipherMode):
        return value
    try:
        return CipherMode(str(value).strip().lower())
    except ValueError as e:
        choices = ", ".join(m.value for m in CipherMode)
        raise ConfigError(f"Unknown cipher mode {value!r} (expected one of: {choices})") from e


def get_algorithm(mode: CipherMode | str = DEFAULT_MODE) -> CipherAlgorithm:
    """Return the shared, read-only algorithm instance for ``mode``."""
    return _ALGORITHMS[parse_mode(mode)]
