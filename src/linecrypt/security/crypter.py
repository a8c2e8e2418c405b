"""Password-based line encryption.

:class:`StringCrypter` ties the pieces together for a single algorithm:

- Argon2id key derivation from the password and a fresh salt
  (:mod:`linecrypt.security.kdf`)
- the cipher transform (:mod:`linecrypt.security.algorithms`)
- base64 framing of ``salt || nonce || ciphertext || tag``
  (:mod:`linecrypt.security.codec`)

Every call is independent: salt and nonce are generated per encrypt call and
the derived key only lives for the duration of one call.
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator

from linecrypt.core.exceptions import DecodeUtf8Error, FormatError
from linecrypt.core.models import EncryptedRecord

from .algorithms import CipherAlgorithm, CipherMode, get_algorithm
from .codec import TextCodec
from .kdf import KdfParams, DEFAULT_KDF_PARAMS, derive_key, generate_salt

logger = logging.getLogger(__name__)


class StringCrypter:
    """
    Encrypts and decrypts single lines of text with one fixed algorithm.

    The algorithm is chosen at construction time and cannot be changed
    afterwards, so a crypter never mixes salt/nonce layouts within a session.
    Instances hold no mutable state and can be shared between threads.
    """

    def __init__(self, algorithm: CipherAlgorithm, kdf_params: KdfParams | None = None):
        self._algorithm = algorithm
        self._kdf_params = kdf_params or DEFAULT_KDF_PARAMS
        self._codec = TextCodec.for_algorithm(algorithm)

    @classmethod
    def for_mode(cls, mode: CipherMode | str, kdf_params: KdfParams | None = None) -> "StringCrypter":
        """Build a crypter from a selector value such as ``"chacha20"`` or ``"sm4"``."""
        return cls(get_algorithm(mode), kdf_params=kdf_params)

    @property
    def algorithm(self) -> CipherAlgorithm:
        return self._algorithm

    @property
    def kdf_params(self) -> KdfParams:
        return self._kdf_params

    @contextmanager
    def _derived_key(self, password: str, salt: bytes) -> Iterator[bytearray]:
        # Zero the key buffer once the call is done (best-effort: the cipher
        # backends may keep their own copies).
        key = bytearray(
            derive_key(password, salt, self._algorithm.key_size, params=self._kdf_params)
        )
        try:
            yield key
        finally:
            for i in range(len(key)):
                key[i] = 0

    def encrypt(self, line: str, password: str) -> str:
        """
        Encrypt ``line`` and return a single-line base64 record.

        A new salt and nonce are drawn from ``os.urandom`` on every call, so
        encrypting the same line twice yields different output.
        """
        try:
            data = line.encode("utf-8")
        except UnicodeEncodeError as e:
            # lone surrogates, e.g. undecodable stdin bytes under surrogateescape
            raise FormatError(f"Line is not encodable as UTF-8: {e}") from e

        salt = generate_salt(self._codec.salt_size)
        nonce = os.urandom(self._algorithm.nonce_size)

        with self._derived_key(password, salt) as key:
            sealed = self._algorithm.seal(key, nonce, data)

        tag_size = self._algorithm.tag_size
        ct_end = len(sealed) - tag_size
        record = EncryptedRecord(salt=salt, nonce=nonce, ciphertext=sealed[:ct_end], tag=sealed[ct_end:])
        logger.debug("sealed %r with %s", record, self._algorithm.name)
        return self._codec.encode(record)

    def decrypt(self, line: str, password: str) -> str:
        """
        Decrypt a record produced by :meth:`encrypt`.

        Raises FormatError for malformed or truncated text, AuthError when the
        tag does not verify (wrong password, wrong algorithm or tampering) and
        DecodeUtf8Error when the recovered bytes are not UTF-8.
        """
        record = self._codec.decode(line)

        with self._derived_key(password, record.salt) as key:
            plaintext = self._algorithm.open(key, record.nonce, record.sealed)

        try:
            return plaintext.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeUtf8Error(f"Decrypted data is not valid UTF-8: {e}") from e

    def __repr__(self):
        return f"StringCrypter(algorithm={self._algorithm.name!r})"
