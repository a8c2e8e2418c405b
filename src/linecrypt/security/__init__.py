"""Security helpers: KDF, cipher algorithms and line framing for linecrypt.

This package provides:
- Argon2id-based key derivation from a password and per-line salt
- ChaCha20-Poly1305 and SM4-CTR + HMAC-SHA256 line ciphers
- base64 framing of salt, nonce, ciphertext and tag
- StringCrypter, which combines the three per line
"""

from .kdf import KdfParams, generate_salt, derive_key, kdf_params_to_dict
from .algorithms import (
    CipherAlgorithm,
    CipherMode,
    ChaCha20CipherAlgorithm,
    Sm4CipherAlgorithm,
    get_algorithm,
    parse_mode,
)
from .codec import TextCodec
from .crypter import StringCrypter

__all__ = [
    "KdfParams",
    "generate_salt",
    "derive_key",
    "kdf_params_to_dict",
    "CipherAlgorithm",
    "CipherMode",
    "ChaCha20CipherAlgorithm",
    "Sm4CipherAlgorithm",
    "get_algorithm",
    "parse_mode",
    "TextCodec",
    "StringCrypter",
]
