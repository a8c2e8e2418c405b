"""Password-based key derivation for linecrypt."""
import os
from dataclasses import dataclass
from typing import Dict

from argon2.exceptions import HashingError
from argon2.low_level import Type, hash_secret_raw

from linecrypt.core.exceptions import ConfigError, FormatError

SALT_SIZE = 16

# Argon2 limits on the output tag and salt length (RFC 9106, section 3.1).
MIN_KEY_LEN = 4
MAX_KEY_LEN = 2**32 - 1
MIN_SALT_LEN = 8


@dataclass(frozen=True)
class KdfParams:
    """Argon2id cost parameters. Both ends of a conversation must agree on them."""

    time_cost: int = 3
    memory_cost: int = 65536
    parallelism: int = 1


DEFAULT_KDF_PARAMS = KdfParams()


def generate_salt(length: int = SALT_SIZE) -> bytes:
    """Return a cryptographically secure random salt."""
    return os.urandom(length)


def derive_key(
    password: bytes | str,
    salt: bytes,
    output_len: int,
    params: KdfParams | None = None,
) -> bytes:
    """
    Derive ``output_len`` key bytes from a password using Argon2id.
    Returns raw derived key bytes.

    Raises ConfigError if the output length or salt falls outside what
    Argon2 accepts, or if Argon2 rejects the cost parameters. Raises
    FormatError if a str password holds lone surrogates.
    """
    if params is None:
        params = DEFAULT_KDF_PARAMS
    if not MIN_KEY_LEN <= output_len <= MAX_KEY_LEN:
        raise ConfigError(
            f"Key length must be between {MIN_KEY_LEN} and {MAX_KEY_LEN} bytes, got {output_len}"
        )
    if len(salt) < MIN_SALT_LEN:
        raise ConfigError(f"Salt must be at least {MIN_SALT_LEN} bytes, got {len(salt)}")

    if isinstance(password, str):
        try:
            password = password.encode("utf-8")
        except UnicodeEncodeError as e:
            raise FormatError(f"Password is not encodable as UTF-8: {e}") from e

    try:
        return hash_secret_raw(
            secret=password,
            salt=salt,
            time_cost=params.time_cost,
            memory_cost=params.memory_cost,
            parallelism=params.parallelism,
            hash_len=output_len,
            type=Type.ID,
        )
    except (HashingError, OverflowError) as e:
        raise ConfigError(f"Argon2id rejected the derivation parameters: {e}") from e


def kdf_params_to_dict(params: KdfParams) -> Dict:
    return {
        "algo": "argon2id",
        "salt_len": SALT_SIZE,
        "time": params.time_cost,
        "memory": params.memory_cost,
        "parallelism": params.parallelism,
    }
