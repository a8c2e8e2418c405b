"""Small helper to build a linecrypt app context for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional
import os

from linecrypt.core.exceptions import ConfigError
from linecrypt.security.algorithms import CipherMode, DEFAULT_MODE, parse_mode
from linecrypt.security.crypter import StringCrypter
from linecrypt.security.kdf import DEFAULT_KDF_PARAMS, KdfParams

ENV_MODE = "LINECRYPT_MODE"
ENV_PASSWORD = "LINECRYPT_PASSWORD"
ENV_TIME_COST = "LINECRYPT_KDF_TIME_COST"
ENV_MEMORY_COST = "LINECRYPT_KDF_MEMORY_COST"
ENV_PARALLELISM = "LINECRYPT_KDF_PARALLELISM"


@dataclass
class AppContext:
    """Container for runtime objects the CLI needs."""

    crypter: StringCrypter
    mode: CipherMode
    kdf_params: KdfParams
    password: Optional[str] = None


def _int_from_env(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from e
    if value < 1:
        raise ConfigError(f"{name} must be positive, got {value}")
    return value


def kdf_params_from_env(env: Optional[Mapping[str, str]] = None) -> KdfParams:
    """Read Argon2id cost overrides from the environment."""
    if env is None:
        env = os.environ
    return KdfParams(
        time_cost=_int_from_env(env, ENV_TIME_COST, DEFAULT_KDF_PARAMS.time_cost),
        memory_cost=_int_from_env(env, ENV_MEMORY_COST, DEFAULT_KDF_PARAMS.memory_cost),
        parallelism=_int_from_env(env, ENV_PARALLELISM, DEFAULT_KDF_PARAMS.parallelism),
    )


def build_context(
    mode: Optional[CipherMode | str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> AppContext:
    """
    Resolve configuration and build the crypter for one CLI run.

    Resolution order for the cipher mode: explicit ``mode`` argument, then
    ``LINECRYPT_MODE``, then chacha20.

    If ``LINECRYPT_PASSWORD`` is set, it is carried on the context so the
    CLI can skip the interactive prompt (useful for scripting). Argon2id
    costs come from ``LINECRYPT_KDF_*``; both the encrypting and decrypting
    side must use the same values because they are not stored in the output.
    """
    if env is None:
        env = os.environ

    if mode is None:
        mode = env.get(ENV_MODE) or DEFAULT_MODE
    selected = parse_mode(mode)
    params = kdf_params_from_env(env)

    return AppContext(
        crypter=StringCrypter.for_mode(selected, kdf_params=params),
        mode=selected,
        kdf_params=params,
        password=env.get(ENV_PASSWORD) or None,
    )
