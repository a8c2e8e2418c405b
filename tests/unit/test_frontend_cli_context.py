"""Unit tests for the CLI AppContext builder."""

import pytest

from linecrypt.core.exceptions import ConfigError
from linecrypt.frontend.cli.context import build_context, kdf_params_from_env
from linecrypt.security.algorithms import CipherMode, Sm4CipherAlgorithm
from linecrypt.security.kdf import KdfParams


def test_build_context_defaults():
    ctx = build_context(env={})

    assert ctx.mode is CipherMode.CHACHA20
    assert ctx.kdf_params == KdfParams()
    assert ctx.password is None
    assert ctx.crypter.algorithm.name == "chacha20"


def test_build_context_mode_from_env():
    ctx = build_context(env={"LINECRYPT_MODE": "sm4"})
    assert ctx.mode is CipherMode.SM4
    assert isinstance(ctx.crypter.algorithm, Sm4CipherAlgorithm)


def test_build_context_explicit_mode_wins():
    ctx = build_context(mode="chacha20", env={"LINECRYPT_MODE": "sm4"})
    assert ctx.mode is CipherMode.CHACHA20


def test_build_context_unknown_mode():
    with pytest.raises(ConfigError, match="Unknown cipher mode"):
        build_context(env={"LINECRYPT_MODE": "rot13"})


def test_build_context_password_from_env():
    ctx = build_context(env={"LINECRYPT_PASSWORD": "s3cret"})
    assert ctx.password == "s3cret"


def test_build_context_empty_password_env_is_ignored():
    ctx = build_context(env={"LINECRYPT_PASSWORD": ""})
    assert ctx.password is None


def test_build_context_reads_os_environ(monkeypatch):
    monkeypatch.setenv("LINECRYPT_MODE", "sm4")
    monkeypatch.setenv("LINECRYPT_KDF_TIME_COST", "1")
    ctx = build_context()
    assert ctx.mode is CipherMode.SM4
    assert ctx.kdf_params.time_cost == 1


def test_kdf_params_from_env_overrides():
    params = kdf_params_from_env(
        {
            "LINECRYPT_KDF_TIME_COST": "1",
            "LINECRYPT_KDF_MEMORY_COST": "8",
            "LINECRYPT_KDF_PARALLELISM": "2",
        }
    )
    assert params == KdfParams(time_cost=1, memory_cost=8, parallelism=2)
    assert build_context(env={"LINECRYPT_KDF_TIME_COST": "1"}).crypter.kdf_params.time_cost == 1


def test_kdf_params_blank_uses_default():
    assert kdf_params_from_env({"LINECRYPT_KDF_MEMORY_COST": "  "}) == KdfParams()


@pytest.mark.parametrize("value", ["abc", "1.5", "0", "-3"])
def test_kdf_params_invalid(value):
    with pytest.raises(ConfigError, match="LINECRYPT_KDF_TIME_COST"):
        kdf_params_from_env({"LINECRYPT_KDF_TIME_COST": value})
