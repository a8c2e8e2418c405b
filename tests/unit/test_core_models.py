"""
Unit tests for core data models and exceptions.
"""

import dataclasses

import pytest

from linecrypt.core.exceptions import (
    AuthError,
    ConfigError,
    DecodeUtf8Error,
    FormatError,
    LineCryptError,
)
from linecrypt.core.models import EncryptedRecord


class TestEncryptedRecord:
    def test_to_bytes_order(self):
        rec = EncryptedRecord(salt=b"s", nonce=b"n", ciphertext=b"ct", tag=b"t")
        assert rec.to_bytes() == b"snctt"

    def test_sealed(self):
        rec = EncryptedRecord(salt=b"s", nonce=b"n", ciphertext=b"ct", tag=b"TAG")
        assert rec.sealed == b"ctTAG"

    def test_tag_defaults_to_empty(self):
        rec = EncryptedRecord(salt=b"s", nonce=b"n", ciphertext=b"ct")
        assert rec.tag == b""
        assert rec.sealed == b"ct"

    def test_frozen(self):
        rec = EncryptedRecord(salt=b"s", nonce=b"n", ciphertext=b"ct")
        with pytest.raises(dataclasses.FrozenInstanceError):
            rec.salt = b"other"

    def test_repr_hides_bytes(self):
        rec = EncryptedRecord(salt=b"secret-salt", nonce=b"nn", ciphertext=b"abc", tag=b"t")
        text = repr(rec)
        assert "secret-salt" not in text
        assert text == "EncryptedRecord(salt=11B, nonce=2B, ciphertext=3B, tag=1B)"


@pytest.mark.parametrize("exc", [ConfigError, FormatError, AuthError, DecodeUtf8Error])
def test_errors_share_base(exc):
    assert issubclass(exc, LineCryptError)
    with pytest.raises(LineCryptError):
        raise exc("boom")
