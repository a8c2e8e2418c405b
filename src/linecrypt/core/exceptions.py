"""
Exceptions for linecrypt
Every per-line failure is one of these, so the CLI can catch LineCryptError
and keep going with the next line.
"""


class LineCryptError(Exception):
    # general container for errors
    pass


class ConfigError(LineCryptError):
    # raised on invalid derivation parameters, key/nonce sizes or selectors
    pass


class FormatError(LineCryptError):
    # raised when an encoded line is malformed or truncated
    pass


class AuthError(LineCryptError):
    # raised when a ciphertext fails its integrity check
    pass


class DecodeUtf8Error(LineCryptError):
    # raised when decrypted bytes are not valid UTF-8
    pass
