"""Symmetric encryption for parameters round-tripped through the browser.

Relation fields embed the model, column and scope names they search in the
page. Those values come back on every keystroke, so they are encrypted with a
server-side key and decrypted before use; a tampered value fails loudly.
"""

from __future__ import annotations

import base64
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


class DecryptionError(ValueError):
    """Raised when a payload cannot be decrypted with the configured key."""


@lru_cache(maxsize=8)
def _fernet_for(secret_key: str, crypt_key: str) -> Fernet:
    if crypt_key:
        return Fernet(crypt_key.encode("ascii"))
    derived = HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=None,
        info=b"orchid.crypt",
    ).derive(secret_key.encode("utf-8"))
    return Fernet(base64.urlsafe_b64encode(derived))


def get_fernet() -> Fernet:
    """Return the Fernet instance for the current settings.

    `ORCHID_CRYPT_KEY` is used as-is when set; otherwise a key is derived
    from `SECRET_KEY`.
    """

    return _fernet_for(settings.SECRET_KEY, getattr(settings, "ORCHID_CRYPT_KEY", "") or "")


def validate_crypt_key() -> None:
    """Fail at startup when `ORCHID_CRYPT_KEY` is not a usable Fernet key.

    Raises:
        ImproperlyConfigured: When the configured key is malformed.
    """

    try:
        get_fernet()
    except ValueError as exc:
        raise ImproperlyConfigured(
            "ORCHID_CRYPT_KEY must be 32 url-safe base64-encoded bytes (see Fernet.generate_key())."
        ) from exc


def encrypt_string(value: str) -> str:
    """Encrypt a string into a URL-safe token."""

    return get_fernet().encrypt(value.encode("utf-8")).decode("ascii")


def decrypt_string(token: str) -> str:
    """Decrypt a token produced by `encrypt_string`.

    Raises:
        DecryptionError: When the token is malformed, tampered with, or was
            encrypted with another key.
    """

    try:
        return get_fernet().decrypt(token.encode("utf-8")).decode("utf-8")
    except (InvalidToken, UnicodeError) as exc:
        raise DecryptionError("The payload is invalid.") from exc


def decrypt_nullable(token: str | None) -> str | None:
    """Decrypt `token`, passing None through untouched."""

    if token is None:
        return None
    return decrypt_string(token)
