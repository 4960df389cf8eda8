from __future__ import annotations

import hashlib
import unicodedata
from typing import Union

from .constants import DOMAIN_TAG
from .errors import EmptyPassword, InvalidPasswordEncoding


def normalize_password(password: Union[str, bytes]) -> str:
    """Validate ``password`` and return its NFKC form.

    ``bytes`` must be UTF-8; a ``str`` must not contain lone surrogates.
    """
    if isinstance(password, (bytes, bytearray)):
        try:
            password = bytes(password).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidPasswordEncoding("password contains invalid utf8 characters") from exc
    try:
        password.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidPasswordEncoding("password contains invalid utf8 characters") from exc

    password = unicodedata.normalize("NFKC", password)
    if len(password) == 0:
        raise EmptyPassword("no characters in password")
    return password


def derive_key(password: Union[str, bytes]) -> bytes:
    """Return the 32-byte file key for ``password``.

    A single unsalted SHA-256 pass over ``[password][fcrypto]``. This is the
    version-0 format's derivation and must stay as-is for existing files.
    """
    password = normalize_password(password)
    template = "[" + password + "][" + DOMAIN_TAG + "]"
    return hashlib.sha256(template.encode("utf-8")).digest()
