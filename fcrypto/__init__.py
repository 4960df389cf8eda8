"""
fcrypto: password-encrypted configuration files.

Content is sealed with XChaCha20-Poly1305 under a key derived from a password
and stored as a small text container:

    # Encrypted fcrypto file

    FCRYPTO_V0:
    <base64 of nonce || ciphertext || tag>

Files whose first meaningful line is not the ``FCRYPTO_V0:`` marker are read
back unchanged, so plaintext configs keep working until they are first saved.

Key derivation is a single unsalted SHA-256 pass; this matches the version-0
format and is not a hardened password KDF.
"""

__version__ = "0.1"

from .container import load_file, save_file, create_file, encode, decode, is_container
from .kdf import derive_key, normalize_password
from .prompt import PasswordPrompter, get_password, change_password, read_password
from .errors import (
    FcryptoError,
    PasswordError,
    InvalidPasswordEncoding,
    EmptyPassword,
    PasswordReadError,
    FileNotFound,
    CorruptEncoding,
    TruncatedData,
    DecryptionFailed,
    WriteFailure,
    NonceGenerationError,
    PermissionSetWarning,
)

__all__ = [
    "load_file",
    "save_file",
    "create_file",
    "encode",
    "decode",
    "is_container",
    "derive_key",
    "normalize_password",
    "PasswordPrompter",
    "get_password",
    "change_password",
    "read_password",
    "FcryptoError",
    "PasswordError",
    "InvalidPasswordEncoding",
    "EmptyPassword",
    "PasswordReadError",
    "FileNotFound",
    "CorruptEncoding",
    "TruncatedData",
    "DecryptionFailed",
    "WriteFailure",
    "NonceGenerationError",
    "PermissionSetWarning",
]
