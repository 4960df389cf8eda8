from __future__ import annotations


class FcryptoError(Exception):
    """Base class for fcrypto-specific errors."""


# Password validation
class PasswordError(FcryptoError, ValueError):
    pass


class InvalidPasswordEncoding(PasswordError):
    pass


class EmptyPassword(PasswordError):
    pass


class PasswordReadError(FcryptoError):
    pass


# Loading
class FileNotFound(FcryptoError, FileNotFoundError):
    pass


class CorruptEncoding(FcryptoError, ValueError):
    pass


class TruncatedData(FcryptoError, ValueError):
    pass


class DecryptionFailed(FcryptoError, ValueError):
    pass


# Saving
class WriteFailure(FcryptoError):
    """A save step failed; ``stage`` names it (create, nonce, write, close)."""

    def __init__(self, stage: str, message: str):
        super().__init__(message)
        self.stage = stage


class NonceGenerationError(WriteFailure):
    def __init__(self, message: str):
        super().__init__("nonce", message)


class PermissionSetWarning(FcryptoError, UserWarning):
    """Non-fatal: the file was written but its mode could not be applied."""

    def __init__(self, path: str, mode: int, cause: OSError):
        super().__init__(f"failed to set mode {mode:o} on {path}: {cause}")
        self.stage = "chmod"
        self.path = path
        self.mode = mode
        self.cause = cause
