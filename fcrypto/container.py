from __future__ import annotations

import base64
import binascii
import io
import os
import stat
import sys
from typing import BinaryIO, Optional, Union

from .constants import (
    BANNER,
    MARKER,
    COMMENT_PREFIXES,
    NONCE_SIZE,
    DEFAULT_FILE_MODE,
)
from .errors import (
    FileNotFound,
    CorruptEncoding,
    TruncatedData,
    DecryptionFailed,
    WriteFailure,
    NonceGenerationError,
    PermissionSetWarning,
)
from .kdf import derive_key
from .xchacha import OVERHEAD, seal, open_sealed


PathLike = Union[str, "os.PathLike[str]"]
Plaintext = Union[bytes, bytearray, memoryview, str]

_MARKER_BYTES = MARKER.encode("ascii")
_COMMENT_BYTES = tuple(p.encode("ascii") for p in COMMENT_PREFIXES)


def _as_bytes(plaintext: Plaintext) -> bytes:
    if isinstance(plaintext, str):
        return plaintext.encode("utf-8")
    if isinstance(plaintext, (bytes, bytearray, memoryview)):
        return bytes(plaintext)
    raise TypeError(f"plaintext must be bytes or str, not {type(plaintext).__name__}")


def _new_nonce() -> bytes:
    try:
        nonce = os.urandom(NONCE_SIZE)
    except (OSError, NotImplementedError) as exc:
        raise NonceGenerationError(f"no random source available: {exc}") from exc
    if len(nonce) != NONCE_SIZE:
        raise NonceGenerationError(f"nonce short read: {len(nonce)}")
    return nonce


def _body_offset(data: bytes) -> Optional[int]:
    """Offset just past the marker line, or None if ``data`` is not a container.

    Blank lines and ``#``/``;`` comments before the marker are skipped; any
    other first line means the content is plaintext.
    """
    buf = io.BytesIO(data)
    for raw in iter(buf.readline, b""):
        line = raw.strip()
        if not line or line.startswith(_COMMENT_BYTES):
            continue
        if line == _MARKER_BYTES:
            return buf.tell()
        return None
    return None


def is_container(data: bytes) -> bool:
    return _body_offset(bytes(data)) is not None


def write_container(fh: BinaryIO, plaintext: bytes, key: bytes) -> None:
    """Stream banner, marker and base64 ``nonce || sealed`` to ``fh``."""
    fh.write(BANNER)
    fh.write(_MARKER_BYTES + b"\n")
    nonce = _new_nonce()
    sealed = seal(key, nonce, plaintext)
    # base64.encode wraps at 76 columns and writes line by line
    base64.encode(io.BytesIO(nonce + sealed), fh)


def encode(plaintext: Plaintext, password: Union[str, bytes]) -> bytes:
    """Return the full container for ``plaintext`` sealed under ``password``."""
    key = derive_key(password)
    out = io.BytesIO()
    write_container(out, _as_bytes(plaintext), key)
    return out.getvalue()


def decode(data: bytes, password: Union[str, bytes]) -> bytes:
    """Open a container, or return ``data`` unchanged if it is not one."""
    data = bytes(data)
    offset = _body_offset(data)
    if offset is None:
        return data

    compact = b"".join(data[offset:].split())
    try:
        box = base64.b64decode(compact, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise CorruptEncoding(f"Failed to load base64 encoded data: {exc}") from exc
    if len(box) < NONCE_SIZE + OVERHEAD:
        raise TruncatedData("File data too short")

    nonce, sealed = box[:NONCE_SIZE], box[NONCE_SIZE:]
    key = derive_key(password)
    # One attempt only: the key cannot change between tries
    try:
        return open_sealed(key, nonce, sealed)
    except ValueError as exc:
        raise DecryptionFailed("Couldn't decrypt file, most likely wrong password") from exc


def _safe_chmod(path: str, mode: int) -> Optional[PermissionSetWarning]:
    """Best-effort chmod; failures are reported on stderr and returned."""
    try:
        os.chmod(path, mode)
    except OSError as exc:
        warning = PermissionSetWarning(path, mode, exc)
        print(f"Warning: {warning}", file=sys.stderr)
        return warning
    return None


def _close_after_error(fh: BinaryIO) -> None:
    try:
        fh.close()
    except OSError:
        # the original failure is what gets reported
        pass


def save_file(plaintext: Plaintext, path: PathLike, password: Union[str, bytes]) -> Optional[PermissionSetWarning]:
    """Encrypt ``plaintext`` into a container at ``path``.

    Existing permission bits are kept; new files are created 0600. Returns
    the PermissionSetWarning if the final chmod failed, otherwise None.
    The file is truncated in place: a failed save can leave it partial.
    """
    path = os.fspath(path)
    key = derive_key(password)
    data = _as_bytes(plaintext)

    try:
        mode = stat.S_IMODE(os.stat(path).st_mode)
    except FileNotFoundError:
        mode = DEFAULT_FILE_MODE
    except OSError as exc:
        raise WriteFailure("create", f"Failed to inspect {path}: {exc}") from exc

    try:
        flags = os.O_WRONLY | os.O_CREAT | os.O_TRUNC | getattr(os, "O_BINARY", 0)
        fh = os.fdopen(os.open(path, flags, DEFAULT_FILE_MODE), "wb")
    except OSError as exc:
        raise WriteFailure("create", f"Failed to create {path}: {exc}") from exc

    try:
        write_container(fh, data, key)
        fh.flush()
    except NonceGenerationError:
        _close_after_error(fh)
        raise
    except OSError as exc:
        _close_after_error(fh)
        raise WriteFailure("write", f"Failed to write {path}: {exc}") from exc

    try:
        fh.close()
    except OSError as exc:
        raise WriteFailure("close", f"Failed to close {path}: {exc}") from exc

    return _safe_chmod(path, mode)


def load_file(path: PathLike, password: Union[str, bytes]) -> bytes:
    """Read ``path`` and return its decrypted content.

    Files that are not containers are returned as-is.
    """
    path = os.fspath(path)
    try:
        with open(path, "rb") as fh:
            data = fh.read()
    except FileNotFoundError as exc:
        raise FileNotFound(f"File {path} not found") from exc
    return decode(data, password)


def create_file(path: PathLike, password: Union[str, bytes]) -> Optional[PermissionSetWarning]:
    """Write an empty container to ``path``."""
    return save_file(b"", path, password)
