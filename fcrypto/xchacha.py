"""XChaCha20-Poly1305 sealing for container payloads.

``Cryptodome.Cipher.ChaCha20_Poly1305`` switches to the extended-nonce
XChaCha20-Poly1305 construction (libsodium's
``crypto_aead_xchacha20poly1305_ietf``) when given a 24-byte nonce. Sealed
output is ``ciphertext || tag``, so it is always ``OVERHEAD`` bytes longer
than the plaintext.
"""

from __future__ import annotations

from Cryptodome.Cipher import ChaCha20_Poly1305

from .constants import KEY_SIZE, NONCE_SIZE, TAG_SIZE


OVERHEAD = TAG_SIZE


def _cipher(key: bytes, nonce: bytes):
    if len(key) != KEY_SIZE:
        raise ValueError("Key must be 32 bytes for XChaCha20-Poly1305")
    # 8 and 12 byte nonces would silently select plain ChaCha20-Poly1305
    if len(nonce) != NONCE_SIZE:
        raise ValueError("Nonce must be 24 bytes for XChaCha20-Poly1305")
    return ChaCha20_Poly1305.new(key=key, nonce=nonce)


def seal(key: bytes, nonce: bytes, plaintext: bytes) -> bytes:
    """Encrypt and authenticate; returns ``ciphertext || tag``."""
    ciphertext, tag = _cipher(key, nonce).encrypt_and_digest(plaintext)
    return ciphertext + tag


def open_sealed(key: bytes, nonce: bytes, sealed: bytes) -> bytes:
    """Verify and decrypt ``ciphertext || tag``.

    Raises ValueError when the tag does not verify (wrong key or tampering).
    """
    if len(sealed) < OVERHEAD:
        raise ValueError("Sealed payload shorter than authentication tag")
    ciphertext, tag = sealed[:-OVERHEAD], sealed[-OVERHEAD:]
    return _cipher(key, nonce).decrypt_and_verify(ciphertext, tag)


__all__ = [
    "OVERHEAD",
    "seal",
    "open_sealed",
]
