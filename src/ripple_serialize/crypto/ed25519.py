"""
Ed25519 key derivation and signatures.

The secret key is SHA-512-half of the seed. Public keys carry a 0xED prefix
byte so they are 33 bytes long like compressed SECP256K1 keys and can be told
apart from them. Ed25519 signs the message itself, not a digest of it.
"""

from __future__ import annotations
from typing import Tuple

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as CryptoEd25519PrivateKey,
    Ed25519PublicKey as CryptoEd25519PublicKey
)

from ..codec.hashes import sha512_half

PUBLIC_KEY_PREFIX = 0xED


class Ed25519Error(Exception):
    """Base exception for Ed25519 operations."""
    pass


def _raw_public(private_key: CryptoEd25519PrivateKey) -> bytes:
    return private_key.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw
    )


def derive_keypair(seed: bytes) -> Tuple[bytes, bytes]:
    """
    Derive the key pair of a seed.

    Args:
        seed: 16-byte seed

    Returns:
        Tuple of (33-byte prefixed public key, 32-byte secret key)
    """
    secret = sha512_half(seed)
    return public_key_from_secret(secret), secret


def public_key_from_secret(secret_key: bytes) -> bytes:
    """Return the 0xED-prefixed public key of a 32-byte secret key."""
    if len(secret_key) != 32:
        raise Ed25519Error(f"Ed25519 secret key must be 32 bytes, got {len(secret_key)}")
    private_key = CryptoEd25519PrivateKey.from_private_bytes(secret_key)
    return bytes([PUBLIC_KEY_PREFIX]) + _raw_public(private_key)


def is_ed25519_public_key(public_key: bytes) -> bool:
    return len(public_key) == 33 and public_key[0] == PUBLIC_KEY_PREFIX


def sign(secret_key: bytes, message: bytes) -> bytes:
    """
    Sign a message.

    Args:
        secret_key: 32-byte secret key
        message: Message to sign

    Returns:
        64-byte signature
    """
    private_key = CryptoEd25519PrivateKey.from_private_bytes(secret_key)
    return private_key.sign(message)


def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify a signature.

    Args:
        public_key: 0xED-prefixed public key
        message: Message that was signed
        signature: 64-byte signature

    Returns:
        True if signature is valid
    """
    if not is_ed25519_public_key(public_key) or len(signature) != 64:
        return False
    try:
        CryptoEd25519PublicKey.from_public_bytes(public_key[1:]).verify(signature, message)
        return True
    except (InvalidSignature, ValueError):
        return False


__all__ = [
    "Ed25519Error",
    "PUBLIC_KEY_PREFIX",
    "derive_keypair",
    "public_key_from_secret",
    "is_ed25519_public_key",
    "sign",
    "verify",
]
