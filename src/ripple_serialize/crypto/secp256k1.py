"""
SECP256K1 key derivation and signatures.

Keys are derived from a 16-byte seed in two steps. A root private key is the
first valid scalar among SHA-512-half(seed || n) for n = 0, 1, ...; the account
key adds a tweak, the first valid scalar among
SHA-512-half(rootPublicKey || 0 || m), to the root key. Public keys are 33-byte
compressed points.

Signatures are over SHA-512-half of the message, use RFC 6979 nonces, and are
DER encoded with a low S value.
"""

from __future__ import annotations
import hashlib
from typing import Callable, Tuple

from ecdsa import SECP256k1, SigningKey, VerifyingKey, BadSignatureError, MalformedPointError
from ecdsa.der import UnexpectedDER
from ecdsa.util import sigdecode_der, sigencode_der_canonize

from ..codec.hashes import sha512_half

ORDER = SECP256k1.order
_G = SECP256k1.generator


class Secp256k1Error(Exception):
    """Base exception for SECP256K1 operations."""
    pass


def _first_valid_scalar(make_digest: Callable[[int], bytes]) -> int:
    counter = 0
    while True:
        k = int.from_bytes(make_digest(counter), "big")
        if 0 < k < ORDER:
            return k
        counter += 1


def compress_point(point) -> bytes:
    """Return the 33-byte compressed encoding of a curve point."""
    return bytes([2 + (point.y() & 1)]) + point.x().to_bytes(32, "big")


def derive_root_key(seed: bytes) -> int:
    """Derive the root private scalar of a seed."""
    return _first_valid_scalar(lambda n: sha512_half(seed, n.to_bytes(4, "big")))


def derive_keypair(seed: bytes, account_index: int = 0) -> Tuple[bytes, bytes]:
    """
    Derive the account key pair of a seed.

    Args:
        seed: 16-byte seed
        account_index: Index of the derived account key

    Returns:
        Tuple of (33-byte public key, 32-byte secret key)
    """
    root = derive_root_key(seed)
    root_public = compress_point(_G * root)
    tweak = _first_valid_scalar(
        lambda m: sha512_half(root_public, account_index.to_bytes(4, "big"), m.to_bytes(4, "big")))
    secret = (root + tweak) % ORDER
    return compress_point(_G * secret), secret.to_bytes(32, "big")


def public_key_from_secret(secret_key: bytes) -> bytes:
    """Return the compressed public key of a 32-byte secret key."""
    secret = int.from_bytes(secret_key, "big")
    if not 0 < secret < ORDER:
        raise Secp256k1Error("Secret key is out of range")
    return compress_point(_G * secret)


def sign(secret_key: bytes, message: bytes) -> bytes:
    """
    Sign a message.

    Args:
        secret_key: 32-byte secret key
        message: Message bytes; SHA-512-half of it is what gets signed

    Returns:
        DER encoded signature with low S
    """
    sk = SigningKey.from_string(secret_key, curve=SECP256k1)
    digest = sha512_half(message)
    return sk.sign_digest_deterministic(
        digest, hashfunc=hashlib.sha256, sigencode=sigencode_der_canonize)


def verify(public_key: bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify a signature.

    Args:
        public_key: 33-byte compressed public key
        message: Message that was signed
        signature: DER encoded signature

    Returns:
        True if signature is valid
    """
    try:
        vk = VerifyingKey.from_string(public_key, curve=SECP256k1)
        return vk.verify_digest(signature, sha512_half(message), sigdecode=sigdecode_der)
    except (BadSignatureError, MalformedPointError, UnexpectedDER, ValueError):
        return False


__all__ = [
    "Secp256k1Error",
    "compress_point",
    "derive_root_key",
    "derive_keypair",
    "public_key_from_secret",
    "sign",
    "verify",
]
