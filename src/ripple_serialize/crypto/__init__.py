"""
Cryptographic primitives for ripple-serialize.

Seeds, SECP256K1 and Ed25519 key derivation, and the signature algorithms.
"""

from .key_type import KeyType
from .seed import random_seed, generate_seed, parse_generic_seed, seed_as_1751
from . import ed25519, secp256k1

__all__ = [
    "KeyType",
    "random_seed",
    "generate_seed",
    "parse_generic_seed",
    "seed_as_1751",
    "ed25519",
    "secp256k1",
]
