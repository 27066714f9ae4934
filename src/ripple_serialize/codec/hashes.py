"""
Hash Functions

The ledger protocol hashes with SHA-512 truncated to its first 256 bits
("SHA-512 half"), prefixed by a four byte tag that names what is being hashed.
Account identifiers are RIPEMD-160 over SHA-256 of the public key.
"""

import hashlib

from Crypto.Hash import RIPEMD160


class HashPrefix:
    """Four byte prefixes that domain-separate the protocol's hashes."""

    TRANSACTION_ID = b"TXN\x00"
    TX_SIGN = b"STX\x00"
    TX_MULTI_SIGN = b"SMT\x00"


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def sha512_half(*parts: bytes) -> bytes:
    """
    Compute the first 32 bytes of SHA-512 over the concatenated parts.

    Args:
        *parts: Byte strings hashed in order

    Returns:
        32-byte digest
    """
    h = hashlib.sha512()
    for part in parts:
        h.update(part)
    return h.digest()[:32]


def ripemd160(input_bytes: bytes) -> bytes:
    """Compute RIPEMD-160 of input bytes."""
    return RIPEMD160.new(input_bytes).digest()


def calc_account_id(public_key: bytes) -> bytes:
    """
    Derive the 20-byte account identifier of a public key.

    Args:
        public_key: 33-byte secp256k1 or 0xED-prefixed ed25519 public key

    Returns:
        20-byte account ID
    """
    return ripemd160(sha256_bytes(public_key))


def transaction_id(serialized_tx: bytes) -> bytes:
    """
    Compute the identifying hash of a fully serialized transaction.

    Args:
        serialized_tx: Canonical binary of the transaction, signatures included

    Returns:
        32-byte transaction hash
    """
    return sha512_half(HashPrefix.TRANSACTION_ID, serialized_tx)
