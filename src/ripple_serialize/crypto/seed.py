"""
Seeds: the 16 bytes every key pair is derived from.

A seed is either random or derived from a passphrase, and has three human
readable forms: a base58 family seed ("s..."), 32 hex digits and twelve
RFC 1751 words. The words encode the seed bytes in reverse order.
"""

from __future__ import annotations
import logging
import re
import secrets
from typing import Optional

from Crypto.Util.RFC1751 import english_to_key, key_to_english

from ..codec.base58 import TokenType, decode_account_id, decode_seed, decode_token, encode_seed
from ..codec.hashes import sha512_half

logger = logging.getLogger(__name__)

SEED_SIZE = 16
_HEX_SEED_RE = re.compile(r"^[0-9A-Fa-f]{32}$")


def random_seed() -> bytes:
    """Draw a seed from the operating system's secure random source."""
    return secrets.token_bytes(SEED_SIZE)


def generate_seed(passphrase: str) -> bytes:
    """
    Derive a seed from a passphrase.

    Args:
        passphrase: Any text; it is hashed as UTF-8

    Returns:
        First 16 bytes of SHA-512 of the passphrase
    """
    return sha512_half(passphrase.encode("utf-8"))[:SEED_SIZE]


def seed_as_1751(seed: bytes) -> str:
    """Render a seed as twelve upper-case RFC 1751 words."""
    return key_to_english(bytes(reversed(seed)))


def seed_from_1751(text: str) -> Optional[bytes]:
    """
    Parse twelve RFC 1751 words into a seed.

    Returns:
        The seed, or None if the text is not twelve valid words
    """
    words = text.upper().split()
    if len(words) != 12:
        return None
    try:
        key = english_to_key(" ".join(words))
    except (ValueError, IndexError):
        return None
    return bytes(reversed(key))


def _is_public_key(payload: Optional[bytes]) -> bool:
    return (payload is not None and len(payload) == 33
            and payload[0] in (0x02, 0x03, 0xED))


def _is_key_token(text: str) -> bool:
    if decode_account_id(text) is not None:
        return True
    if _is_public_key(decode_token(TokenType.NODE_PUBLIC, text)):
        return True
    if _is_public_key(decode_token(TokenType.ACCOUNT_PUBLIC, text)):
        return True
    for token_type in (TokenType.NODE_PRIVATE, TokenType.ACCOUNT_SECRET):
        payload = decode_token(token_type, text)
        if payload is not None and len(payload) == 32:
            return True
    return False


def parse_generic_seed(text: str) -> Optional[bytes]:
    """
    Interpret any seed text the tool accepts.

    Text that is an account address, a public key or a secret key is refused
    so that such values are never silently hashed as a passphrase. Otherwise
    the text is tried as 32 hex digits, a base58 family seed and RFC 1751
    words, and is finally treated as a passphrase.

    Args:
        text: Seed text

    Returns:
        The seed, or None if the text is empty or is a key token
    """
    if not text:
        return None
    if _is_key_token(text):
        logger.debug("Seed text is an account or key token, refusing it")
        return None
    if _HEX_SEED_RE.match(text):
        return bytes.fromhex(text)
    seed = decode_seed(text)
    if seed is not None:
        return seed
    seed = seed_from_1751(text)
    if seed is not None:
        return seed
    return generate_seed(text)


__all__ = [
    "SEED_SIZE",
    "random_seed",
    "generate_seed",
    "encode_seed",
    "seed_as_1751",
    "seed_from_1751",
    "parse_generic_seed",
]
