"""
Base58Check encoding with the ledger's alphabet.

Human readable tokens (addresses, seeds, public and secret keys) are a one
byte token type, the payload and a four byte double SHA-256 checksum, written
in base58 with the "rpshnaf39w..." alphabet.
"""

from __future__ import annotations
from enum import IntEnum
from typing import Optional

import base58

from ..runtime.errors import ParseError

ALPHABET = base58.XRP_ALPHABET


class TokenType(IntEnum):
    """Leading byte of each kind of token."""

    ACCOUNT_ID = 0
    NODE_PUBLIC = 28
    NODE_PRIVATE = 32
    FAMILY_SEED = 33
    ACCOUNT_SECRET = 34
    ACCOUNT_PUBLIC = 35


def b58encode(data: bytes) -> str:
    """Encode bytes as base58 without a checksum."""
    return base58.b58encode(data, alphabet=ALPHABET).decode("ascii")


def b58decode(text: str) -> bytes:
    """
    Decode base58 text without checking a checksum.

    Raises:
        ParseError: If the text holds a character outside the alphabet
    """
    try:
        return base58.b58decode(text, alphabet=ALPHABET)
    except ValueError as e:
        raise ParseError(f"Invalid base58 text: {text!r}", cause=e)


def encode_token(token_type: TokenType, payload: bytes) -> str:
    """
    Encode a payload as a base58check token.

    Args:
        token_type: Token type byte
        payload: Token payload

    Returns:
        base58 text
    """
    data = bytes([int(token_type)]) + payload
    return base58.b58encode_check(data, alphabet=ALPHABET).decode("ascii")


def decode_token(token_type: TokenType, text: str) -> Optional[bytes]:
    """
    Decode a base58check token of the expected type.

    Returns:
        The payload, or None if the text is not a valid token of this type
    """
    if not text or text != text.strip():
        return None
    try:
        data = base58.b58decode_check(text, alphabet=ALPHABET)
    except ValueError:
        return None
    if not data or data[0] != int(token_type):
        return None
    return data[1:]


def encode_account_id(account_id: bytes) -> str:
    """Encode a 20-byte account ID as an "r..." address."""
    return encode_token(TokenType.ACCOUNT_ID, account_id)


def decode_account_id(text: str) -> Optional[bytes]:
    """Decode an "r..." address; None unless it holds exactly 20 bytes."""
    payload = decode_token(TokenType.ACCOUNT_ID, text)
    if payload is None or len(payload) != 20:
        return None
    return payload


def encode_seed(seed: bytes) -> str:
    """Encode a 16-byte seed as an "s..." family seed."""
    return encode_token(TokenType.FAMILY_SEED, seed)


def decode_seed(text: str) -> Optional[bytes]:
    """Decode an "s..." family seed; None unless it holds exactly 16 bytes."""
    payload = decode_token(TokenType.FAMILY_SEED, text)
    if payload is None or len(payload) != 16:
        return None
    return payload


__all__ = [
    "ALPHABET",
    "TokenType",
    "b58encode",
    "b58decode",
    "encode_token",
    "decode_token",
    "encode_account_id",
    "decode_account_id",
    "encode_seed",
    "decode_seed",
]
