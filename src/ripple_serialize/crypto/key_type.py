"""
Supported signature algorithms.
"""

from __future__ import annotations
from enum import Enum

from ..runtime.errors import InvalidKeyTypeError


class KeyType(str, Enum):
    """Key types, named by their token in key files and on the command line."""

    SECP256K1 = "secp256k1"
    ED25519 = "ed25519"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> KeyType:
        return cls.SECP256K1

    @classmethod
    def from_string(cls, text: str) -> KeyType:
        """
        Parse a key type token.

        Raises:
            InvalidKeyTypeError: If the token names no supported algorithm
        """
        try:
            return cls(text)
        except ValueError:
            raise InvalidKeyTypeError(f'Invalid key type: "{text}"', key_type=text)
