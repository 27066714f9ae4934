"""
Binary Writer

Implements the primitive encodings of the XRP Ledger canonical binary format:
big-endian unsigned integers, field headers and variable-length prefixes.
"""

import struct
from typing import List

from ..runtime.errors import FieldError

# Largest length a three byte variable-length prefix can describe.
MAX_VL_LENGTH = 918744


def encode_field_header(type_code: int, nth: int) -> bytes:
    """
    Encode a field header.

    Type codes and field codes below 16 share a single byte; larger codes
    spill into a byte of their own.

    Args:
        type_code: Serialized type code
        nth: Field code within the type

    Returns:
        One to three header bytes
    """
    if type_code < 16:
        if nth < 16:
            return bytes([(type_code << 4) | nth])
        return bytes([type_code << 4, nth])
    if nth < 16:
        return bytes([nth, type_code])
    return bytes([0, type_code, nth])


def encode_vl_length(length: int) -> bytes:
    """
    Encode a variable-length prefix.

    Args:
        length: Payload length in bytes

    Returns:
        One, two or three prefix bytes

    Raises:
        FieldError: If the length cannot be represented
    """
    if length < 0:
        raise FieldError(f"Invalid length: {length}")
    if length <= 192:
        return bytes([length])
    if length <= 12480:
        length -= 193
        return bytes([193 + (length >> 8), length & 0xFF])
    if length <= MAX_VL_LENGTH:
        length -= 12481
        return bytes([241 + (length >> 16), (length >> 8) & 0xFF, length & 0xFF])
    raise FieldError(f"Length {length} exceeds the maximum of {MAX_VL_LENGTH}")


class BinaryWriter:
    """
    Binary writer accumulating the canonical encoding of an object.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[int] = []

    def u8(self, v: int) -> None:
        """Write unsigned 8-bit integer."""
        self._bb.append(v & 0xFF)

    def u16(self, v: int) -> None:
        """Write unsigned 16-bit integer in big-endian format."""
        self._bb.extend(struct.pack('>H', v & 0xFFFF))

    def u32(self, v: int) -> None:
        """Write unsigned 32-bit integer in big-endian format."""
        self._bb.extend(struct.pack('>I', v & 0xFFFFFFFF))

    def u64(self, v: int) -> None:
        """Write unsigned 64-bit integer in big-endian format."""
        self._bb.extend(struct.pack('>Q', v & 0xFFFFFFFFFFFFFFFF))

    def bytes(self, v: bytes) -> None:
        """
        Write raw bytes without length prefix.

        Args:
            v: Bytes to write directly
        """
        self._bb.extend(v)

    def vl_bytes(self, v: bytes) -> None:
        """
        Write bytes with a variable-length prefix.

        Args:
            v: Bytes to write with length prefix
        """
        self._bb.extend(encode_vl_length(len(v)))
        self._bb.extend(v)

    def field_header(self, type_code: int, nth: int) -> None:
        """Write the header of a field."""
        self._bb.extend(encode_field_header(type_code, nth))

    def __len__(self) -> int:
        return len(self._bb)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
