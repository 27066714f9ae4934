"""
Binary Reader

Implements the primitive decodings of the XRP Ledger canonical binary format.
Every read is bounds checked; running past the end of the buffer raises
MalformedFieldError instead of returning a short result.
"""

import builtins
import struct
from typing import Tuple

from .writer import MAX_VL_LENGTH
from ..runtime.errors import MalformedFieldError


class BinaryReader:
    """
    Binary reader over an immutable byte buffer.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = buf
        self._off = 0

    @property
    def eof(self) -> bool:
        """True if at end of buffer."""
        return self._off >= len(self._buf)

    @property
    def offset(self) -> int:
        return self._off

    @property
    def remaining(self) -> int:
        return len(self._buf) - self._off

    def _take(self, n: int, what: str) -> builtins.bytes:
        if n < 0 or self._off + n > len(self._buf):
            raise MalformedFieldError(
                f"Unexpected end of input reading {what} at offset {self._off}",
                details={"offset": self._off, "wanted": n, "remaining": self.remaining},
            )
        out = self._buf[self._off:self._off + n]
        self._off += n
        return out

    def u8(self) -> int:
        """Read unsigned 8-bit integer."""
        return self._take(1, "u8")[0]

    def u16(self) -> int:
        """Read unsigned 16-bit big-endian integer."""
        return struct.unpack(">H", self._take(2, "u16"))[0]

    def u32(self) -> int:
        """Read unsigned 32-bit big-endian integer."""
        return struct.unpack(">I", self._take(4, "u32"))[0]

    def u64(self) -> int:
        """Read unsigned 64-bit big-endian integer."""
        return struct.unpack(">Q", self._take(8, "u64"))[0]

    def peek(self) -> int:
        """Return the next byte without consuming it."""
        if self.eof:
            raise MalformedFieldError(f"Unexpected end of input at offset {self._off}")
        return self._buf[self._off]

    def bytes(self, n: int) -> builtins.bytes:
        """
        Read n bytes from buffer.

        Args:
            n: Number of bytes to read

        Returns:
            Bytes of specified length
        """
        return builtins.bytes(self._take(n, f"{n} bytes"))

    def vl_length(self) -> int:
        """
        Read a variable-length prefix.

        Returns:
            Decoded payload length
        """
        b1 = self.u8()
        if b1 <= 192:
            return b1
        if b1 <= 240:
            b2 = self.u8()
            return 193 + ((b1 - 193) << 8) + b2
        if b1 <= 254:
            b2 = self.u8()
            b3 = self.u8()
            length = 12481 + ((b1 - 241) << 16) + (b2 << 8) + b3
            if length > MAX_VL_LENGTH:
                raise MalformedFieldError(f"Variable length {length} exceeds the maximum of {MAX_VL_LENGTH}")
            return length
        raise MalformedFieldError(f"Invalid variable length indicator: {b1}")

    def vl_bytes(self) -> builtins.bytes:
        """Read bytes with a variable-length prefix."""
        return self.bytes(self.vl_length())

    def field_header(self) -> Tuple[int, int]:
        """
        Read a field header.

        Returns:
            Tuple of (type_code, nth)
        """
        b = self.u8()
        type_code = b >> 4
        nth = b & 0x0F
        if type_code == 0:
            type_code = self.u8()
            if type_code < 16:
                raise MalformedFieldError(f"Uncommon type code {type_code} encoded as common")
        if nth == 0:
            nth = self.u8()
            if nth < 16:
                raise MalformedFieldError(f"Uncommon field code {nth} encoded as common")
        return type_code, nth
