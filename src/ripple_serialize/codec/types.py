"""
Field Codec

Encodes and decodes the payload of a single field. Dispatch is on the field's
type code through the ``_ENCODERS``/``_DECODERS`` tables; nested objects and
arrays are handled by the canonical serializer in ``binary.py``, which calls
back into this module for every leaf field.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from .amount import Amount
from .definitions import FieldDef, TypeCode, HASH_WIDTHS
from .reader import BinaryReader
from .writer import BinaryWriter
from ..runtime.errors import FieldError, MalformedFieldError

_UINT_BITS = {
    TypeCode.UINT8: 8,
    TypeCode.UINT16: 16,
    TypeCode.UINT32: 32,
    TypeCode.UINT64: 64,
}

# Path step type flags.
PATH_ACCOUNT = 0x01
PATH_CURRENCY = 0x10
PATH_ISSUER = 0x20
PATH_SEPARATOR = 0xFF
PATH_END = 0x00


@dataclass(frozen=True)
class PathStep:
    """One hop of a payment path."""

    account: Optional[bytes] = None
    currency: Optional[bytes] = None
    issuer: Optional[bytes] = None

    @property
    def type_flags(self) -> int:
        flags = 0
        if self.account is not None:
            flags |= PATH_ACCOUNT
        if self.currency is not None:
            flags |= PATH_CURRENCY
        if self.issuer is not None:
            flags |= PATH_ISSUER
        return flags


def check_leaf_value(field: FieldDef, value: Any) -> None:
    """
    Check that a value has the Python type a leaf field expects.

    Raises:
        FieldError: On a type or range mismatch
    """
    t = field.type_code
    if t in _UINT_BITS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise FieldError(f"Field '{field.name}' expects an integer", field.name)
        if not 0 <= value < (1 << _UINT_BITS[t]):
            raise FieldError(f"Field '{field.name}' value {value} is out of range", field.name)
    elif t in HASH_WIDTHS:
        if not isinstance(value, bytes) or len(value) != HASH_WIDTHS[t]:
            raise FieldError(
                f"Field '{field.name}' expects {HASH_WIDTHS[t]} bytes", field.name)
    elif t == TypeCode.ACCOUNT:
        if not isinstance(value, bytes) or len(value) != 20:
            raise FieldError(f"Field '{field.name}' expects a 20-byte account ID", field.name)
    elif t == TypeCode.BLOB:
        if not isinstance(value, bytes):
            raise FieldError(f"Field '{field.name}' expects bytes", field.name)
    elif t == TypeCode.AMOUNT:
        if not isinstance(value, Amount):
            raise FieldError(f"Field '{field.name}' expects an Amount", field.name)
    elif t == TypeCode.VECTOR256:
        if not isinstance(value, list) or any(
                not isinstance(h, bytes) or len(h) != 32 for h in value):
            raise FieldError(f"Field '{field.name}' expects a list of 32-byte hashes", field.name)
    elif t == TypeCode.PATHSET:
        if not isinstance(value, list) or not value or any(
                not isinstance(path, list) or not path
                or any(not isinstance(s, PathStep) or not s.type_flags for s in path)
                for path in value):
            raise FieldError(f"Field '{field.name}' expects a list of paths", field.name)
    else:
        raise FieldError(f"Field '{field.name}' has unsupported type {t}", field.name)


def _encode_uint(writer: BinaryWriter, field: FieldDef, value: int) -> None:
    bits = _UINT_BITS[TypeCode(field.type_code)]
    if bits == 8:
        writer.u8(value)
    elif bits == 16:
        writer.u16(value)
    elif bits == 32:
        writer.u32(value)
    else:
        writer.u64(value)


def _decode_uint(reader: BinaryReader, field: FieldDef) -> int:
    bits = _UINT_BITS[TypeCode(field.type_code)]
    if bits == 8:
        return reader.u8()
    if bits == 16:
        return reader.u16()
    if bits == 32:
        return reader.u32()
    return reader.u64()


def _encode_hash(writer: BinaryWriter, field: FieldDef, value: bytes) -> None:
    writer.bytes(value)


def _decode_hash(reader: BinaryReader, field: FieldDef) -> bytes:
    return reader.bytes(HASH_WIDTHS[TypeCode(field.type_code)])


def _encode_blob(writer: BinaryWriter, field: FieldDef, value: bytes) -> None:
    writer.vl_bytes(value)


def _decode_blob(reader: BinaryReader, field: FieldDef) -> bytes:
    return reader.vl_bytes()


def _decode_account(reader: BinaryReader, field: FieldDef) -> bytes:
    value = reader.vl_bytes()
    if len(value) != 20:
        raise MalformedFieldError(
            f"Field '{field.name}' holds {len(value)} bytes, expected 20")
    return value


def _encode_amount(writer: BinaryWriter, field: FieldDef, value: Amount) -> None:
    value.encode(writer)


def _decode_amount(reader: BinaryReader, field: FieldDef) -> Amount:
    return Amount.decode(reader)


def _encode_vector256(writer: BinaryWriter, field: FieldDef, value: List[bytes]) -> None:
    writer.vl_bytes(b"".join(value))


def _decode_vector256(reader: BinaryReader, field: FieldDef) -> List[bytes]:
    data = reader.vl_bytes()
    if len(data) % 32:
        raise MalformedFieldError(
            f"Field '{field.name}' length {len(data)} is not a multiple of 32")
    return [data[i:i + 32] for i in range(0, len(data), 32)]


def _encode_pathset(writer: BinaryWriter, field: FieldDef, value: List[List[PathStep]]) -> None:
    for i, path in enumerate(value):
        if i:
            writer.u8(PATH_SEPARATOR)
        for step in path:
            writer.u8(step.type_flags)
            if step.account is not None:
                writer.bytes(step.account)
            if step.currency is not None:
                writer.bytes(step.currency)
            if step.issuer is not None:
                writer.bytes(step.issuer)
    writer.u8(PATH_END)


def _decode_pathset(reader: BinaryReader, field: FieldDef) -> List[List[PathStep]]:
    paths: List[List[PathStep]] = []
    path: List[PathStep] = []
    while True:
        flags = reader.u8()
        if flags in (PATH_END, PATH_SEPARATOR):
            if not path:
                raise MalformedFieldError(f"Field '{field.name}' holds an empty path")
            paths.append(path)
            if flags == PATH_END:
                return paths
            path = []
            continue
        if flags & ~(PATH_ACCOUNT | PATH_CURRENCY | PATH_ISSUER):
            raise MalformedFieldError(f"Invalid path step type 0x{flags:02X}")
        path.append(PathStep(
            account=reader.bytes(20) if flags & PATH_ACCOUNT else None,
            currency=reader.bytes(20) if flags & PATH_CURRENCY else None,
            issuer=reader.bytes(20) if flags & PATH_ISSUER else None,
        ))


_ENCODERS: Dict[TypeCode, Callable[[BinaryWriter, FieldDef, Any], None]] = {
    TypeCode.UINT8: _encode_uint,
    TypeCode.UINT16: _encode_uint,
    TypeCode.UINT32: _encode_uint,
    TypeCode.UINT64: _encode_uint,
    TypeCode.HASH128: _encode_hash,
    TypeCode.HASH160: _encode_hash,
    TypeCode.HASH256: _encode_hash,
    TypeCode.AMOUNT: _encode_amount,
    TypeCode.BLOB: _encode_blob,
    TypeCode.ACCOUNT: _encode_blob,
    TypeCode.PATHSET: _encode_pathset,
    TypeCode.VECTOR256: _encode_vector256,
}

_DECODERS: Dict[TypeCode, Callable[[BinaryReader, FieldDef], Any]] = {
    TypeCode.UINT8: _decode_uint,
    TypeCode.UINT16: _decode_uint,
    TypeCode.UINT32: _decode_uint,
    TypeCode.UINT64: _decode_uint,
    TypeCode.HASH128: _decode_hash,
    TypeCode.HASH160: _decode_hash,
    TypeCode.HASH256: _decode_hash,
    TypeCode.AMOUNT: _decode_amount,
    TypeCode.BLOB: _decode_blob,
    TypeCode.ACCOUNT: _decode_account,
    TypeCode.PATHSET: _decode_pathset,
    TypeCode.VECTOR256: _decode_vector256,
}


def encode_value(writer: BinaryWriter, field: FieldDef, value: Any) -> None:
    """
    Write the payload of a leaf field.

    Args:
        writer: Destination writer
        field: Field definition
        value: Field value

    Raises:
        FieldError: If the field's type has no leaf encoding
    """
    try:
        encoder = _ENCODERS[TypeCode(field.type_code)]
    except (KeyError, ValueError):
        raise FieldError(f"Field '{field.name}' has unsupported type {field.type_code}", field.name)
    encoder(writer, field, value)


def decode_value(reader: BinaryReader, field: FieldDef) -> Any:
    """
    Read the payload of a leaf field, consuming exactly its bytes.

    Raises:
        MalformedFieldError: If the type is unknown or the payload is truncated
    """
    try:
        decoder = _DECODERS[TypeCode(field.type_code)]
    except (KeyError, ValueError):
        raise MalformedFieldError(f"Unknown type code {field.type_code}")
    return decoder(reader, field)


def encode_field(writer: BinaryWriter, field: FieldDef, value: Any) -> None:
    """Write a leaf field: its header followed by its payload."""
    writer.field_header(field.type_code, field.nth)
    encode_value(writer, field, value)


def decode_field(reader: BinaryReader, field: FieldDef) -> Any:
    """Read the payload of a leaf field whose header was already consumed."""
    return decode_value(reader, field)


__all__ = [
    "PathStep",
    "check_leaf_value",
    "encode_value",
    "decode_value",
    "encode_field",
    "decode_field",
]
