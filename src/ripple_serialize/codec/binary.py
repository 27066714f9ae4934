"""
Canonical Serializer

Walks an STObject and emits the canonical binary blob, or parses a blob back
into an STObject. Fields are written in ascending (type code, field code)
order; nested objects end with the ObjectEndMarker field and arrays with the
ArrayEndMarker field. Parsing enforces the same order and rejects duplicate
fields, so every blob accepted here re-serializes to the same bytes.
"""

from __future__ import annotations
import binascii
from typing import List, Optional

from .definitions import (
    FieldDef,
    TypeCode,
    OBJECT_END_MARKER,
    ARRAY_END_MARKER,
    find_field,
)
from .reader import BinaryReader
from .types import decode_value, encode_value
from .writer import BinaryWriter
from ..runtime.errors import MalformedFieldError, ParseError
from ..tx.object import STObject

# Deepest nesting of objects and arrays accepted while parsing.
MAX_DEPTH = 10


def write_object(writer: BinaryWriter, obj: STObject, signing_only: bool = False) -> None:
    """
    Write the fields of an object, without any end marker.

    Args:
        writer: Destination writer
        obj: Object to encode
        signing_only: Skip fields that are excluded from signing data
    """
    for f, value in obj.items():
        if not f.is_serialized:
            continue
        if signing_only and not f.is_signing_field:
            continue
        writer.field_header(f.type_code, f.nth)
        if f.type_code == TypeCode.OBJECT:
            write_object(writer, value, signing_only)
            writer.field_header(OBJECT_END_MARKER.type_code, OBJECT_END_MARKER.nth)
        elif f.type_code == TypeCode.ARRAY:
            for item in value:
                writer.field_header(item.field.type_code, item.field.nth)
                write_object(writer, item, signing_only)
                writer.field_header(OBJECT_END_MARKER.type_code, OBJECT_END_MARKER.nth)
            writer.field_header(ARRAY_END_MARKER.type_code, ARRAY_END_MARKER.nth)
        else:
            encode_value(writer, f, value)


def to_binary(obj: STObject, signing_only: bool = False) -> bytes:
    """
    Serialize an object to canonical binary.

    Args:
        obj: Object to encode
        signing_only: Leave out TxnSignature, Signers and other non-signing fields

    Returns:
        Canonical binary encoding
    """
    writer = BinaryWriter()
    write_object(writer, obj, signing_only)
    return writer.to_bytes()


def _read_header_field(reader: BinaryReader) -> FieldDef:
    type_code, nth = reader.field_header()
    f = find_field(type_code, nth)
    if f is None:
        try:
            TypeCode(type_code)
        except ValueError:
            raise MalformedFieldError(f"Unknown type code {type_code}")
        raise MalformedFieldError(f"Unknown field ({type_code}, {nth})")
    return f


def read_object(reader: BinaryReader, field: Optional[FieldDef] = None,
                nested: bool = False, depth: int = 0) -> STObject:
    """
    Read fields into an object.

    Args:
        reader: Source reader
        field: Wrapping field of the object, if any
        nested: True when an ObjectEndMarker must terminate the object
        depth: Current nesting depth

    Returns:
        Parsed object

    Raises:
        MalformedFieldError: On unknown, duplicate or out-of-order fields,
            or on truncated input
    """
    if depth > MAX_DEPTH:
        raise MalformedFieldError("Maximum object nesting depth exceeded")
    obj = STObject(field=field)
    last: Optional[FieldDef] = None
    while not reader.eof:
        f = _read_header_field(reader)
        if f is OBJECT_END_MARKER:
            if not nested:
                raise MalformedFieldError("Unexpected end of object marker")
            return obj
        if f is ARRAY_END_MARKER:
            raise MalformedFieldError("Unexpected end of array marker")
        if last is not None and not last < f:
            if last == f:
                raise MalformedFieldError(f"Duplicate field '{f.name}'")
            raise MalformedFieldError(f"Field '{f.name}' is out of canonical order")
        last = f
        if f.type_code == TypeCode.OBJECT:
            value = read_object(reader, f, nested=True, depth=depth + 1)
        elif f.type_code == TypeCode.ARRAY:
            value = read_array(reader, depth=depth + 1)
        else:
            value = decode_value(reader, f)
        obj[f] = value
    if nested:
        raise MalformedFieldError("Missing end of object marker")
    return obj


def read_array(reader: BinaryReader, depth: int = 0) -> List[STObject]:
    """Read array members up to and including the ArrayEndMarker."""
    items: List[STObject] = []
    while True:
        f = _read_header_field(reader)
        if f is ARRAY_END_MARKER:
            return items
        if f.type_code != TypeCode.OBJECT or f is OBJECT_END_MARKER:
            raise MalformedFieldError(f"Array member '{f.name}' is not an object")
        items.append(read_object(reader, f, nested=True, depth=depth))


def parse_binary(data: bytes) -> STObject:
    """
    Parse a complete canonical blob.

    Raises:
        ParseError: If the blob is empty or malformed
    """
    if not data:
        raise ParseError("Empty input")
    reader = BinaryReader(data)
    return read_object(reader)


def serialize(obj: STObject) -> str:
    """Serialize an object to upper-case hex."""
    return to_binary(obj).hex().upper()


def deserialize(text: str) -> STObject:
    """
    Parse hex text into an object. Surrounding whitespace is ignored.

    Raises:
        ParseError: If the text is not hex or does not hold a valid object
    """
    stripped = text.strip()
    if not stripped:
        raise ParseError("Empty input")
    try:
        data = binascii.unhexlify(stripped)
    except (binascii.Error, ValueError) as e:
        raise ParseError(f"Input is not hex: {e}", cause=e)
    return parse_binary(data)


__all__ = [
    "write_object",
    "to_binary",
    "read_object",
    "read_array",
    "parse_binary",
    "serialize",
    "deserialize",
]
