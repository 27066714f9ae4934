"""
JSON form of the Transaction Object Model.

Member names map one-to-one onto field names. ``parse_json`` is strict: it
rejects unknown member names and values whose JSON type does not match the
field's type, naming the offending member. ``to_json`` is its inverse for the
fields that are present; absent fields are omitted rather than written as null.
"""

from __future__ import annotations
import binascii
import json
import re
from typing import Any, Dict, List

from ..codec.amount import Amount, currency_from_json, currency_to_json
from ..codec.base58 import decode_account_id, encode_account_id
from ..codec.definitions import (
    FieldDef,
    TypeCode,
    HASH_WIDTHS,
    FIELDS_BY_NAME,
    NAMED_VALUES,
    NAMES_BY_VALUE,
    OBJECT_END_MARKER,
    ARRAY_END_MARKER,
)
from ..codec.types import PathStep
from ..runtime.errors import FieldError, JsonParseError
from .object import STObject

_UINT_BITS = {
    TypeCode.UINT8: 8,
    TypeCode.UINT16: 16,
    TypeCode.UINT32: 32,
    TypeCode.UINT64: 64,
}
_HEX_ACCOUNT_RE = re.compile(r"^[0-9A-Fa-f]{40}$")
_DECIMAL_RE = re.compile(r"[0-9]+")
_HEX_DIGITS_RE = re.compile(r"[0-9A-Fa-f]+")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _value_to_json(f: FieldDef, value: Any) -> Any:
    t = f.type_code
    if t in (TypeCode.UINT8, TypeCode.UINT16, TypeCode.UINT32):
        names = NAMES_BY_VALUE.get(f.name)
        if names and value in names:
            return names[value]
        return value
    if t == TypeCode.UINT64:
        return format(value, "016X")
    if t in HASH_WIDTHS or t == TypeCode.BLOB:
        return value.hex().upper()
    if t == TypeCode.ACCOUNT:
        return encode_account_id(value)
    if t == TypeCode.AMOUNT:
        return value.to_json()
    if t == TypeCode.OBJECT:
        return to_json(value)
    if t == TypeCode.ARRAY:
        return [{item.field.name: to_json(item)} for item in value]
    if t == TypeCode.VECTOR256:
        return [h.hex().upper() for h in value]
    if t == TypeCode.PATHSET:
        return [[_path_step_to_json(step) for step in path] for path in value]
    raise FieldError(f"Field '{f.name}' has unsupported type {t}", f.name)


def _path_step_to_json(step: PathStep) -> Dict[str, str]:
    out: Dict[str, str] = {}
    if step.account is not None:
        out["account"] = encode_account_id(step.account)
    if step.currency is not None:
        out["currency"] = currency_to_json(step.currency)
    if step.issuer is not None:
        out["issuer"] = encode_account_id(step.issuer)
    return out


def to_json(obj: STObject) -> Dict[str, Any]:
    """
    Render an object as a JSON-compatible dict.

    Args:
        obj: Object to render

    Returns:
        Dict with one member per present field, in canonical field order
    """
    return {f.name: _value_to_json(f, value) for f, value in obj.items()}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _fail(path: str, message: str) -> FieldError:
    return FieldError(f"Field '{path}' {message}", path)


def _parse_uint(f: FieldDef, value: Any, path: str) -> int:
    bits = _UINT_BITS[TypeCode(f.type_code)]
    named = NAMED_VALUES.get(f.name)
    if isinstance(value, str) and named and value in named:
        return named[value]
    if isinstance(value, bool):
        raise _fail(path, "has bad type.")
    if isinstance(value, int):
        result = value
    elif isinstance(value, str):
        digits_re, base = (_HEX_DIGITS_RE, 16) if bits == 64 else (_DECIMAL_RE, 10)
        if not digits_re.fullmatch(value):
            raise _fail(path, "has invalid data.")
        result = int(value, base)
    else:
        raise _fail(path, "has bad type.")
    if not 0 <= result < (1 << bits):
        raise _fail(path, "is out of range.")
    return result


def _parse_hex(value: Any, path: str) -> bytes:
    if not isinstance(value, str):
        raise _fail(path, "has bad type.")
    try:
        return binascii.unhexlify(value)
    except (binascii.Error, ValueError):
        raise _fail(path, "has invalid data.")


def _parse_account(value: Any, path: str) -> bytes:
    if not isinstance(value, str):
        raise _fail(path, "has bad type.")
    account = decode_account_id(value)
    if account is None and _HEX_ACCOUNT_RE.match(value):
        account = bytes.fromhex(value)
    if account is None:
        raise _fail(path, "has invalid data.")
    return account


def _parse_path_step(value: Any, path: str) -> PathStep:
    if not isinstance(value, dict):
        raise _fail(path, "has bad type.")
    extra = set(value) - {"account", "currency", "issuer", "type", "type_hex"}
    if extra:
        raise _fail(path, f"has unexpected members {sorted(extra)}.")
    try:
        step = PathStep(
            account=_parse_account(value["account"], path + ".account") if "account" in value else None,
            currency=currency_from_json(value["currency"]) if "currency" in value else None,
            issuer=_parse_account(value["issuer"], path + ".issuer") if "issuer" in value else None,
        )
    except FieldError as e:
        if e.field:
            raise
        raise _fail(path, f"has invalid data: {e.message}")
    if not step.type_flags:
        raise _fail(path, "is an empty path step.")
    return step


def _parse_value(f: FieldDef, value: Any, path: str) -> Any:
    t = f.type_code
    if t in _UINT_BITS:
        return _parse_uint(f, value, path)
    if t in HASH_WIDTHS:
        data = _parse_hex(value, path)
        if len(data) != HASH_WIDTHS[TypeCode(t)]:
            raise _fail(path, "has invalid data.")
        return data
    if t == TypeCode.BLOB:
        return _parse_hex(value, path)
    if t == TypeCode.ACCOUNT:
        return _parse_account(value, path)
    if t == TypeCode.AMOUNT:
        try:
            return Amount.from_json(value)
        except FieldError as e:
            raise _fail(path, f"has invalid data: {e.message}")
    if t == TypeCode.OBJECT:
        return _parse_object(value, path, f)
    if t == TypeCode.ARRAY:
        return _parse_array(value, path)
    if t == TypeCode.VECTOR256:
        if not isinstance(value, list):
            raise _fail(path, "has bad type.")
        hashes = []
        for i, item in enumerate(value):
            h = _parse_hex(item, f"{path}[{i}]")
            if len(h) != 32:
                raise _fail(f"{path}[{i}]", "has invalid data.")
            hashes.append(h)
        return hashes
    if t == TypeCode.PATHSET:
        if not isinstance(value, list) or not value:
            raise _fail(path, "has bad type.")
        paths = []
        for i, p in enumerate(value):
            if not isinstance(p, list) or not p:
                raise _fail(f"{path}[{i}]", "has bad type.")
            paths.append([_parse_path_step(s, f"{path}[{i}][{j}]") for j, s in enumerate(p)])
        return paths
    raise _fail(path, "has unsupported type.")


def _parse_array(value: Any, path: str) -> List[STObject]:
    if not isinstance(value, list):
        raise _fail(path, "must be an array.")
    items = []
    for i, entry in enumerate(value):
        item_path = f"{path}[{i}]"
        if not isinstance(entry, dict) or len(entry) != 1:
            raise _fail(item_path, "must be an object with a single member.")
        (name, inner), = entry.items()
        f = FIELDS_BY_NAME.get(name)
        if f is None:
            raise FieldError(f"Field '{item_path}.{name}' is unknown.", f"{item_path}.{name}")
        if f.type_code != TypeCode.OBJECT or f is OBJECT_END_MARKER:
            raise _fail(f"{item_path}.{name}", "is not an object field.")
        items.append(_parse_object(inner, f"{item_path}.{name}", f))
    return items


def _parse_object(value: Any, path: str, field: FieldDef = None) -> STObject:
    if not isinstance(value, dict):
        raise _fail(path or "<root>", "must be an object.")
    obj = STObject(field=field)
    for name, member in value.items():
        member_path = f"{path}.{name}" if path else name
        f = FIELDS_BY_NAME.get(name)
        if f is None:
            raise FieldError(f"Field '{member_path}' is unknown.", member_path)
        if f is OBJECT_END_MARKER or f is ARRAY_END_MARKER:
            raise _fail(member_path, "is a marker and cannot be set.")
        obj[f] = _parse_value(f, member, member_path)
    return obj


def parse_json(value: Any) -> STObject:
    """
    Build an object from a parsed JSON value.

    Args:
        value: A dict whose member names are field names

    Returns:
        Parsed object

    Raises:
        FieldError: Naming the member that is unknown or mistyped
    """
    return _parse_object(value, "")


def parse_json_text(text: str) -> STObject:
    """
    Build an object from JSON text.

    Raises:
        JsonParseError: If the text is not a JSON object
        FieldError: If a member is unknown or mistyped
    """
    try:
        value = json.loads(text)
    except (TypeError, ValueError) as e:
        raise JsonParseError(f"Unable to parse JSON: {e}", cause=e)
    if not isinstance(value, dict):
        raise JsonParseError("JSON input is not an object")
    return parse_json(value)


__all__ = [
    "to_json",
    "parse_json",
    "parse_json_text",
]
