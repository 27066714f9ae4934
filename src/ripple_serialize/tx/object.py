"""
Transaction Object Model.

``STObject`` is an ordered, typed mapping from field definitions to values.
Whatever the insertion order, iteration always yields fields in ascending
(type code, field code) order, which is the order the canonical binary format
requires. Objects held inside an array carry the name of their wrapping field
(for example ``Signer`` inside ``Signers``).
"""

from __future__ import annotations
import copy
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from ..codec.definitions import FieldDef, TypeCode, FIELDS_BY_NAME
from ..codec.types import check_leaf_value
from ..runtime.errors import FieldError

FieldKey = Union[str, FieldDef]


def resolve_field(key: FieldKey) -> FieldDef:
    """
    Turn a field name or definition into a definition.

    Raises:
        FieldError: If the name is not a known field
    """
    if isinstance(key, FieldDef):
        return key
    try:
        return FIELDS_BY_NAME[key]
    except KeyError:
        raise FieldError(f"Field '{key}' is unknown.", key)


class STObject:
    """
    A typed field container.

    Attributes:
        field: Wrapping field for objects stored in an array or as a nested
            object value; None for a top-level object
    """

    def __init__(self, values: Optional[Mapping[FieldKey, Any]] = None,
                 field: Optional[FieldKey] = None):
        self._values: Dict[FieldDef, Any] = {}
        self.field: Optional[FieldDef] = None
        if field is not None:
            wrapper = resolve_field(field)
            if wrapper.type_code != TypeCode.OBJECT:
                raise FieldError(f"Field '{wrapper.name}' is not an object field", wrapper.name)
            self.field = wrapper
        for key, value in (values or {}).items():
            self[key] = value

    def __getitem__(self, key: FieldKey) -> Any:
        f = resolve_field(key)
        try:
            return self._values[f]
        except KeyError:
            raise FieldError(f"Field '{f.name}' is not present.", f.name)

    def __setitem__(self, key: FieldKey, value: Any) -> None:
        f = resolve_field(key)
        _check_value(f, value)
        if f.type_code == TypeCode.OBJECT and value.field is None:
            value.field = f
        self._values[f] = value

    def __delitem__(self, key: FieldKey) -> None:
        f = resolve_field(key)
        try:
            del self._values[f]
        except KeyError:
            raise FieldError(f"Field '{f.name}' is not present.", f.name)

    def __contains__(self, key: FieldKey) -> bool:
        return resolve_field(key) in self._values

    def __iter__(self) -> Iterator[FieldDef]:
        return iter(sorted(self._values))

    def __len__(self) -> int:
        return len(self._values)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, STObject):
            return NotImplemented
        return self.field == other.field and self._values == other._values

    def __repr__(self) -> str:
        inner = ", ".join(f"{f.name}={v!r}" for f, v in self.items())
        name = f"{self.field.name}: " if self.field else ""
        return f"STObject({name}{inner})"

    def get(self, key: FieldKey, default: Any = None) -> Any:
        return self._values.get(resolve_field(key), default)

    def items(self) -> List[Tuple[FieldDef, Any]]:
        """Return (field, value) pairs in canonical order."""
        return sorted(self._values.items(), key=lambda kv: kv[0])

    def is_field_present(self, key: FieldKey) -> bool:
        return key in self

    def make_field_absent(self, key: FieldKey) -> None:
        """Remove a field if it is present."""
        self._values.pop(resolve_field(key), None)

    def copy(self) -> STObject:
        """Return a deep copy."""
        return copy.deepcopy(self)


def _check_value(f: FieldDef, value: Any) -> None:
    if f.type_code == TypeCode.OBJECT:
        if f.name in ("ObjectEndMarker",):
            raise FieldError(f"Field '{f.name}' cannot hold a value", f.name)
        if not isinstance(value, STObject):
            raise FieldError(f"Field '{f.name}' expects an object", f.name)
    elif f.type_code == TypeCode.ARRAY:
        if f.name in ("ArrayEndMarker",):
            raise FieldError(f"Field '{f.name}' cannot hold a value", f.name)
        if not isinstance(value, list):
            raise FieldError(f"Field '{f.name}' expects an array", f.name)
        for item in value:
            if not isinstance(item, STObject) or item.field is None:
                raise FieldError(
                    f"Field '{f.name}' expects named objects as array members", f.name)
    else:
        check_leaf_value(f, value)


__all__ = [
    "STObject",
    "resolve_field",
]
