"""
Transaction Object Model.

``STObject`` holds typed fields in canonical order; ``json_codec`` converts
objects to and from their JSON form. The ``Transaction`` wrapper lives in
``ripple_serialize.tx.transaction``.
"""

from .object import STObject, resolve_field
from .json_codec import to_json, parse_json, parse_json_text

__all__ = [
    "STObject",
    "resolve_field",
    "to_json",
    "parse_json",
    "parse_json_text",
]
