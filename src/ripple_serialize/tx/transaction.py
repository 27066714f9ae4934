"""
Transaction wrapper.

A ``Transaction`` is an ``STObject`` that holds the fields every transaction
needs. It computes the transaction ID and adds it to the JSON form as
``hash``. A ``hash`` member in the input is dropped since it is derived.
"""

from __future__ import annotations
import logging
from typing import Any, Dict

from ..codec.binary import deserialize, to_binary
from ..codec.hashes import transaction_id
from ..runtime.errors import MissingFieldError, ParseError
from .json_codec import parse_json_text, to_json
from .object import STObject

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("TransactionType", "Account", "Sequence", "Fee")


class Transaction:
    """
    A transaction object.

    Attributes:
        object: The underlying fields; signing mutates it in place
    """

    def __init__(self, obj: STObject):
        """
        Wrap an object as a transaction.

        Raises:
            MissingFieldError: If a common transaction field is absent
        """
        for name in REQUIRED_FIELDS:
            if name not in obj:
                raise MissingFieldError(f"Field '{name}' is required but missing.", name)
        obj.make_field_absent("hash")
        self.object = obj

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Transaction):
            return NotImplemented
        return self.object == other.object

    def __repr__(self) -> str:
        return f"Transaction({self.object!r})"

    @property
    def txid(self) -> bytes:
        """SHA-512-half of the TXN prefix and the full serialization."""
        return transaction_id(to_binary(self.object))

    def serialize(self) -> str:
        return to_binary(self.object).hex().upper()

    def to_json(self) -> Dict[str, Any]:
        """JSON form of the fields plus the computed ``hash``."""
        result = to_json(self.object)
        result["hash"] = self.txid.hex().upper()
        return result


def make_transaction(text: str) -> Transaction:
    """
    Build a transaction from hex or JSON text.

    The text is tried as hex first, then as JSON.

    Raises:
        ParseError: If the text is neither valid hex nor a JSON object
        FieldError: If the JSON names an unknown or mistyped field, or a
            required field is missing
    """
    stripped = text.strip()
    try:
        obj = deserialize(stripped)
    except ParseError as e:
        logger.debug(f"Input is not a serialized object ({e}), trying JSON")
        obj = parse_json_text(stripped)
    return Transaction(obj)


__all__ = [
    "REQUIRED_FIELDS",
    "Transaction",
    "make_transaction",
]
