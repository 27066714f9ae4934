"""
ripple-serialize facade.

The operations a front end needs, each taking and returning plain text,
dicts and keys. Errors propagate as ``RippleSerializeError`` subclasses;
presenting them is up to the caller.

Example:
    ```python
    from ripple_serialize import facade

    key = facade.create_key("ed25519", "masterpassphrase")
    signed = facade.sign_single(tx_json_text, key)
    blob = facade.serialize_from_json(json.dumps(signed))
    ```
"""

from __future__ import annotations
from typing import Any, Dict, Optional, Union

from .codec.binary import deserialize, serialize
from .crypto.key_type import KeyType
from .keys.keyfile import KeyFileRecord, PathLike
from .keys.ripple_key import RippleKey
from .signers.signer import multi_sign, single_sign
from .tx.json_codec import parse_json_text, to_json
from .tx.transaction import Transaction, make_transaction


def serialize_from_json(text: str) -> str:
    """
    Serialize JSON text to upper-case hex.

    Raises:
        JsonParseError: If the text is not a JSON object
        FieldError: If a member is unknown or mistyped
    """
    return serialize(parse_json_text(text))


def deserialize_to_json(text: str) -> Dict[str, Any]:
    """
    Deserialize hex text to its JSON form.

    Raises:
        ParseError: If the text is not hex or not a valid object
    """
    return to_json(deserialize(text))


def _as_transaction(tx: Union[str, Transaction]) -> Transaction:
    return tx if isinstance(tx, Transaction) else make_transaction(tx)


def sign_single(tx: Union[str, Transaction], key: RippleKey) -> Dict[str, Any]:
    """
    Sign a transaction for submission.

    Args:
        tx: Hex or JSON text, or a transaction already parsed with
            ``make_transaction``; a parsed transaction is signed in place
        key: Signing key

    Returns:
        JSON form of the signed transaction, including its ``hash``
    """
    tx = _as_transaction(tx)
    single_sign(tx, key)
    return tx.to_json()


def sign_multi(tx: Union[str, Transaction], key: RippleKey) -> Dict[str, Any]:
    """
    Add a multi-signature to a transaction given as text or already parsed.

    Returns:
        JSON form of the transaction with the key's signer entry
    """
    tx = _as_transaction(tx)
    multi_sign(tx, key)
    return tx.to_json()


def create_key(key_type: Optional[Union[KeyType, str]] = None,
               seed_text: Optional[str] = None) -> RippleKey:
    """
    Create a key.

    Args:
        key_type: Key type; SECP256K1 when omitted
        seed_text: Seed or passphrase; a random seed when omitted

    Raises:
        InvalidKeyTypeError: If key_type is not a known key type
        SeedParseError: If seed_text cannot be used as a seed
    """
    return RippleKey.from_options(key_type, seed_text)


def repair_key_file(key: RippleKey, path: Optional[PathLike] = None) -> KeyFileRecord:
    """
    Recompute every key file member from the key.

    Args:
        key: Key loaded from the file
        path: When given, the record is written there

    Returns:
        The fresh record
    """
    if path is None:
        return key.to_record()
    return key.write_to_file(path)


__all__ = [
    "Transaction",
    "serialize_from_json",
    "deserialize_to_json",
    "make_transaction",
    "sign_single",
    "sign_multi",
    "create_key",
    "repair_key_file",
]
