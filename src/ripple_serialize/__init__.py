"""
ripple-serialize

Key management, canonical binary serialization and transaction signing for
the XRP Ledger.
"""

import re

from .runtime.errors import *
from .crypto.key_type import KeyType
from .codec.binary import serialize, deserialize, to_binary, parse_binary
from .tx import STObject, to_json, parse_json
from .tx.transaction import Transaction, make_transaction
from .keys import RippleKey, KeyFileRecord
from .signers import single_sign, multi_sign, check_signature, compute_signing_hash
from .facade import (
    serialize_from_json,
    deserialize_to_json,
    sign_single,
    sign_multi,
    create_key,
    repair_key_file,
)

__version__ = "0.1.0"

_SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*)(?:\.(?:0|[1-9]\d*|\d*[A-Za-z-][0-9A-Za-z-]*))*))?"
    r"(?:\+([0-9A-Za-z-]+(?:\.[0-9A-Za-z-]+)*))?$"
)


def _checked_version(version: str) -> str:
    if not _SEMVER_RE.match(version):
        raise ValueError(f"{version}: Bad version string")
    return version


VERSION = _checked_version(__version__)

__all__ = [
    "__version__",
    "VERSION",
    "KeyType",
    "serialize",
    "deserialize",
    "to_binary",
    "parse_binary",
    "STObject",
    "to_json",
    "parse_json",
    "Transaction",
    "make_transaction",
    "RippleKey",
    "KeyFileRecord",
    "single_sign",
    "multi_sign",
    "check_signature",
    "compute_signing_hash",
    "serialize_from_json",
    "deserialize_to_json",
    "sign_single",
    "sign_multi",
    "create_key",
    "repair_key_file",
    "ErrorCode",
    "RippleSerializeError",
    "ParseError",
    "FieldError",
    "SeedParseError",
    "InvalidKeyTypeError",
    "KeyFileError",
]
