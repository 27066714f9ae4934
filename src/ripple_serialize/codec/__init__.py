"""
Ledger binary codec.

Provides the canonical field encoding used by the ledger protocol.

Key components:
- writer.py / reader.py: field headers, length prefixes and fixed-width integers
- definitions.py: type codes and the field table, which fixes field order
- types.py / amount.py: payload encoding for each type code
- base58.py: base58check tokens (addresses, seeds, keys)
- hashes.py: SHA-512-half, hash prefixes and account IDs
- binary.py: whole-object serialization (import it directly)
"""

from .definitions import FieldDef, TypeCode, get_field, find_field
from .hashes import HashPrefix, sha512_half, calc_account_id
from .reader import BinaryReader
from .writer import BinaryWriter
from .amount import Amount

__all__ = [
    "FieldDef",
    "TypeCode",
    "get_field",
    "find_field",
    "HashPrefix",
    "sha512_half",
    "calc_account_id",
    "BinaryReader",
    "BinaryWriter",
    "Amount",
]
